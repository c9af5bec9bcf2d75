from __future__ import annotations

from pathlib import Path

import pytest

from services.log_reader import read_log, summarize_log


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "sensor_data.csv"
    path.write_text(content, encoding="utf-8")
    return path


def test_read_log_parses_rows(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "Time(s),Timestamp,Temperature(C),Pressure(bar)\n"
        "0.00,10:00:00,25.10,1.01\n"
        "1.00,10:00:01,26.30,0.99\n",
    )

    contents = read_log(path)

    assert contents.labels == ["Temperature(C)", "Pressure(bar)"]
    assert len(contents.samples) == 2
    assert contents.samples[1].elapsed == 1.0
    assert contents.samples[1].timestamp == "10:00:01"
    assert contents.samples[1].readings == (26.3, 0.99)
    assert contents.errors == []


def test_read_log_collects_row_errors(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "Time(s),Timestamp,Temperature(C),Pressure(bar)\n"
        "0.00,10:00:00,25.10,1.01\n"
        "1.00,10:00:01,26.30\n"
        "2.00,10:00:02,hot,1.00\n"
        "3.00,,22.00,1.00\n",
    )

    contents = read_log(path)

    assert len(contents.samples) == 1
    assert [(error.row_number, error.reason) for error in contents.errors] == [
        (3, "expected 4 fields, found 3"),
        (4, "invalid numeric value"),
        (5, "missing timestamp"),
    ]


def test_read_log_rejects_foreign_header(tmp_path: Path) -> None:
    path = _write(tmp_path, "sensor_id,timestamp,value\ns,2024-01-01T00:00:00Z,1.0\n")

    with pytest.raises(ValueError, match="Time\\(s\\)"):
        read_log(path)


def test_read_log_rejects_empty_file(tmp_path: Path) -> None:
    path = _write(tmp_path, "")

    with pytest.raises(ValueError, match="header"):
        read_log(path)


def test_summarize_log(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "Time(s),Timestamp,Temperature(C)\n"
        "0.00,10:00:00,20.00\n"
        "1.00,10:00:01,30.00\n",
    )

    summary = summarize_log(path)

    assert summary.row_count == 2
    assert summary.columns[0].label == "Temperature(C)"
    assert summary.columns[0].mean_value == 25.0
    assert summary.path == str(path)
