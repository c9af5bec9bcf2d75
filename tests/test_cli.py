from __future__ import annotations

import json
import signal
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cli.app import _stop_on_signals, app, build_sampler
from sensors.registry import build_default_registry
from services.sampler import Sampler
from settings import get_settings


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for name in (
        "SENSOR_LOG_PATH",
        "SENSOR_SAMPLE_COUNT",
        "SENSOR_INTERVAL",
        "SENSOR_TIME_STEP",
        "SENSOR_SEED",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_run_writes_log_and_console(runner: CliRunner, tmp_path: Path) -> None:
    output = tmp_path / "out.csv"

    result = runner.invoke(
        app, ["run", "--samples", "3", "--interval", "0", "--output", str(output), "--seed", "5"]
    )

    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0] == f"Logging sensor data to {output} ..."
    assert sum(1 for line in lines if line.startswith("[")) == 3
    assert "Data logging complete" in lines[-1]
    rows = output.read_text(encoding="utf-8").splitlines()
    assert rows[0] == "Time(s),Timestamp,Temperature(C),Pressure(bar)"
    assert len(rows) == 4


def test_run_is_reproducible_with_seed(runner: CliRunner, tmp_path: Path) -> None:
    first = tmp_path / "first.csv"
    second = tmp_path / "second.csv"

    for path in (first, second):
        result = runner.invoke(
            app, ["run", "-n", "4", "-i", "0", "-o", str(path), "--seed", "9"]
        )
        assert result.exit_code == 0

    def values(path: Path) -> list[list[str]]:
        rows = path.read_text(encoding="utf-8").splitlines()[1:]
        return [row.split(",")[2:] for row in rows]

    assert values(first) == values(second)


def test_run_reads_environment_defaults(
    monkeypatch, runner: CliRunner, tmp_path: Path
) -> None:
    output = tmp_path / "env.csv"
    monkeypatch.setenv("SENSOR_LOG_PATH", str(output))
    monkeypatch.setenv("SENSOR_SAMPLE_COUNT", "2")
    monkeypatch.setenv("SENSOR_INTERVAL", "0")
    get_settings.cache_clear()

    result = runner.invoke(app, ["run"])

    assert result.exit_code == 0
    assert len(output.read_text(encoding="utf-8").splitlines()) == 3


def test_run_with_custom_sensors_and_json(runner: CliRunner, tmp_path: Path) -> None:
    output = tmp_path / "custom.csv"

    result = runner.invoke(
        app,
        [
            "run", "-n", "2", "-i", "0", "-o", str(output),
            "-s", "pressure", "-s", "temperature", "-s", "pressure", "--json",
        ],
    )

    assert result.exit_code == 0
    header = output.read_text(encoding="utf-8").splitlines()[0]
    assert header == "Time(s),Timestamp,Pressure(bar),Temperature(C),Pressure(bar)"
    payload = json.loads(result.stdout[result.stdout.index("{"):])
    assert payload["samples_written"] == 2
    assert payload["sensor_types"] == ["Pressure", "Temperature", "Pressure"]


def test_run_rejects_unknown_sensor(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(
        app, ["run", "-n", "1", "-i", "0", "-o", str(tmp_path / "x.csv"), "-s", "humidity"]
    )

    assert result.exit_code == 1
    assert not (tmp_path / "x.csv").exists()


def test_run_reports_unwritable_output(runner: CliRunner, tmp_path: Path) -> None:
    output = tmp_path / "missing" / "out.csv"

    result = runner.invoke(app, ["run", "-n", "1", "-i", "0", "-o", str(output)])

    assert result.exit_code == 1
    assert "Logging sensor data" not in result.stdout


def test_summarize_command(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "log.csv"
    path.write_text(
        "Time(s),Timestamp,Temperature(C),Pressure(bar)\n"
        "0.00,10:00:00,20.00,1.00\n"
        "1.00,10:00:01,bad,1.00\n",
        encoding="utf-8",
    )

    result = runner.invoke(app, ["summarize", str(path)])

    assert result.exit_code == 0
    assert "row_count: 1" in result.stdout
    assert "Temperature(C): min=20.00 max=20.00 mean=20.00" in result.stdout
    assert "row 3: invalid numeric value" in result.stdout


def test_summarize_missing_file(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["summarize", str(tmp_path / "nope.csv")])

    assert result.exit_code == 1


@pytest.mark.skipif(not Path("/dev/full").exists(), reason="needs /dev/full")
def test_run_reports_write_failure(runner: CliRunner) -> None:
    result = runner.invoke(app, ["run", "-n", "2", "-i", "0", "-o", "/dev/full"])

    assert result.exit_code == 1
    assert not isinstance(result.exception, OSError)
    assert "Fatal: Cannot write to /dev/full" in result.output


@pytest.mark.parametrize("signum", [signal.SIGINT, signal.SIGTERM])
def test_signal_stops_run_after_current_sample(tmp_path: Path, signum) -> None:
    lines: list[str] = []
    sampler = Sampler(
        registry=build_default_registry(seed=2),
        output_path=tmp_path / "signal.csv",
        interval=0,
    )

    def console(line: str) -> None:
        lines.append(line)
        if line.startswith("["):
            signal.raise_signal(signum)

    sampler.console = console
    previous = signal.getsignal(signum)

    with _stop_on_signals(sampler):
        summary = sampler.run(5)

    assert summary.completed is False
    assert summary.samples_written == 1
    assert signal.getsignal(signum) is previous
    assert len((tmp_path / "signal.csv").read_text(encoding="utf-8").splitlines()) == 2


def test_run_exits_cleanly_on_sigterm(
    monkeypatch, runner: CliRunner, tmp_path: Path
) -> None:
    def factory(config):
        sampler = build_sampler(config)
        echo = sampler.console

        def console(line: str) -> None:
            echo(line)
            if line.startswith("["):
                signal.raise_signal(signal.SIGTERM)

        sampler.console = console
        return sampler

    monkeypatch.setattr("cli.app.build_sampler", factory)
    output = tmp_path / "out.csv"

    result = runner.invoke(app, ["run", "-n", "5", "-i", "0", "-o", str(output)])

    assert result.exit_code == 0
    assert "Data logging stopped after 1 samples" in result.stdout
    assert len(output.read_text(encoding="utf-8").splitlines()) == 2
