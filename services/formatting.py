"""Text rendering for the CSV log and the console stream."""

from __future__ import annotations

from datetime import datetime
from typing import List, Sequence

from models.records import Sample

TIMESTAMP_FORMAT = "%H:%M:%S"
HEADER_PREFIX = ("Time(s)", "Timestamp")


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(TIMESTAMP_FORMAT)


def format_number(value: float) -> str:
    return f"{value:.2f}"


def header_fields(column_labels: Sequence[str]) -> List[str]:
    return [*HEADER_PREFIX, *column_labels]


def row_fields(sample: Sample) -> List[str]:
    return [
        format_number(sample.elapsed),
        sample.timestamp,
        *(format_number(value) for value in sample.readings),
    ]


def format_console_line(sensor_types: Sequence[str], sample: Sample) -> str:
    """Render ``[HH:MM:SS] Type: value  Type: value  `` for one sample."""
    parts = [
        f"{sensor_type}: {format_number(value)}  "
        for sensor_type, value in zip(sensor_types, sample.readings)
    ]
    return f"[{sample.timestamp}] {''.join(parts)}"


def start_banner(output_name: str) -> str:
    return f"Logging sensor data to {output_name} ..."


def completion_banner(output_name: str) -> str:
    return f"Data logging complete. File saved as {output_name} ✅"


def stopped_banner(output_name: str, samples_written: int) -> str:
    return f"Data logging stopped after {samples_written} samples. File saved as {output_name}"
