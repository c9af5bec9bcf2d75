"""Parse sensor logs written by the sampler back into samples."""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from models.records import Sample
from models.schemas import LogSummary, RowError
from services.aggregator import Aggregator
from services.formatting import HEADER_PREFIX

logger = logging.getLogger(__name__)


@dataclass
class LogContents:
    """Column labels, parsed samples and rejected rows of one log file."""

    labels: List[str]
    samples: List[Sample] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)


def read_log(path: Path) -> LogContents:
    """Read a sensor log, collecting malformed rows instead of failing on them."""
    with Path(path).open("r", encoding="utf-8", newline="") as handle:
        reader = csv.reader(handle)
        header = next(reader, None)
        if not header:
            raise ValueError(f"Sensor log {path} is missing a header row.")

        prefix = tuple(name.strip() for name in header[: len(HEADER_PREFIX)])
        if prefix != HEADER_PREFIX:
            raise ValueError(
                f"Sensor log {path} must start with columns: {', '.join(HEADER_PREFIX)}"
            )

        contents = LogContents(labels=[name.strip() for name in header[len(HEADER_PREFIX):]])
        expected_fields = len(header)

        for row_number, row in enumerate(reader, start=2):
            if not row:
                continue
            if len(row) != expected_fields:
                _reject(
                    contents,
                    row_number,
                    f"expected {expected_fields} fields, found {len(row)}",
                )
                continue

            elapsed_raw, timestamp_raw, *values_raw = (value.strip() for value in row)
            if not timestamp_raw:
                _reject(contents, row_number, "missing timestamp")
                continue

            try:
                elapsed = float(elapsed_raw)
                readings = tuple(float(value) for value in values_raw)
            except ValueError:
                _reject(contents, row_number, "invalid numeric value")
                continue

            contents.samples.append(
                Sample(elapsed=elapsed, timestamp=timestamp_raw, readings=readings)
            )

    return contents


def summarize_log(path: Path, aggregator: Aggregator | None = None) -> LogSummary:
    contents = read_log(path)
    summary = (aggregator or Aggregator()).aggregate(contents.labels, contents.samples)
    return LogSummary(
        path=str(path),
        row_count=summary.row_count,
        columns=[column.to_stats() for column in summary.columns],
        errors=contents.errors,
    )


def _reject(contents: LogContents, row_number: int, reason: str) -> None:
    logger.warning("Skipping malformed row", extra={"row_number": row_number, "reason": reason})
    contents.errors.append(RowError(row_number=row_number, reason=reason))
