"""Fixed-interval sampling loop writing to a CSV log and the console."""

from __future__ import annotations

import csv
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Sequence, TextIO

from models.records import Sample
from models.schemas import RunSummary
from sensors.registry import SensorRegistry
from services.aggregator import Aggregator
from services.formatting import (
    completion_banner,
    format_console_line,
    format_timestamp,
    header_fields,
    row_fields,
    start_banner,
    stopped_banner,
)
from settings import DEFAULT_INTERVAL, DEFAULT_TIME_STEP

logger = logging.getLogger(__name__)

_WAIT_SLICE = 0.1


class SamplerError(RuntimeError):
    """Raised when the output log cannot be opened or written."""


class Sampler:
    """
    Drives a registry for a fixed number of iterations.

    Each iteration reads every sensor once, appends one CSV row, prints one
    console line and then waits ``interval`` seconds. ``stop()`` only sets a
    flag, so it is safe to call from a signal handler; the wait polls that
    flag and the run ends after the current sample with the log closed.
    """

    def __init__(
        self,
        registry: SensorRegistry,
        output_path: Path,
        interval: float = DEFAULT_INTERVAL,
        time_step: float = DEFAULT_TIME_STEP,
        console: Callable[[str], None] = print,
        clock: Callable[[], datetime] = datetime.now,
        aggregator: Aggregator | None = None,
    ) -> None:
        if interval < 0:
            raise ValueError("Sampling interval must not be negative.")
        if time_step < 0:
            raise ValueError("Time step must not be negative.")
        self.registry = registry
        self.output_path = Path(output_path)
        self.interval = interval
        self.time_step = time_step
        self.console = console
        self.clock = clock
        self.aggregator = aggregator or Aggregator()
        self._stop_requested = False

    def stop(self) -> None:
        self._stop_requested = True

    @property
    def stopped(self) -> bool:
        return self._stop_requested

    def take_sample(self, index: int) -> Sample:
        readings = tuple(self.registry.read_all())
        return Sample(
            elapsed=index * self.time_step,
            timestamp=format_timestamp(self.clock()),
            readings=readings,
        )

    def run(self, sample_count: int) -> RunSummary:
        if sample_count < 0:
            raise ValueError("Sample count must not be negative.")

        self._stop_requested = False
        started_at = datetime.now(timezone.utc)
        labels = self.registry.get_column_labels()
        sensor_types = self.registry.get_sensor_types()
        output_name = str(self.output_path)
        samples: List[Sample] = []

        handle = self._open_output()
        try:
            writer = csv.writer(handle, lineterminator="\n")
            self._write_row(handle, writer, header_fields(labels))
            self.console(start_banner(output_name))
            logger.info(
                "Sampling started",
                extra={"output_path": output_name, "sample_count": sample_count},
            )

            for index in range(sample_count):
                if self.stopped:
                    break
                sample = self.take_sample(index)
                self._write_row(handle, writer, row_fields(sample))
                self.console(
                    format_console_line(self.registry.get_sensor_types(), sample)
                )
                samples.append(sample)
                logger.debug(
                    "Sample written",
                    extra={"sample_index": index, "elapsed": sample.elapsed},
                )
                self._wait(self.interval)
        except BaseException:
            self._discard_output(handle)
            raise
        self._close_output(handle)

        completed = len(samples) == sample_count
        if completed:
            self.console(completion_banner(output_name))
        else:
            self.console(stopped_banner(output_name, len(samples)))
            logger.warning(
                "Sampling stopped early",
                extra={"output_path": output_name, "sample_count": len(samples)},
            )

        summary = self.aggregator.aggregate(labels, samples)
        return RunSummary(
            output_path=output_name,
            requested_samples=sample_count,
            samples_written=summary.row_count,
            completed=completed,
            started_at=started_at,
            finished_at=datetime.now(timezone.utc),
            sensor_types=sensor_types,
            columns=[column.to_stats() for column in summary.columns],
        )

    def _wait(self, seconds: float) -> None:
        deadline = time.monotonic() + seconds
        while not self._stop_requested:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return
            time.sleep(min(remaining, _WAIT_SLICE))

    def _open_output(self) -> TextIO:
        try:
            return self.output_path.open("w", encoding="utf-8", newline="")
        except OSError as exc:
            logger.error(
                "Cannot open sensor log",
                extra={"output_path": str(self.output_path), "reason": exc.strerror},
            )
            raise SamplerError(f"Cannot open {self.output_path}: {exc}") from exc

    def _write_row(self, handle: TextIO, writer, fields: Sequence[str]) -> None:
        try:
            writer.writerow(fields)
            handle.flush()
        except OSError as exc:
            logger.error(
                "Cannot write sensor log",
                extra={"output_path": str(self.output_path), "reason": exc.strerror},
            )
            raise SamplerError(f"Cannot write to {self.output_path}: {exc}") from exc

    def _close_output(self, handle: TextIO) -> None:
        try:
            handle.close()
        except OSError as exc:
            logger.error(
                "Cannot close sensor log",
                extra={"output_path": str(self.output_path), "reason": exc.strerror},
            )
            raise SamplerError(f"Cannot write to {self.output_path}: {exc}") from exc

    def _discard_output(self, handle: TextIO) -> None:
        # Rows still buffered after a failed write fail again on close; the
        # first error is the one that propagates.
        try:
            handle.close()
        except OSError:
            logger.debug(
                "Dropped unflushed rows on close",
                extra={"output_path": str(self.output_path)},
            )
