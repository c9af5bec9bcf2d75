"""Aggregation logic for sampled sensor columns."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from models.records import Sample
from models.schemas import ColumnStats


@dataclass
class ColumnSummary:
    """Running statistics for a single sensor column."""

    label: str
    count: int = 0
    min_value: float | None = None
    max_value: float | None = None
    total: float = 0.0

    @property
    def mean_value(self) -> float | None:
        if not self.count:
            return None
        return self.total / self.count

    def add(self, value: float) -> None:
        self.count += 1
        self.total += value
        if self.min_value is None or value < self.min_value:
            self.min_value = value
        if self.max_value is None or value > self.max_value:
            self.max_value = value

    def to_stats(self) -> ColumnStats:
        return ColumnStats(
            label=self.label,
            min_value=self.min_value,
            max_value=self.max_value,
            mean_value=self.mean_value,
        )


@dataclass
class AggregationSummary:
    """Computed statistics for a batch of samples."""

    row_count: int = 0
    columns: List[ColumnSummary] = field(default_factory=list)


class Aggregator:
    """Pure aggregation component that can be unit tested in isolation."""

    def aggregate(
        self, labels: Sequence[str], samples: Iterable[Sample]
    ) -> AggregationSummary:
        summary = AggregationSummary(columns=[ColumnSummary(label) for label in labels])

        for sample in samples:
            if len(sample.readings) != len(summary.columns):
                raise ValueError(
                    f"Sample has {len(sample.readings)} readings, "
                    f"expected {len(summary.columns)}."
                )
            summary.row_count += 1
            for column, value in zip(summary.columns, sample.readings):
                column.add(value)

        return summary
