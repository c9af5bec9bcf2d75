"""Pydantic schemas for summaries rendered or dumped by the CLI."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ColumnStats(BaseModel):
    """Statistics for one sensor column."""

    label: str
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    mean_value: Optional[float] = None


class RowError(BaseModel):
    """Details about a log row that failed parsing."""

    row_number: int = Field(..., ge=1)
    reason: str


class RunSummary(BaseModel):
    """Outcome of one sampling run."""

    output_path: str
    requested_samples: int = Field(..., ge=0)
    samples_written: int = Field(..., ge=0)
    completed: bool
    started_at: datetime
    finished_at: datetime
    sensor_types: List[str] = Field(default_factory=list)
    columns: List[ColumnStats] = Field(default_factory=list)


class LogSummary(BaseModel):
    """Aggregates computed for an existing sensor log."""

    path: str
    row_count: int = Field(..., ge=0)
    columns: List[ColumnStats] = Field(default_factory=list)
    errors: List[RowError] = Field(default_factory=list)
