"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Sample:
    """One round of readings, aligned positionally with the registry order."""

    elapsed: float
    timestamp: str
    readings: Tuple[float, ...]
