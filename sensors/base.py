"""Abstract interface shared by every simulated sensor."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Optional


class Sensor(ABC):
    """
    A logical data source producing one reading and a fixed type label.

    Each instance owns its own pseudo-random generator, so two sensors of the
    same variant never advance a shared stream. Passing ``seed`` makes the
    stream reproducible.
    """

    unit: str = ""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    @abstractmethod
    def read_value(self) -> float:
        """Return the next reading and advance the generator."""

    @abstractmethod
    def get_type(self) -> str:
        """Return the variant label, e.g. ``"Temperature"``."""

    @property
    def column_label(self) -> str:
        if not self.unit:
            return self.get_type()
        return f"{self.get_type()}({self.unit})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self.seed!r})"


class UniformSensor(Sensor):
    """Sensor whose readings are drawn uniformly from ``[low, high]``."""

    sensor_type: str = ""
    low: float = 0.0
    high: float = 1.0

    def read_value(self) -> float:
        return self._rng.uniform(self.low, self.high)

    def get_type(self) -> str:
        return self.sensor_type
