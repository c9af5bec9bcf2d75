"""Ordered collection of sensors read in bulk."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from sensors.base import Sensor
from sensors.simulated import build_sensor

DEFAULT_SENSOR_KINDS = ("temperature", "pressure")


class SensorRegistry:
    """
    Owns sensors in registration order.

    Registration order is the column order of every sample, so ``read_all``
    and ``get_sensor_types`` always return parallel lists of the same length.
    """

    def __init__(self) -> None:
        self._sensors: List[Sensor] = []

    def add_sensor(self, sensor: Sensor) -> None:
        self._sensors.append(sensor)

    def read_all(self) -> List[float]:
        return [sensor.read_value() for sensor in self._sensors]

    def get_sensor_types(self) -> List[str]:
        return [sensor.get_type() for sensor in self._sensors]

    def get_column_labels(self) -> List[str]:
        return [sensor.column_label for sensor in self._sensors]

    def __len__(self) -> int:
        return len(self._sensors)

    def __iter__(self) -> Iterator[Sensor]:
        return iter(self._sensors)


def build_default_registry(
    kinds: Iterable[str] = DEFAULT_SENSOR_KINDS,
    seed: Optional[int] = None,
) -> SensorRegistry:
    """Register the named sensor kinds in order; sensor ``i`` gets ``seed + i``."""
    registry = SensorRegistry()
    for index, kind in enumerate(kinds):
        sensor_seed = None if seed is None else seed + index
        registry.add_sensor(build_sensor(kind, seed=sensor_seed))
    return registry
