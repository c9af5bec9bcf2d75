"""Concrete simulated sensor variants."""

from __future__ import annotations

from typing import Dict, Optional, Type

from sensors.base import Sensor, UniformSensor


class TemperatureSensor(UniformSensor):
    """Ambient temperature in degrees Celsius, 20.0 to 30.0."""

    sensor_type = "Temperature"
    unit = "C"
    low = 20.0
    high = 30.0


class PressureSensor(UniformSensor):
    """Absolute pressure in bar, 0.9 to 1.1."""

    sensor_type = "Pressure"
    unit = "bar"
    low = 0.9
    high = 1.1


SENSOR_TYPES: Dict[str, Type[Sensor]] = {
    "temperature": TemperatureSensor,
    "pressure": PressureSensor,
}


def build_sensor(kind: str, seed: Optional[int] = None) -> Sensor:
    """Instantiate a sensor variant from its lowercase name."""
    key = kind.strip().lower()
    if key not in SENSOR_TYPES:
        known = ", ".join(sorted(SENSOR_TYPES))
        raise ValueError(f"Unknown sensor type {kind!r}; expected one of: {known}")
    return SENSOR_TYPES[key](seed=seed)
