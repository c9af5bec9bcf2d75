"""Simulated sensors and the registry that polls them."""

from sensors.base import Sensor
from sensors.registry import SensorRegistry, build_default_registry
from sensors.simulated import PressureSensor, TemperatureSensor, build_sensor

__all__ = [
    "Sensor",
    "SensorRegistry",
    "TemperatureSensor",
    "PressureSensor",
    "build_sensor",
    "build_default_registry",
]
