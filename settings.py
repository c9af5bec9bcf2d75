from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_OUTPUT_PATH_ENV = "SENSOR_LOG_PATH"
_SAMPLE_COUNT_ENV = "SENSOR_SAMPLE_COUNT"
_INTERVAL_ENV = "SENSOR_INTERVAL"
_TIME_STEP_ENV = "SENSOR_TIME_STEP"
_SEED_ENV = "SENSOR_SEED"
_LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_OUTPUT_PATH = "sensor_data.csv"
DEFAULT_SAMPLE_COUNT = 20
DEFAULT_INTERVAL = 1.0
DEFAULT_TIME_STEP = 1.0


@dataclass(frozen=True)
class Settings:
    output_path: str
    sample_count: int
    interval: float
    time_step: float
    seed: Optional[int]
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_count(default: int) -> int:
    value = os.getenv(_SAMPLE_COUNT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed >= 0 else default


def _read_seconds(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed >= 0 else default


def _read_seed() -> Optional[int]:
    value = os.getenv(_SEED_ENV)
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        output_path=_read_str_env(_OUTPUT_PATH_ENV, DEFAULT_OUTPUT_PATH),
        sample_count=_read_count(DEFAULT_SAMPLE_COUNT),
        interval=_read_seconds(_INTERVAL_ENV, DEFAULT_INTERVAL),
        time_step=_read_seconds(_TIME_STEP_ENV, DEFAULT_TIME_STEP),
        seed=_read_seed(),
        log_level=_read_log_level("WARNING"),
    )
