from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

from sensors.registry import DEFAULT_SENSOR_KINDS
from settings import get_settings


@dataclass(frozen=True)
class RunConfig:
    output_path: Path
    sample_count: int
    interval: float
    time_step: float
    seed: Optional[int]
    sensor_kinds: Tuple[str, ...] = DEFAULT_SENSOR_KINDS


def load_config(
    output_path: Optional[Path] = None,
    sample_count: Optional[int] = None,
    interval: Optional[float] = None,
    time_step: Optional[float] = None,
    seed: Optional[int] = None,
    sensor_kinds: Optional[Sequence[str]] = None,
) -> RunConfig:
    """Merge command-line overrides over environment settings."""
    settings = get_settings()
    return RunConfig(
        output_path=output_path if output_path is not None else Path(settings.output_path),
        sample_count=sample_count if sample_count is not None else settings.sample_count,
        interval=interval if interval is not None else settings.interval,
        time_step=time_step if time_step is not None else settings.time_step,
        seed=seed if seed is not None else settings.seed,
        sensor_kinds=tuple(sensor_kinds) if sensor_kinds else DEFAULT_SENSOR_KINDS,
    )
