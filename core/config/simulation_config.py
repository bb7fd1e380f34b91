"""Lightweight simulation configuration helpers."""

import os
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from core.config.simulation import (
    DEFAULT_TICK_SECONDS,
    JUNCTION_TRACK,
    JUNCTION_ZONE_END,
    JUNCTION_ZONE_START,
)
from core.exceptions import ConfigurationError


@dataclass
class JunctionConfig:
    """Where contention is checked on the normalized axis."""

    track: int = JUNCTION_TRACK
    zone_start: float = JUNCTION_ZONE_START
    zone_end: float = JUNCTION_ZONE_END


@dataclass
class SimulationConfig:
    """Configuration toggles for simulation runtime behavior.

    Attributes:
        seed: Optional seed for the shared random source.
        tick_seconds: Wall-clock interval between ticks in the runner.
        junction: Junction track and approach zone.
    """

    seed: Optional[int] = None
    tick_seconds: float = DEFAULT_TICK_SECONDS
    junction: JunctionConfig = field(default_factory=JunctionConfig)

    def __post_init__(self) -> None:
        if self.tick_seconds <= 0:
            raise ConfigurationError(f"tick_seconds must be positive, got {self.tick_seconds}")
        if self.junction.zone_start >= self.junction.zone_end:
            raise ConfigurationError(
                f"Empty junction zone ({self.junction.zone_start}, {self.junction.zone_end})"
            )

    @classmethod
    def from_env(cls) -> "SimulationConfig":
        """Build a config from ``RAILOPTIC_SEED`` and ``RAILOPTIC_TICK_SECONDS``."""
        raw_seed = os.getenv("RAILOPTIC_SEED")
        raw_tick = os.getenv("RAILOPTIC_TICK_SECONDS")

        seed = None
        if raw_seed:
            try:
                seed = int(raw_seed)
            except ValueError as e:
                raise ConfigurationError(f"RAILOPTIC_SEED must be an integer: {raw_seed!r}") from e

        tick_seconds = DEFAULT_TICK_SECONDS
        if raw_tick:
            try:
                tick_seconds = float(raw_tick)
            except ValueError as e:
                raise ConfigurationError(
                    f"RAILOPTIC_TICK_SECONDS must be a number: {raw_tick!r}"
                ) from e

        return cls(seed=seed, tick_seconds=tick_seconds)

    def with_overrides(self, **overrides: Any) -> "SimulationConfig":
        """Return a copy with the given top-level fields replaced."""
        return replace(self, **overrides)
