"""Discrete-time tick engine and simulation clock."""

import logging
from typing import Optional

from core.metrics import MetricsAggregator
from core.registry import TrainRegistry
from core.trains import Train

logger = logging.getLogger(__name__)


def format_clock(tick: int) -> str:
    """Render a tick count as ``MM:SS`` (one tick per second)."""
    minutes, seconds = divmod(tick, 60)
    return f"{minutes:02d}:{seconds:02d}"


class SimulationClock:
    """Monotonically increasing tick counter."""

    def __init__(self) -> None:
        self._tick = 0

    @property
    def tick(self) -> int:
        return self._tick

    def advance(self) -> int:
        self._tick += 1
        return self._tick

    def reset(self) -> None:
        self._tick = 0

    def __str__(self) -> str:
        return format_clock(self._tick)


def advance_train(train: Train) -> Train:
    """Per-train tick rule; never changes status."""
    return train.advanced()


class TickEngine:
    """Advances simulated time by one unit per ``tick()`` call.

    Order within a tick: clock, then positions, then metrics. Correctness
    depends only on the number of ticks, never on wall-clock timing.
    """

    def __init__(
        self,
        clock: Optional[SimulationClock] = None,
        metrics: Optional[MetricsAggregator] = None,
    ) -> None:
        self.clock = clock or SimulationClock()
        self.metrics = metrics or MetricsAggregator()

    def tick(self, registry: TrainRegistry) -> int:
        now = self.clock.advance()
        registry.apply_all(advance_train)
        self.metrics.recompute(registry.get())
        logger.debug("Tick %d complete", now)
        return now
