"""Network KPIs derived from the train registry."""

import math
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Sequence

from core.config.simulation import (
    EFFICIENCY_BASELINE,
    EFFICIENCY_FLOOR,
    INITIAL_EFFICIENCY_SCORE,
)
from core.trains import Train


@dataclass(frozen=True)
class Metrics:
    """Snapshot of the dashboard KPIs.

    Everything except ``conflicts_averted`` is recomputed from the registry;
    the counter is carried over between recomputations.
    """

    total_throughput: int = 0
    average_delay: int = 0
    conflicts_averted: int = 0
    efficiency_score: int = INITIAL_EFFICIENCY_SCORE

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class MetricsAggregator:
    """Owns the current ``Metrics`` and the monotonic conflicts-averted counter."""

    def __init__(self) -> None:
        self._metrics = Metrics()

    @property
    def current(self) -> Metrics:
        return self._metrics

    @property
    def conflicts_averted(self) -> int:
        return self._metrics.conflicts_averted

    def recompute(self, trains: Sequence[Train]) -> Metrics:
        """Derive throughput, average delay and efficiency from ``trains``."""
        total_delay = sum(t.delay for t in trains)
        average_delay = _round_half_up(total_delay / len(trains)) if trains else 0

        self._metrics = Metrics(
            total_throughput=sum(1 for t in trains if t.arrived),
            average_delay=average_delay,
            conflicts_averted=self._metrics.conflicts_averted,
            efficiency_score=max(EFFICIENCY_FLOOR, EFFICIENCY_BASELINE - total_delay),
        )
        return self._metrics

    def record_conflict_averted(self) -> Metrics:
        self._metrics = replace(
            self._metrics, conflicts_averted=self._metrics.conflicts_averted + 1
        )
        return self._metrics

    def reset(self) -> None:
        self._metrics = Metrics()
