"""Arbitration recommendations and the single pending-recommendation slot.

The generator reads a registry snapshot and produces a ``Recommendation``
without touching any train. The operator then either accepts it (halt and
proceed orders are applied to the registry) or rejects it (it is discarded).
Only one recommendation may be outstanding at a time.
"""

import logging
import random
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Sequence, Tuple

from core.config.simulation import (
    ADVISORY_CONFIDENCE,
    ADVISORY_DELAY_SAVED_RANGE,
    ADVISORY_PROCEED_PROBABILITY,
    CONFLICT_CONFIDENCE,
    CONFLICT_DELAY_SAVED_RANGE,
    PROCEED_SPEED_FACTOR,
)
from core.conflicts import ConflictDetector
from core.metrics import MetricsAggregator
from core.registry import TrainRegistry
from core.result import Err, Ok, Result
from core.trains import Train, TrainStatus

logger = logging.getLogger(__name__)

CONFLICT_REASON = (
    "Prioritizing {name} (Priority: {priority}) to minimize junction congestion "
    "and reduce total network delay."
)
ADVISORY_REASON = (
    "Current traffic flow is optimal. Suggested minor adjustment to {name} "
    "to maintain efficiency."
)


@dataclass(frozen=True)
class Recommendation:
    """An arbitration decision awaiting operator approval."""

    proceed: Tuple[str, ...]
    halt: Tuple[str, ...]
    reason: str
    projected_delay_saved: int
    confidence: float
    conflict: bool = False
    created_at_tick: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "proceed": list(self.proceed),
            "halt": list(self.halt),
            "reason": self.reason,
            "projected_delay_saved": self.projected_delay_saved,
            "confidence": self.confidence,
            "conflict": self.conflict,
            "created_at_tick": self.created_at_tick,
        }


def select_winner(contenders: Sequence[Train]) -> Train:
    """Highest priority wins; equal priorities fall back to the lowest id."""
    return min(contenders, key=lambda t: (-t.priority, t.id))


def halt_order(train: Train) -> Train:
    return replace(train, status=TrainStatus.HALTED, speed=0)


def proceed_order(train: Train) -> Train:
    return replace(train, status=TrainStatus.MOVING, speed=train.speed * PROCEED_SPEED_FACTOR)


class RecommendationGenerator:
    """Produces recommendations and owns the pending slot.

    Args:
        detector: Conflict detector used to find the contention set
        rng: Random source for the advisory pick and delay-saved estimates.
            Seed it for deterministic runs.
    """

    def __init__(
        self,
        detector: Optional[ConflictDetector] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.detector = detector or ConflictDetector()
        self.rng = rng or random.Random()
        self._pending: Optional[Recommendation] = None

    @property
    def pending(self) -> Optional[Recommendation]:
        return self._pending

    def has_pending(self) -> bool:
        return self._pending is not None

    def generate(self, trains: Sequence[Train], tick: int = 0) -> Result[Recommendation, str]:
        """Build a recommendation for ``trains`` and make it pending.

        Returns Err without side effects if one is already pending or there
        are no trains to advise on.
        """
        if self._pending is not None:
            return Err("A recommendation is already pending")
        if not trains:
            return Err("No trains to arbitrate")

        contenders = self.detector.detect(trains)
        if contenders:
            recommendation = self._resolve_conflict(contenders, tick)
        else:
            recommendation = self._advise(trains, tick)

        self._pending = recommendation
        logger.info(
            "Recommendation generated (conflict=%s): proceed=%s halt=%s",
            recommendation.conflict,
            list(recommendation.proceed),
            list(recommendation.halt),
        )
        return Ok(recommendation)

    def _resolve_conflict(self, contenders: Sequence[Train], tick: int) -> Recommendation:
        winner = select_winner(contenders)
        low, high = CONFLICT_DELAY_SAVED_RANGE
        return Recommendation(
            proceed=(winner.id,),
            halt=tuple(t.id for t in contenders if t.id != winner.id),
            reason=CONFLICT_REASON.format(name=winner.name, priority=winner.priority),
            projected_delay_saved=self.rng.randrange(low, high),
            confidence=CONFLICT_CONFIDENCE,
            conflict=True,
            created_at_tick=tick,
        )

    def _advise(self, trains: Sequence[Train], tick: int) -> Recommendation:
        chosen = self.rng.choice(list(trains))
        grant = self.rng.random() < ADVISORY_PROCEED_PROBABILITY
        low, high = ADVISORY_DELAY_SAVED_RANGE
        return Recommendation(
            proceed=(chosen.id,) if grant else (),
            halt=() if grant else (chosen.id,),
            reason=ADVISORY_REASON.format(name=chosen.name),
            projected_delay_saved=self.rng.randrange(low, high),
            confidence=ADVISORY_CONFIDENCE,
            conflict=False,
            created_at_tick=tick,
        )

    def accept(
        self, registry: TrainRegistry, metrics: MetricsAggregator
    ) -> Result[Recommendation, str]:
        """Apply the pending recommendation and clear it.

        Halted trains get speed 0, proceeding trains resume at 1.2x speed.
        Ids that no longer match a train are skipped. The conflicts-averted
        counter increments once per acceptance, whichever branch produced it.
        """
        recommendation = self._pending
        if recommendation is None:
            return Err("No pending recommendation to accept")

        for train_id in recommendation.halt:
            result = registry.upsert_by_id(train_id, halt_order)
            if result.is_err():
                logger.debug("Halt order skipped: %s", result.error)
        for train_id in recommendation.proceed:
            result = registry.upsert_by_id(train_id, proceed_order)
            if result.is_err():
                logger.debug("Proceed order skipped: %s", result.error)

        metrics.record_conflict_averted()
        metrics.recompute(registry.get())
        self._pending = None
        logger.info(
            "Recommendation accepted: proceed=%s halt=%s (conflicts averted: %d)",
            list(recommendation.proceed),
            list(recommendation.halt),
            metrics.conflicts_averted,
        )
        return Ok(recommendation)

    def reject(self) -> Result[Recommendation, str]:
        """Discard the pending recommendation without applying it."""
        recommendation = self._pending
        if recommendation is None:
            return Err("No pending recommendation to reject")
        self._pending = None
        logger.info("Recommendation rejected")
        return Ok(recommendation)

    def clear(self) -> None:
        self._pending = None
