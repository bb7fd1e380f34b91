"""State serialization helpers for SimulationRunner.

This module contains functions for building state payloads from a
``WorldState`` snapshot. Extracted from SimulationRunner to reduce class size.
"""

from typing import Optional

from backend.state_payloads import (
    FullStatePayload,
    MetricsPayload,
    RecommendationPayload,
    TrainSnapshot,
)
from core.conflicts import ConflictDetector
from core.metrics import Metrics
from core.recommendations import Recommendation
from core.trains import Train
from core.world import WorldState


def build_train_snapshot(train: Train, detector: Optional[ConflictDetector] = None) -> TrainSnapshot:
    return TrainSnapshot(
        id=train.id,
        name=train.name,
        category=train.category.value,
        priority=train.priority,
        position=train.position,
        target_position=train.target_position,
        speed=train.speed,
        delay=train.delay,
        status=train.status.value,
        track=train.track,
        in_junction_zone=detector.in_approach_zone(train) if detector else False,
    )


def build_metrics_payload(metrics: Metrics) -> MetricsPayload:
    return MetricsPayload(
        total_throughput=metrics.total_throughput,
        average_delay=metrics.average_delay,
        conflicts_averted=metrics.conflicts_averted,
        efficiency_score=metrics.efficiency_score,
    )


def build_recommendation_payload(
    recommendation: Optional[Recommendation],
) -> Optional[RecommendationPayload]:
    if recommendation is None:
        return None
    return RecommendationPayload(
        proceed=list(recommendation.proceed),
        halt=list(recommendation.halt),
        reason=recommendation.reason,
        projected_delay_saved=recommendation.projected_delay_saved,
        confidence=recommendation.confidence,
        conflict=recommendation.conflict,
        created_at_tick=recommendation.created_at_tick,
    )


def build_full_state(
    state: WorldState,
    detector: Optional[ConflictDetector] = None,
    tick_seconds: Optional[float] = None,
) -> FullStatePayload:
    """Create a FullStatePayload from a world snapshot."""
    contention = [t.id for t in detector.detect(state.trains)] if detector else []
    return FullStatePayload(
        tick=state.tick,
        clock=state.clock,
        running=state.running,
        trains=[build_train_snapshot(t, detector) for t in state.trains],
        metrics=build_metrics_payload(state.metrics),
        pending_recommendation=build_recommendation_payload(state.pending_recommendation),
        tick_seconds=tick_seconds,
        contention=contention,
    )
