"""Lightweight data transfer objects for simulation state serialization."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _compact_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of *data* with None values removed."""
    return {k: v for k, v in data.items() if v is not None}


@dataclass
class TrainSnapshot:
    """Minimal snapshot of a train for client rendering."""

    id: str
    name: str
    category: str
    priority: int
    position: float
    target_position: float
    speed: float
    delay: int
    status: str
    track: int
    in_junction_zone: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "priority": self.priority,
            "position": self.position,
            "target_position": self.target_position,
            "speed": self.speed,
            "delay": self.delay,
            "status": self.status,
            "track": self.track,
            "in_junction_zone": self.in_junction_zone,
        }


@dataclass
class MetricsPayload:
    total_throughput: int
    average_delay: int
    conflicts_averted: int
    efficiency_score: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_throughput": self.total_throughput,
            "average_delay": self.average_delay,
            "conflicts_averted": self.conflicts_averted,
            "efficiency_score": self.efficiency_score,
        }


@dataclass
class RecommendationPayload:
    proceed: List[str]
    halt: List[str]
    reason: str
    projected_delay_saved: int
    confidence: float
    conflict: bool
    created_at_tick: int

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


@dataclass
class FullStatePayload:
    """Complete state sent to the operator console."""

    tick: int
    clock: str
    running: bool
    trains: List[TrainSnapshot]
    metrics: MetricsPayload
    pending_recommendation: Optional[RecommendationPayload] = None
    tick_seconds: Optional[float] = None
    contention: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "type": "full",
            "tick": self.tick,
            "clock": self.clock,
            "running": self.running,
            "trains": [t.to_dict() for t in self.trains],
            "metrics": self.metrics.to_dict(),
            "pending_recommendation": (
                self.pending_recommendation.to_dict() if self.pending_recommendation else None
            ),
            "contention": list(self.contention),
        }
        if self.tick_seconds is not None:
            data["tick_seconds"] = self.tick_seconds
        return data


@dataclass
class CommandResultPayload:
    """Outcome of an operator command plus the state it produced."""

    success: bool
    state: FullStatePayload
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact_dict(
            {
                "success": self.success,
                "error": self.error,
                "state": self.state.to_dict(),
            }
        )
