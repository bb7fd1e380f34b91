"""Train entity and its status/category enums.

Trains are immutable values. Every change goes through
``TrainRegistry.upsert_by_id`` which swaps the old value for a new one built
with ``dataclasses.replace``; nothing mutates a train in place.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any, Dict

from core.config.simulation import MAX_PRIORITY, MIN_PRIORITY
from core.exceptions import InvalidTrainError


class TrainStatus(Enum):
    """Operational status of a train.

    Transitions are driven from outside the tick: recommendation acceptance
    (``moving``/``halted``) and disruption injection (``delayed``).
    """

    MOVING = "moving"
    HALTED = "halted"
    DELAYED = "delayed"


class TrainCategory(Enum):
    EXPRESS = "express"
    FREIGHT = "freight"
    PASSENGER = "passenger"


@dataclass(frozen=True)
class Train:
    """A train on the normalized [0, 100] track axis.

    Attributes:
        id: Stable unique key
        name: Display label
        priority: 1..10, higher wins arbitration
        position: Current progress marker
        target_position: Where the train stops advancing
        speed: Position units per tick
        delay: Accumulated delay in minutes (never decreases)
        status: Current TrainStatus
        track: Track number, fixed at creation
        category: Descriptive train type
    """

    id: str
    name: str
    priority: int
    position: float
    target_position: float
    speed: float
    delay: int = 0
    status: TrainStatus = TrainStatus.MOVING
    track: int = 1
    category: TrainCategory = TrainCategory.PASSENGER

    def __post_init__(self) -> None:
        if not self.id:
            raise InvalidTrainError("Train id must be non-empty")
        if not MIN_PRIORITY <= self.priority <= MAX_PRIORITY:
            raise InvalidTrainError(
                f"Train {self.id}: priority {self.priority} outside [{MIN_PRIORITY}, {MAX_PRIORITY}]"
            )
        if self.speed < 0:
            raise InvalidTrainError(f"Train {self.id}: negative speed {self.speed}")
        if self.delay < 0:
            raise InvalidTrainError(f"Train {self.id}: negative delay {self.delay}")

    @property
    def arrived(self) -> bool:
        return self.position >= self.target_position

    def advanced(self) -> "Train":
        """Return this train after one tick of movement.

        Only a moving train short of its target advances, and never past it.
        """
        if self.status is not TrainStatus.MOVING or self.position >= self.target_position:
            return self
        return replace(self, position=min(self.position + self.speed, self.target_position))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        data["category"] = self.category.value
        return data
