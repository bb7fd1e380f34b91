"""Junction conflict detection."""

from typing import Sequence, Tuple

from core.config.simulation import JUNCTION_TRACK, JUNCTION_ZONE_END, JUNCTION_ZONE_START
from core.trains import Train


class ConflictDetector:
    """Finds trains contending for the junction.

    A train is in contention when it runs on the junction track and its
    position lies strictly inside the approach zone. Other tracks are not
    scanned.
    """

    def __init__(
        self,
        track: int = JUNCTION_TRACK,
        zone_start: float = JUNCTION_ZONE_START,
        zone_end: float = JUNCTION_ZONE_END,
    ) -> None:
        self.track = track
        self.zone_start = zone_start
        self.zone_end = zone_end

    def in_approach_zone(self, train: Train) -> bool:
        return train.track == self.track and self.zone_start < train.position < self.zone_end

    def detect(self, trains: Sequence[Train]) -> Tuple[Train, ...]:
        """Return the contention set, or an empty tuple when there is no conflict."""
        contenders = tuple(t for t in trains if self.in_approach_zone(t))
        if len(contenders) <= 1:
            return ()
        return contenders

    def has_conflict(self, trains: Sequence[Train]) -> bool:
        return bool(self.detect(trains))


def detect(trains: Sequence[Train]) -> Tuple[Train, ...]:
    """Detect contention with the default junction settings."""
    return ConflictDetector().detect(trains)
