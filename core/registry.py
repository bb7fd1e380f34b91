"""Train registry: the single owned store of train state.

Reads return snapshots (tuples of frozen ``Train`` values). Writes are
expressed as "replace the train with id X by f(X)"; the registry performs the
merge so a mutation can never touch any other train.
"""

import logging
from typing import Callable, Dict, Iterable, Iterator, Optional, Tuple

from core.exceptions import DuplicateTrainError
from core.result import Err, Ok, Result
from core.trains import Train

logger = logging.getLogger(__name__)

TrainMutation = Callable[[Train], Train]


class TrainRegistry:
    """Ordered, fixed-membership collection of trains keyed by id.

    Membership is set at construction; trains are never added or removed
    afterwards. Order is the construction order and is preserved by every
    snapshot.
    """

    def __init__(self, trains: Iterable[Train]):
        self._order: Tuple[str, ...] = ()
        self._trains: Dict[str, Train] = {}

        order = []
        for train in trains:
            if train.id in self._trains:
                raise DuplicateTrainError(f"Duplicate train id: {train.id}")
            self._trains[train.id] = train
            order.append(train.id)
        self._order = tuple(order)

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[Train]:
        return iter(self.get())

    def get(self) -> Tuple[Train, ...]:
        """Return an ordered snapshot of every train."""
        return tuple(self._trains[train_id] for train_id in self._order)

    def ids(self) -> Tuple[str, ...]:
        return self._order

    def find(self, train_id: str) -> Optional[Train]:
        return self._trains.get(train_id)

    def upsert_by_id(self, train_id: str, mutation: TrainMutation) -> Result[Train, str]:
        """Replace the train matching ``train_id`` by ``mutation(train)``.

        Args:
            train_id: Key of the train to replace
            mutation: Pure function from the current train to its successor

        Returns:
            Ok(new_train), or Err if the id is unknown or the mutation tried
            to change the train's identity or track. On Err nothing changes.
        """
        current = self._trains.get(train_id)
        if current is None:
            return Err(f"Unknown train: {train_id}")

        updated = mutation(current)
        if updated.id != current.id:
            return Err(f"Mutation changed id of {train_id} to {updated.id}")
        if updated.track != current.track:
            return Err(f"Mutation re-routed {train_id} from track {current.track} to {updated.track}")

        self._trains[train_id] = updated
        return Ok(updated)

    def apply_all(self, mutation: TrainMutation) -> None:
        """Apply ``mutation`` to every train independently."""
        for train_id in self._order:
            result = self.upsert_by_id(train_id, mutation)
            if result.is_err():
                logger.warning("Registry mutation rejected: %s", result.error)
