"""Result type for explicit success/failure handling.

Operator actions on the simulation never raise: a disruption with an empty
train id, a recommendation requested while one is pending, or an action
naming an unknown train all degrade to "no observable state change". Those
outcomes are returned as ``Err`` values so callers (and tests) can still see
why nothing happened.

Usage:
------
    result = world.inject_disruption("F205", 5)
    if result.is_ok():
        train = result.unwrap()
    else:
        logger.debug("Disruption ignored: %s", result.error)

    # Safe unwrap with default
    recommendation = world.request_recommendation().unwrap_or(None)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")  # Success value type
E = TypeVar("E")  # Error type


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Represents a successful operation result."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the success value."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    @property
    def error(self) -> None:
        """Ok has no error, returns None."""
        return None

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True)
class Err(Generic[E]):
    """Represents a failed (no-op) operation result.

    Example:
        def find(train_id: str) -> Result[Train, str]:
            if train_id not in trains:
                return Err(f"Unknown train: {train_id}")
            return Ok(trains[train_id])
    """

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raises ValueError since Err has no success value.

        Don't call this without checking is_ok() first!
        """
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    @property
    def value(self) -> None:
        """Err has no value, returns None."""
        return None

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Result is a union of Ok and Err
Result = Union[Ok[T], Err[E]]
