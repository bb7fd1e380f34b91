"""Exogenous delay events applied to a single train."""

import logging
import math
import re
from dataclasses import replace
from typing import Any, Optional

from core.registry import TrainRegistry
from core.result import Err, Result
from core.trains import Train, TrainStatus

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def coerce_minutes(value: Any) -> Optional[int]:
    """Interpret an operator-supplied delay as whole minutes.

    Reads the value the way a numeric form field is parsed: fractions are
    truncated toward zero and a string contributes its leading integer
    (``"2.5"`` and ``"5 min"`` give 2 and 5). Booleans, non-finite numbers and
    strings without leading digits yield None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    return None


class DisruptionInjector:
    """Adds delay to a named train and marks it delayed."""

    def __init__(self, registry: TrainRegistry) -> None:
        self.registry = registry

    def inject(self, train_id: str, extra_delay_minutes: Any) -> Result[Train, str]:
        """Apply a disruption.

        Args:
            train_id: Train to disrupt; must be non-empty
            extra_delay_minutes: Minutes to add; must be a positive integer

        Returns:
            Ok(updated train), or Err when the input is invalid or the train
            is unknown. Position, speed and all other trains are untouched.
        """
        if not train_id:
            return Err("Disruption requires a train id")

        minutes = coerce_minutes(extra_delay_minutes)
        if minutes is None or minutes <= 0:
            return Err(f"Disruption delay must be a positive number of minutes, got {extra_delay_minutes!r}")

        def disrupt(train: Train) -> Train:
            return replace(train, delay=train.delay + minutes, status=TrainStatus.DELAYED)

        result = self.registry.upsert_by_id(train_id, disrupt)
        if result.is_ok():
            logger.info("Disruption injected: %s +%d min (total delay %d)", train_id, minutes, result.value.delay)
        return result
