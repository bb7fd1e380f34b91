"""RailWorld: the simulation boundary consumed by the presentation layer.

RailWorld owns every piece of mutable simulation state - the train registry,
the clock, the metrics, the pending recommendation and the random source -
and exposes the operator actions as plain synchronous methods:

    world = RailWorld(seed=42)
    world.start_simulation()
    world.tick()
    world.request_recommendation()
    world.accept_recommendation()
    world.inject_disruption("F205", 5)
    state = world.get_state()

RailWorld does not schedule ticks itself. ``running`` is the scheduling flag
read by whatever drives the clock (``backend.simulation_runner`` in the web
backend, or a plain loop in tests).
"""

import logging
import random
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Tuple

from core.config.simulation_config import SimulationConfig
from core.conflicts import ConflictDetector
from core.disruptions import DisruptionInjector
from core.metrics import Metrics, MetricsAggregator
from core.recommendations import Recommendation, RecommendationGenerator
from core.registry import TrainRegistry
from core.result import Result
from core.scenario import create_default_trains
from core.tick_engine import SimulationClock, TickEngine, format_clock
from core.trains import Train

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorldState:
    """Read-only snapshot for display."""

    tick: int
    trains: Tuple[Train, ...]
    metrics: Metrics
    pending_recommendation: Optional[Recommendation]
    running: bool

    @property
    def clock(self) -> str:
        return format_clock(self.tick)


class RailWorld:
    """Single-junction rail simulation.

    Args:
        trains: Initial trains; defaults to the built-in four-train scenario
        config: Simulation configuration (seed, junction, tick period)
        rng: Shared random source; takes precedence over ``seed``
        seed: Seed for a private random source when ``rng`` is not given
    """

    def __init__(
        self,
        trains: Optional[Iterable[Train]] = None,
        config: Optional[SimulationConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.config = config or SimulationConfig()
        if seed is not None:
            self.config = self.config.with_overrides(seed=seed)

        self.rng = rng or random.Random(self.config.seed)
        self.running = False

        initial = list(trains) if trains is not None else None
        self._train_factory: Callable[[], Iterable[Train]] = (
            (lambda: initial) if initial is not None else create_default_trains
        )

        junction = self.config.junction
        self.detector = ConflictDetector(
            track=junction.track, zone_start=junction.zone_start, zone_end=junction.zone_end
        )
        self.metrics = MetricsAggregator()
        self.clock = SimulationClock()
        self.engine = TickEngine(clock=self.clock, metrics=self.metrics)
        self.recommendations = RecommendationGenerator(detector=self.detector, rng=self.rng)
        self.registry = TrainRegistry(self._train_factory())
        self.disruptions = DisruptionInjector(self.registry)

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def start_simulation(self) -> None:
        if not self.running:
            self.running = True
            logger.info("Simulation started at %s", self.clock)

    def stop_simulation(self) -> None:
        if self.running:
            self.running = False
            logger.info("Simulation stopped at %s", self.clock)

    def tick(self) -> int:
        """Advance one tick regardless of ``running``; returns the new tick."""
        return self.engine.tick(self.registry)

    def reset(self) -> None:
        """Reinitialize registry, clock, metrics and the pending slot."""
        self.running = False
        self.clock.reset()
        self.metrics.reset()
        self.recommendations.clear()
        if self.config.seed is not None:
            self.rng.seed(self.config.seed)
        self.registry = TrainRegistry(self._train_factory())
        self.disruptions = DisruptionInjector(self.registry)
        logger.info("Simulation reset (%d trains)", len(self.registry))

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_state(self) -> WorldState:
        return WorldState(
            tick=self.clock.tick,
            trains=self.registry.get(),
            metrics=self.metrics.current,
            pending_recommendation=self.recommendations.pending,
            running=self.running,
        )

    def detect_conflicts(self) -> Tuple[Train, ...]:
        return self.detector.detect(self.registry.get())

    # ------------------------------------------------------------------
    # Operator actions
    # ------------------------------------------------------------------

    def request_recommendation(self) -> Result[Recommendation, str]:
        result = self.recommendations.generate(self.registry.get(), tick=self.clock.tick)
        if result.is_err():
            logger.debug("Recommendation request ignored: %s", result.error)
        return result

    def accept_recommendation(self) -> Result[Recommendation, str]:
        result = self.recommendations.accept(self.registry, self.metrics)
        if result.is_err():
            logger.debug("Accept ignored: %s", result.error)
        return result

    def reject_recommendation(self) -> Result[Recommendation, str]:
        result = self.recommendations.reject()
        if result.is_err():
            logger.debug("Reject ignored: %s", result.error)
        return result

    def inject_disruption(self, train_id: str, minutes: Any) -> Result[Train, str]:
        result = self.disruptions.inject(train_id, minutes)
        if result.is_err():
            logger.debug("Disruption ignored: %s", result.error)
        return result
