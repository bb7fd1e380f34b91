"""Core rail simulation and conflict-arbitration engine.

This package contains the pure simulation logic, with no web or threading
dependencies. Key modules include:

- world: RailWorld, the boundary consumed by the presentation layer
- registry: TrainRegistry, the single owned store of train state
- tick_engine: SimulationClock and TickEngine
- conflicts: Junction contention detection
- recommendations: Recommendation generation and accept/reject
- disruptions: Delay injection
- metrics: Throughput, delay and efficiency KPIs

Design note: this module exposes a small, explicit public API via ``__all__``.
Use direct imports from submodules for internal helpers.
"""

from core.recommendations import Recommendation
from core.trains import Train, TrainCategory, TrainStatus
from core.world import RailWorld, WorldState

# Public API of the core package. Keep this list intentionally small.
__all__ = [
    "RailWorld",
    "Recommendation",
    "Train",
    "TrainCategory",
    "TrainStatus",
    "WorldState",
]
