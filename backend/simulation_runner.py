"""Background simulation runner thread."""

import asyncio
import logging
import threading
import time
from typing import Any, Dict, Optional

import orjson

from backend.runner import CommandHandlerMixin
from backend.runner.state_builders import build_full_state
from backend.state_payloads import FullStatePayload
from core.config.simulation_config import SimulationConfig
from core.world import RailWorld

logger = logging.getLogger(__name__)

# Seconds between periodic status log lines
STATUS_LOG_INTERVAL = 30.0


class SimulationRunner(CommandHandlerMixin):
    """Runs the simulation in a background thread and provides state updates.

    The thread lives from ``start()`` to ``stop()``. Whether it actually
    advances the clock is governed by ``world.running``, toggled through the
    ``start``/``stop`` commands, so operator actions stay available while
    the simulation is stopped.

    Inherits command handling from CommandHandlerMixin to reduce class size.
    """

    def __init__(
        self,
        world: Optional[RailWorld] = None,
        config: Optional[SimulationConfig] = None,
        seed: Optional[int] = None,
    ):
        """Initialize the simulation runner.

        Args:
            world: Pre-built world (tests); a default-scenario world otherwise
            config: Simulation configuration; read from the environment if omitted
            seed: Optional random seed for deterministic behavior
        """
        self.config = config or (world.config if world is not None else SimulationConfig.from_env())
        self.world = world or RailWorld(config=self.config, seed=seed)

        self.running = False
        self.thread: Optional[threading.Thread] = None
        self.lock = threading.Lock()

        self.tick_seconds = self.config.tick_seconds

        self._cached_state: Optional[FullStatePayload] = None
        self._cached_state_tick: Optional[int] = None
        self._last_status_time = time.time()

    def _create_error_response(self, error_msg: str) -> Dict[str, Any]:
        """Create a standardized error response.

        Args:
            error_msg: The error message to return

        Returns:
            Dictionary with success=False and error message
        """
        return {"success": False, "error": error_msg}

    def _invalidate_state_cache(self) -> None:
        """Clear cached state so the next request rebuilds fresh data."""
        self._cached_state = None
        self._cached_state_tick = None

    def start(self, start_running: bool = False):
        """Start the runner thread.

        Args:
            start_running: Whether ticks begin immediately. Defaults to False;
                the operator starts the simulation explicitly.
        """
        if not self.running:
            if start_running:
                self.world.start_simulation()

            self.running = True
            self.thread = threading.Thread(target=self._run_loop, name="simulation_runner", daemon=True)
            self.thread.start()

    def stop(self):
        """Stop the runner thread. A tick in progress always completes."""
        self.running = False
        if self.thread:
            self.thread.join(timeout=2.0)
            self.thread = None

    def step(self) -> bool:
        """Advance one tick if the simulation is running.

        Returns:
            True if a tick was performed
        """
        with self.lock:
            if not self.world.running:
                return False
            self.world.tick()
            return True

    def _run_loop(self):
        """Main simulation loop."""
        logger.info("Simulation loop: Starting (tick every %.2fs)", self.tick_seconds)
        ticks = 0

        # Drift correction: Track when the next tick *should* start
        next_tick_time = time.time()

        try:
            while self.running:
                try:
                    next_tick_time += self.tick_seconds

                    try:
                        if self.step():
                            ticks += 1
                    except Exception as e:
                        logger.error(
                            f"Simulation loop: Error advancing tick {self.world.clock.tick}: {e}",
                            exc_info=True,
                        )
                        # Continue running even if a tick fails

                    current_time = time.time()
                    if current_time - self._last_status_time >= STATUS_LOG_INTERVAL:
                        self._last_status_time = current_time
                        self._log_status()

                    sleep_time = next_tick_time - time.time()
                    if sleep_time > 0:
                        time.sleep(sleep_time)
                    elif sleep_time < -self.tick_seconds:
                        # Too far behind; resync instead of firing catch-up ticks
                        next_tick_time = time.time()

                except Exception as e:
                    logger.error(f"Simulation loop: Unexpected error: {e}", exc_info=True)
                    time.sleep(self.tick_seconds)
                    next_tick_time = time.time()

        except Exception as e:
            logger.error(f"Simulation loop: Fatal error, loop exiting: {e}", exc_info=True)
        finally:
            logger.info(f"Simulation loop: Ended after {ticks} ticks")

    def _log_status(self) -> None:
        state = self.world.get_state()
        metrics = state.metrics
        logger.info(
            f"Simulation Status T={state.clock} "
            f"running={state.running}, "
            f"Throughput={metrics.total_throughput}, "
            f"AvgDelay={metrics.average_delay}, "
            f"Averted={metrics.conflicts_averted}, "
            f"Efficiency={metrics.efficiency_score}"
            f"{', pending recommendation' if state.pending_recommendation else ''}"
        )

    def get_state(self) -> FullStatePayload:
        """Get the current simulation state, rebuilt at most once per tick."""
        with self.lock:
            current_tick = self.world.clock.tick
            if self._cached_state is not None and self._cached_state_tick == current_tick:
                return self._cached_state

            state = build_full_state(
                self.world.get_state(),
                detector=self.world.detector,
                tick_seconds=self.tick_seconds,
            )
            self._cached_state = state
            self._cached_state_tick = current_tick
            return state

    async def get_state_async(self) -> FullStatePayload:
        """Async wrapper to fetch simulation state without blocking the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.get_state)

    def serialize_state(self, state: FullStatePayload) -> bytes:
        """Serialize a state payload with fast JSON."""
        return orjson.dumps(state.to_dict())

    def handle_command(self, command: str, data: Optional[Dict[str, Any]] = None):
        """Handle a command from the client.

        Args:
            command: Command type ('start', 'stop', 'reset', 'request_recommendation',
                'accept_recommendation', 'reject_recommendation', 'inject_disruption')
            data: Optional command data
        """
        # Map commands to handler methods
        handlers = {
            "start": self._cmd_start,
            "stop": self._cmd_stop,
            "reset": self._cmd_reset,
            "request_recommendation": self._cmd_request_recommendation,
            "accept_recommendation": self._cmd_accept_recommendation,
            "reject_recommendation": self._cmd_reject_recommendation,
            "inject_disruption": self._cmd_inject_disruption,
        }

        with self.lock:
            handler = handlers.get(command)
            if handler:
                return handler(data or {})

            logger.warning(f"Unknown command received: {command}")
            return self._create_error_response(f"Unknown command: {command}")

    async def handle_command_async(
        self, command: str, data: Optional[Dict[str, Any]] = None
    ):
        """Async wrapper to route commands off the event loop thread."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.handle_command, command, data)
