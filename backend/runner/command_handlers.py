"""Command handlers for SimulationRunner.

This module contains all command handler methods extracted from
SimulationRunner to reduce class size and improve separation of concerns.

Command handlers are responsible for:
- Start/stop/reset controls
- Recommendation request, accept and reject
- Disruption injection

Every handler runs with the runner lock held (see
``SimulationRunner.handle_command``), so it never interleaves with a tick.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from core.result import Result

if TYPE_CHECKING:
    from backend.simulation_runner import SimulationRunner

logger = logging.getLogger(__name__)


class CommandHandlerMixin:
    """Mixin class providing command handler methods for SimulationRunner."""

    def _result_response(self: "SimulationRunner", result: Result) -> Dict[str, Any]:
        """Translate a core Result into a command response."""
        if result.is_err():
            return self._create_error_response(result.error)
        return {"success": True}

    def _cmd_start(self: "SimulationRunner", data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Handle 'start' command: resume tick scheduling."""
        self.world.start_simulation()
        self._invalidate_state_cache()
        return {"success": True}

    def _cmd_stop(self: "SimulationRunner", data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Handle 'stop' command: no further ticks until started again."""
        self.world.stop_simulation()
        self._invalidate_state_cache()
        return {"success": True}

    def _cmd_reset(self: "SimulationRunner", data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Handle 'reset' command."""
        self.world.reset()
        self._invalidate_state_cache()
        logger.info("Simulation reset")
        return {"success": True}

    def _cmd_request_recommendation(
        self: "SimulationRunner", data: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Handle 'request_recommendation' command."""
        result = self.world.request_recommendation()
        self._invalidate_state_cache()
        response = self._result_response(result)
        if result.is_ok():
            response["recommendation"] = result.value.to_dict()
        return response

    def _cmd_accept_recommendation(
        self: "SimulationRunner", data: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Handle 'accept_recommendation' command."""
        result = self.world.accept_recommendation()
        self._invalidate_state_cache()
        return self._result_response(result)

    def _cmd_reject_recommendation(
        self: "SimulationRunner", data: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Handle 'reject_recommendation' command."""
        result = self.world.reject_recommendation()
        self._invalidate_state_cache()
        return self._result_response(result)

    def _cmd_inject_disruption(
        self: "SimulationRunner", data: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Handle 'inject_disruption' command.

        Expects ``{"train_id": str, "minutes": int}``.
        """
        train_id = data.get("train_id") or ""
        minutes = data.get("minutes", 0)
        result = self.world.inject_disruption(train_id, minutes)
        self._invalidate_state_cache()
        response = self._result_response(result)
        if result.is_ok():
            response["train"] = result.value.to_dict()
        return response
