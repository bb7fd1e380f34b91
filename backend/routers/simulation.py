"""Simulation control endpoints (state, start/stop, recommendations, disruptions).

Operator actions never fail with an HTTP error for precondition problems:
the response is always 200 with ``success`` set and the fresh state, so the
console can grey out controls instead of showing error dialogs.
"""

import logging
from typing import Any, Dict, Optional

import orjson
from fastapi import APIRouter
from fastapi.responses import Response

from backend.models import DisruptionRequest
from backend.simulation_runner import SimulationRunner
from backend.state_payloads import CommandResultPayload

logger = logging.getLogger(__name__)


def _json(payload: Dict[str, Any]) -> Response:
    return Response(content=orjson.dumps(payload), media_type="application/json")


def setup_router(runner: SimulationRunner) -> APIRouter:
    """Create the simulation router bound to ``runner``.

    Endpoints:
        GET  /api/simulation/state
        POST /api/simulation/start
        POST /api/simulation/stop
        POST /api/simulation/reset
        POST /api/simulation/recommendation
        POST /api/simulation/recommendation/accept
        POST /api/simulation/recommendation/reject
        POST /api/simulation/disruptions
    """
    router = APIRouter(prefix="/api/simulation", tags=["simulation"])

    async def run_command(command: str, data: Optional[Dict[str, Any]] = None) -> Response:
        result = await runner.handle_command_async(command, data) or {"success": True}
        state = await runner.get_state_async()
        payload = CommandResultPayload(
            success=bool(result.get("success", False)),
            error=result.get("error"),
            state=state,
        ).to_dict()
        for key in ("recommendation", "train"):
            if key in result:
                payload[key] = result[key]
        return _json(payload)

    @router.get("/state")
    async def get_state():
        """Read-only snapshot: tick, trains, metrics, pending recommendation."""
        state = await runner.get_state_async()
        return Response(content=runner.serialize_state(state), media_type="application/json")

    @router.post("/start")
    async def start_simulation():
        return await run_command("start")

    @router.post("/stop")
    async def stop_simulation():
        return await run_command("stop")

    @router.post("/reset")
    async def reset_simulation():
        return await run_command("reset")

    @router.post("/recommendation")
    async def request_recommendation():
        """Generate a recommendation; no-op while one is pending."""
        return await run_command("request_recommendation")

    @router.post("/recommendation/accept")
    async def accept_recommendation():
        return await run_command("accept_recommendation")

    @router.post("/recommendation/reject")
    async def reject_recommendation():
        return await run_command("reject_recommendation")

    @router.post("/disruptions")
    async def inject_disruption(request: DisruptionRequest):
        """Add delay minutes to a train and mark it delayed."""
        return await run_command(
            "inject_disruption", {"train_id": request.train_id, "minutes": request.minutes}
        )

    return router
