"""Request and response models for the HTTP API."""

from typing import Optional

from pydantic import BaseModel


class DisruptionRequest(BaseModel):
    """Delay event entered by the operator.

    Empty ids and non-positive delays are accepted here and rejected by the
    simulation as a no-op, mirroring a disabled form button. Fractional
    minutes are truncated by the simulation; non-numeric values fail
    validation.
    """

    train_id: str = ""
    minutes: float = 0


class HealthResponse(BaseModel):
    """Liveness information for the backend."""

    status: str
    version: str
    runner_alive: bool
    simulation_running: bool
    tick: int
    uptime_seconds: float
    error: Optional[str] = None
