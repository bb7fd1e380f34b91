"""Application factory and context for the RailOptic simulation API.

This module provides a clean factory pattern for creating the FastAPI app,
avoiding import-time side effects. The simulation runner is created lazily
within the AppContext.

Usage:
------
    # For production (uses default settings from environment)
    app = create_app()

    # For testing (custom configuration)
    app = create_app(context=AppContext(runner=SimulationRunner(seed=42)))
"""

import logging
import os
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend import __version__
from backend.logging_config import configure_logging
from backend.models import HealthResponse
from backend.simulation_runner import SimulationRunner
from core.config.server import DEFAULT_API_PORT, DEFAULT_HOST


@dataclass
class AppContext:
    """Runtime context holding all application state.

    This replaces module-level globals, making dependencies explicit
    and enabling clean testing without cross-test pollution.
    """

    runner: Optional[SimulationRunner] = None

    # Configuration
    api_host: str = field(default_factory=lambda: os.getenv("RAILOPTIC_API_HOST", DEFAULT_HOST))
    api_port: int = field(
        default_factory=lambda: int(os.getenv("RAILOPTIC_API_PORT", str(DEFAULT_API_PORT)))
    )
    production_mode: bool = field(
        default_factory=lambda: os.getenv("PRODUCTION", "false").lower() == "true"
    )
    allowed_origins: list = field(
        default_factory=lambda: os.getenv("ALLOWED_ORIGINS", "*").split(",")
    )
    autostart: bool = field(
        default_factory=lambda: os.getenv("RAILOPTIC_AUTOSTART", "false").lower() == "true"
    )

    # Timing
    server_start_time: float = field(default_factory=time.time)

    # Logging
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("backend"))

    def get_runner(self) -> SimulationRunner:
        if self.runner is None:
            self.runner = SimulationRunner()
        return self.runner

    def get_health(self) -> HealthResponse:
        runner = self.get_runner()
        return HealthResponse(
            status="online",
            version=__version__,
            runner_alive=runner.running,
            simulation_running=runner.world.running,
            tick=runner.world.clock.tick,
            uptime_seconds=time.time() - self.server_start_time,
        )


def create_app(
    *,
    production_mode: Optional[bool] = None,
    context: Optional[AppContext] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        production_mode: Override production mode (default: from PRODUCTION env var)
        context: Pre-configured AppContext (for testing). If None, creates a new one.

    Returns:
        Configured FastAPI application with context attached as app.state.context
    """
    logger = configure_logging()

    if context is None:
        context = AppContext()
    if production_mode is not None:
        context.production_mode = production_mode

    context.logger = logger
    runner = context.get_runner()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup and shutdown."""
        ctx = app.state.context
        try:
            ctx.runner.start(start_running=ctx.autostart)
            ctx.logger.info("LIFESPAN: Simulation runner started - yielding control to app")
            yield
            ctx.logger.info("LIFESPAN: Received shutdown signal")
        except Exception as e:
            ctx.logger.error(f"Exception in lifespan startup: {e}", exc_info=True)
            raise
        finally:
            ctx.runner.stop()

    app = FastAPI(
        title="RailOptic Simulation API",
        lifespan=lifespan,
        docs_url=None if context.production_mode else "/docs",
        redoc_url=None if context.production_mode else "/redoc",
    )

    # Attach context to app state for access in routes
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=context.allowed_origins if context.production_mode else ["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    _setup_routers(app, context, runner)
    return app


def _setup_routers(app: FastAPI, ctx: AppContext, runner: SimulationRunner) -> None:
    """Setup and include all API routers."""
    from backend.routers import simulation

    app.include_router(simulation.setup_router(runner))

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return ctx.get_health()

    ctx.logger.info("All API routers configured successfully")
