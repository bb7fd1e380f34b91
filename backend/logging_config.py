"""Logging setup for the RailOptic backend.

The operator-relevant events are logged by the core modules at INFO:
recommendation generation, acceptance and rejection (``core.recommendations``),
disruptions (``core.disruptions``) and start/stop/reset (``core.world``).
Those loggers follow ``RAILOPTIC_LOG_LEVEL``. The console polls
``/api/simulation/state`` every tick, so uvicorn's access log is held at
WARNING unless the backend itself runs at DEBUG.
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATEFMT = "%H:%M:%S"

APP_LOGGER = "railoptic.backend"

DECISION_LOGGERS = (
    "core.recommendations",
    "core.disruptions",
    "core.world",
)

# Per-tick and registry chatter; only shown when explicitly debugging
ENGINE_LOGGERS = (
    "core.tick_engine",
    "core.registry",
)


def resolve_level(level: str | None = None) -> int:
    """Turn an explicit level, ``RAILOPTIC_LOG_LEVEL`` or INFO into a logging level.

    Unknown names fall back to INFO instead of failing startup.
    """
    name = (level or os.getenv("RAILOPTIC_LOG_LEVEL") or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | None = None) -> logging.Logger:
    """Configure root, decision, engine and uvicorn loggers.

    Safe to call more than once (``create_app`` runs it per app).

    Returns:
        The backend application logger (``railoptic.backend``).
    """
    resolved = resolve_level(level)
    logging.basicConfig(level=resolved, format=LOG_FORMAT, datefmt=LOG_DATEFMT)

    app_logger = logging.getLogger(APP_LOGGER)
    app_logger.setLevel(resolved)
    logging.getLogger("backend").setLevel(resolved)

    for name in DECISION_LOGGERS:
        logging.getLogger(name).setLevel(resolved)

    engine_level = logging.DEBUG if resolved <= logging.DEBUG else logging.WARNING
    for name in ENGINE_LOGGERS:
        logging.getLogger(name).setLevel(engine_level)

    logging.getLogger("uvicorn").setLevel(resolved)
    logging.getLogger("uvicorn.error").setLevel(resolved)
    logging.getLogger("uvicorn.access").setLevel(
        resolved if resolved <= logging.DEBUG else logging.WARNING
    )

    app_logger.debug("Logging configured at %s", logging.getLevelName(resolved))
    return app_logger
