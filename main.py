"""Main entry point for the RailOptic simulation.

This module provides command-line options to run the simulation:
- Web mode (default): FastAPI backend for the operator console
- Headless mode: Stats-only, as fast as possible, for testing
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
)

logger = logging.getLogger(__name__)

SEPARATOR_WIDTH = 60


def run_web_server(host: Optional[str] = None, port: Optional[int] = None):
    """Run the web server backend.

    Host and port default to ``RAILOPTIC_API_HOST`` and ``RAILOPTIC_API_PORT``.
    Auto-reload is on unless ``PRODUCTION=true``.
    """
    try:
        import uvicorn

        from backend.app_factory import AppContext

        context = AppContext()
        host = host or context.api_host
        port = port or context.api_port

        logger.info("=" * SEPARATOR_WIDTH)
        logger.info("RAILOPTIC SIMULATION - WEB SERVER")
        logger.info("=" * SEPARATOR_WIDTH)
        if not context.production_mode:
            logger.info("API docs available at http://localhost:%d/docs", port)
        logger.info("Press Ctrl+C to stop the server")
        logger.info("=" * SEPARATOR_WIDTH)

        uvicorn.run(
            "backend.main:app",
            host=host,
            port=port,
            reload=not context.production_mode,
            log_level="info",
        )
    except ImportError as e:
        logger.error("Error: Required dependencies not installed: %s", e)
        logger.error("Install with: pip install -e .")
        sys.exit(1)


def run_headless(
    max_ticks: int,
    stats_interval: int,
    seed: Optional[int] = None,
    arbitrate_every: int = 0,
    export_state: Optional[str] = None,
):
    """Run the simulation without a server.

    Args:
        max_ticks: Number of ticks to simulate
        stats_interval: Log metrics every N ticks
        seed: Optional random seed for deterministic behavior
        arbitrate_every: Request and accept a recommendation every N ticks (0 = never)
        export_state: Optional filename for the final state as JSON
    """
    import orjson

    from backend.runner.state_builders import build_full_state
    from core.world import RailWorld

    world = RailWorld(seed=seed)
    world.start_simulation()

    for _ in range(max_ticks):
        tick = world.tick()

        if arbitrate_every and tick % arbitrate_every == 0:
            if world.request_recommendation().is_ok():
                world.accept_recommendation()

        if stats_interval and tick % stats_interval == 0:
            metrics = world.metrics.current
            logger.info(
                "T=%s throughput=%d avg_delay=%d averted=%d efficiency=%d",
                world.clock,
                metrics.total_throughput,
                metrics.average_delay,
                metrics.conflicts_averted,
                metrics.efficiency_score,
            )

    world.stop_simulation()
    state = build_full_state(world.get_state(), detector=world.detector)

    if export_state:
        Path(export_state).write_bytes(orjson.dumps(state.to_dict(), option=orjson.OPT_INDENT_2))
        logger.info("Final state exported to %s", export_state)

    return state


def main():
    """Parse command-line arguments and run the appropriate mode."""
    parser = argparse.ArgumentParser(
        description="RailOptic junction simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run web server (default)
  python main.py

  # Quick headless run with a recommendation accepted every 10 ticks
  python main.py --headless --max-ticks 60 --arbitrate-every 10

  # Reproducible run with exported final state
  python main.py --headless --max-ticks 120 --seed 42 --export-state final.json
        """,
    )

    parser.add_argument(
        "--headless", action="store_true", help="Run in headless mode (no server, stats only)"
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=60,
        help="Ticks to simulate in headless mode (default: 60)",
    )
    parser.add_argument(
        "--stats-interval",
        type=int,
        default=10,
        help="Log metrics every N ticks in headless mode (default: 10)",
    )
    parser.add_argument(
        "--arbitrate-every",
        type=int,
        default=0,
        help="Request and accept a recommendation every N ticks (default: never)",
    )
    parser.add_argument("--host", type=str, default=None, help="Web server bind address")
    parser.add_argument("--port", type=int, default=None, help="Web server port")
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )
    parser.add_argument(
        "--export-state",
        type=str,
        default=None,
        metavar="FILENAME",
        help="Write the final state to a JSON file",
    )

    args = parser.parse_args()

    if args.headless:
        logger.info("Starting headless simulation: %d ticks", args.max_ticks)
        run_headless(
            args.max_ticks,
            args.stats_interval,
            seed=args.seed,
            arbitrate_every=args.arbitrate_every,
            export_state=args.export_state,
        )
    else:
        run_web_server(host=args.host, port=args.port)


if __name__ == "__main__":
    main()
