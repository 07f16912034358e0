"""Main entry point for the life simulation.

Command-line options:
- Server mode (default): FastAPI backend serving state and accepting commands
- Headless mode: no server, runs a fixed number of ticks and logs statistics
"""

import argparse
import logging
import sys

from lifesim_server.logging_config import configure_logging

logger = logging.getLogger(__name__)

SEPARATOR_WIDTH = 60


def run_server(seed=None):
    """Run the HTTP server."""
    import uvicorn

    from lifesim_server.app_factory import AppContext, create_app

    context = AppContext()
    app = create_app(seed=seed, context=context)

    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("LIFE SIMULATION - SERVER")
    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("State at http://localhost:%d/api/state", context.api_port)
    logger.info("Press Ctrl+C to stop the server")
    uvicorn.run(app, host="0.0.0.0", port=context.api_port)


def run_headless(max_ticks: int, stats_interval: int, seed=None, export_stats=None):
    """Run the simulation without a server.

    Args:
        max_ticks: Number of logical ticks to simulate
        stats_interval: Log stats every N ticks (0 disables periodic logging)
        seed: Optional random seed for deterministic behavior
        export_stats: Optional filename for a JSON stats export
    """
    from lifesim.simulation import SimulationEngine

    engine = SimulationEngine(seed=seed)
    # run_headless() calls setup() itself
    engine.run_headless(max_ticks=max_ticks, stats_interval=stats_interval, export_json=export_stats)


def main():
    """Parse command-line arguments and run the selected mode."""
    parser = argparse.ArgumentParser(
        description="Artificial-life arena simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the API server (default)
  python main.py

  # Headless run with periodic stats
  python main.py --headless --max-ticks 10000 --stats-interval 500

  # Reproducible run with a JSON export
  python main.py --headless --max-ticks 20000 --seed 42 --export-stats run.json
        """,
    )
    parser.add_argument(
        "--headless", action="store_true", help="Run without the server (stats only)"
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=10000,
        help="Ticks to simulate in headless mode (default: 10000)",
    )
    parser.add_argument(
        "--stats-interval",
        type=int,
        default=300,
        help="Log stats every N ticks in headless mode (default: 300)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior"
    )
    parser.add_argument(
        "--export-stats",
        type=str,
        default=None,
        help="Write final stats and history to this JSON file (headless mode)",
    )
    parser.add_argument(
        "--log-level", type=str, default=None, help="Log level (default: LIFESIM_LOG_LEVEL or INFO)"
    )
    args = parser.parse_args()

    configure_logging(level=args.log_level, include_uvicorn=not args.headless, extra_loggers=("lifesim",))

    if args.max_ticks < 0:
        parser.error("--max-ticks cannot be negative")

    if args.headless:
        run_headless(args.max_ticks, args.stats_interval, args.seed, args.export_stats)
    else:
        run_server(seed=args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
