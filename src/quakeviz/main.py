"""
Application Initialization
==========================
Builds the feed, the render modes, the driver and the main window, then runs
the Qt event loop.

Usage:
    $ python -m quakeviz [--mode geographic] [--demo] [--log-level DEBUG]
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from quakeviz import config
from quakeviz.logging_config import parse_level, setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quakeviz", description="Animated live earthquake visualisation.")
    parser.add_argument(
        "--mode",
        choices=[config.MODE_ARTISTIC, config.MODE_GEOGRAPHIC],
        default=config.DEFAULT_MODE,
        help="Visualisation mode shown at start-up.",
    )
    parser.add_argument("--demo", action="store_true", help="Skip the live feed and use generated demo data.")
    parser.add_argument(
        "--log-level", default="INFO", type=parse_level, help="Console logging level (DEBUG, INFO, WARNING, ...)."
    )
    parser.add_argument("--log-file", default=None, help="Optional log file; records everything from DEBUG up.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the application."""
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)

    # Qt imports stay here so `--help` works without a display
    from quakeviz.app.application import create_app
    from quakeviz.app.state import AppState
    from quakeviz.app.ui.main_window import MainWindow
    from quakeviz.controller.driver import AnimationDriver
    from quakeviz.controller.feed import EarthquakeFeed
    from quakeviz.render import modes as _modes  # noqa: F401  (registers the modes)
    from quakeviz.render.registry import create_mode, list_modes

    app = create_app()

    feed = EarthquakeFeed(urls=[] if args.demo else None)
    state = AppState(feed)
    driver = AnimationDriver(
        get_events=state.get_current_events,
        modes={key: create_mode(key) for key in list_modes()},
        initial_mode=args.mode,
    )

    window = MainWindow(state, driver)
    window.show()
    window.begin()

    logger.info(f"Started in {args.mode} mode{' (demo data)' if args.demo else ''}")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
