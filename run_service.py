#!/usr/bin/env python3
"""
Runner for the NHL goal light service.

Usage:
    python run_service.py                       # Periodic mode (both timers)
    python run_service.py --once                # One refresh + one matchup post, then exit
    python run_service.py --test-mode Goal      # Scripted device test (Goal | GameDay | GameDay:Goal)
    python run_service.py --serve               # Periodic mode plus the status web app
"""
import argparse
import logging
import signal
import sys

from goal_light.config import AppConfig
from goal_light.service import TEST_MODES, GoalLightService

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Run the NHL goal light service')
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        '--once',
        action='store_true',
        help='Refresh the scoreboard and post matchups once, without timers'
    )
    mode.add_argument(
        '--test-mode',
        choices=TEST_MODES,
        help='Send a scripted event sequence to the device and exit'
    )
    mode.add_argument(
        '--serve',
        action='store_true',
        help='Run the timers and the status web app'
    )
    parser.add_argument(
        '--test-pause',
        type=float,
        default=80.0,
        help='Seconds between scripted test events (default: 80)'
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    cfg = AppConfig()
    configure_logging(cfg.log_level)

    if args.serve:
        from app import create_app

        create_app().run(host="0.0.0.0", port=cfg.port)
        return 0

    if args.test_mode:
        with GoalLightService(cfg, refresh_on_start=False) as service:
            service.run_test_mode(args.test_mode, pause_seconds=args.test_pause)
        return 0

    with GoalLightService(cfg) as service:
        if args.once:
            service.run_once()
            return 0

        def _shutdown(signum, frame):
            logger.info("Shutdown signal received")
            service.scheduler.stop()

        for sig in (signal.SIGTERM, signal.SIGINT):
            signal.signal(sig, _shutdown)

        service.start()
        logger.info("Goal light service running. Press Ctrl+C to stop.")
        service.scheduler.wait()

    logger.info("Goal light service stopped")
    return 0


if __name__ == '__main__':
    sys.exit(main())
