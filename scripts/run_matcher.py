#!/usr/bin/env python3
# scripts/run_matcher.py
"""
Twin Arbitrage Matcher - Main Entry Point

Usage:
    python scripts/run_matcher.py --snapshot data/snapshot.json [--refresh SECONDS] [--once]

This script:
1. Loads open offers and balances from a venue snapshot (paper venue)
2. Every refresh interval, groups offers into per-pair books
3. Matches crossed bids and asks and settles them as atomic twins
4. Logs the per-token balance change and total cost of each cycle
"""

from __future__ import annotations

import argparse
import asyncio
import signal
import sys
from pathlib import Path
from typing import Optional

# Add project root to path for imports
_project_root = Path(__file__).parent.parent
sys.path.insert(0, str(_project_root))

import structlog

from config.settings import settings
from config.validators import validate_log_level, validate_market_address
from twinarb import __version__
from twinarb.exceptions import ConfigError
from twinarb.matcher import MatcherConfig, MatcherEngine
from twinarb.utils.logging import configure_logging
from twinarb.venue import PaperVenue

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Crossed-order arbitrage matcher")
    p.add_argument("--refresh", type=float, default=settings.MATCHER_REFRESH_SECONDS,
                   help=f"Seconds between cycles (default: {settings.MATCHER_REFRESH_SECONDS})")
    p.add_argument("--threshold", type=int, default=settings.MATCHER_THRESHOLD,
                   help="Minimum margin per twin in the smallest token unit")
    p.add_argument("--sizing", choices=("max", "min"), default=settings.MATCHER_SIZING)
    p.add_argument("--orientation", choices=("first_seen", "lexicographic"),
                   default=settings.MATCHER_ORIENTATION)
    p.add_argument("--market", type=str, default=settings.MARKET_ADDRESS,
                   help="Maker market contract address")
    p.add_argument("-l", "--level", type=str, default=settings.LOG_LEVEL, help="Log level")
    p.add_argument("--snapshot", type=str, default=settings.PAPER_SNAPSHOT_PATH,
                   help="JSON snapshot with open offers and balances")
    p.add_argument("--cost", type=int, default=settings.PAPER_TWIN_COST,
                   help="Paper settlement cost per twin")
    p.add_argument("--once", action="store_true", default=False,
                   help="Run a single cycle and exit")
    return p


async def run(args: argparse.Namespace, stop_event: Optional[asyncio.Event] = None) -> int:
    market = validate_market_address(args.market)
    config = MatcherConfig(
        threshold=args.threshold,
        refresh=args.refresh,
        sizing=args.sizing,
        orientation=args.orientation,
    )
    venue = PaperVenue.from_snapshot(args.snapshot, twin_cost=args.cost)
    engine = MatcherEngine(atomic=venue, wallet=venue, config=config)
    logger.info("matcher_configured", market=market, snapshot=args.snapshot)

    if args.once:
        report = await engine.run_cycle()
        logger.info("single_cycle_done", twins=len(report.twins), cost=report.cost)
        return 0

    stop_event = stop_event or asyncio.Event()
    await engine.start()
    try:
        await stop_event.wait()
    finally:
        await engine.stop()
    return 0


async def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    try:
        configure_logging(validate_log_level(args.level))
    except ConfigError as exc:
        print(f"FAILED TO INITIALIZE LOGGER ({exc})", file=sys.stderr)
        return 1

    logger.info("starting_matcher", version=__version__)

    # Handle shutdown signals
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def signal_handler() -> None:
        logger.info("shutdown_signal_received")
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    try:
        code = await run(args, stop_event)
    except ConfigError as exc:
        logger.critical("invalid_configuration", error=str(exc))
        return 1
    except FileNotFoundError as exc:
        logger.critical("snapshot_not_found", error=str(exc))
        return 1
    except ValueError as exc:
        logger.critical("snapshot_invalid", error=str(exc)[:200])
        return 1

    logger.info("shutting_down_matcher")
    return code


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
