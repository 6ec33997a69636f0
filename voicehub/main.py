#!/usr/bin/env python3
"""
VoiceHub Schedule Feed - Main Entry Point
=========================================

Usage:
    python -m voicehub.main                    # Run the periodic refresher
    python -m voicehub.main --mode once        # Fetch once and print the display text
    python -m voicehub.main --url URL          # Override the feed endpoint
    python -m voicehub.main --help             # Show help
"""

import argparse
import asyncio
import os
import signal
from typing import List, Optional

from dotenv import load_dotenv

from voicehub.core.config import Config
from voicehub.core.settings import FeedSettings
from voicehub.models.schedule import DisplayMode, DisplayState
from voicehub.scheduler.engine import ScheduleRefresher
from voicehub.scheduler.scheduler import RefreshScheduler
from voicehub.utils.logger import get_logger, setup_logging

log = get_logger(__name__)


class ConsoleSurface:
    """Display surface that logs every state change."""

    def __init__(self):
        self.history: List[DisplayState] = []

    def __call__(self, state: DisplayState) -> None:
        self.history.append(state)
        if state.mode is DisplayMode.NETWORK_ERROR:
            log.warning(f"[{state.mode.value}] {state.text}")
        else:
            log.info(f"[{state.mode.value}] {state.text}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="VoiceHub broadcast schedule feed")
    parser.add_argument(
        "--mode",
        choices=["scheduler", "once"],
        default="scheduler",
        help="Run the periodic refresher (default) or a single refresh cycle",
    )
    parser.add_argument("--url", help="Schedule feed URL (overrides VOICEHUB_API_URL and settings.yaml)")
    parser.add_argument("--config", help="Path to settings.yaml")
    return parser.parse_args(argv)


async def run_once(settings: FeedSettings) -> Optional[DisplayState]:
    refresher = ScheduleRefresher(ConsoleSurface(), settings=settings)
    try:
        return await refresher.run()
    finally:
        await refresher.aclose()


async def run_scheduler(settings: FeedSettings) -> None:
    refresher = ScheduleRefresher(ConsoleSurface(), settings=settings)
    host = RefreshScheduler(refresher)
    stop = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            # Windows event loops have no signal handlers; Ctrl+C still raises KeyboardInterrupt
            pass

    host.start()
    log.info(f"Watching schedule feed at {refresher.url}")
    try:
        await stop.wait()
    finally:
        log.info("Scheduler shutting down...")
        await host.shutdown()


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)

    if args.config:
        os.environ["VOICEHUB_CONFIG"] = args.config
        Config.reset()

    setup_logging(args.config)
    settings = FeedSettings(api_url=args.url)

    if args.mode == "once":
        state = asyncio.run(run_once(settings))
        if state is None:
            return 1
        print(state.text)
        return 0 if state.mode in (DisplayMode.NORMAL, DisplayMode.NO_SCHEDULE) else 1

    try:
        asyncio.run(run_scheduler(settings))
    except KeyboardInterrupt:
        log.info("Interrupted")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
