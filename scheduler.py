"""
Scheduler - periodic alert refresh

Job Schedule:
1. Alert refresh: every REFRESH_INTERVAL_SECONDS (default 60s), skipped while
   alerts are snoozed

Usage:
    python scheduler.py                          # Run scheduler daemon
    python scheduler.py --once                   # Classify the sample feed once and exit
    python scheduler.py --once --feed items.json --location חיפה
    python scheduler.py --keyword-only           # Never call the external model
    python scheduler.py --once --coords 32.79,34.99 # Location from coordinates
"""
import asyncio
import inspect
import json
import signal
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, Optional, Union

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from loguru import logger

from config import settings
from constants import ClassificationMode
from processor.location import reverse_geocode
from processor.models import FeedItem
from processor.pipeline import ClassificationPipeline, ClassificationRun
from utils.logger import init_logging, setup_logging


FeedProvider = Callable[[], Union[Iterable[FeedItem], Awaitable[Iterable[FeedItem]]]]
AlertSink = Callable[[ClassificationRun], Any]

REFRESH_JOB_ID = "refresh_alerts"


def log_alerts(run: ClassificationRun) -> None:
    """Default sink: log every relevant alert."""
    for alert in run.relevant:
        logger.warning(f"[{alert.location}] {alert.title} ({alert.source})")
    if not run.relevant:
        logger.info("No relevant alerts")


class AlertScheduler:
    """
    Refreshes classified alerts on an interval.

    Feed items come from ``feed_provider`` (sync or async callable); each
    ClassificationRun is handed to ``sink``. Snoozing suppresses scheduled
    refreshes until the deadline passes.
    """

    def __init__(
        self,
        feed_provider: FeedProvider,
        sink: Optional[AlertSink] = None,
        user_location: Optional[str] = None,
        interval_seconds: Optional[int] = None,
        mode: ClassificationMode = ClassificationMode.AUTO,
        pipeline: Optional[ClassificationPipeline] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.feed_provider = feed_provider
        self.sink = sink or log_alerts
        self.user_location = user_location or settings.USER_LOCATION
        self.interval_seconds = interval_seconds or settings.REFRESH_INTERVAL_SECONDS
        self.mode = mode
        self.pipeline = pipeline or ClassificationPipeline()
        self.clock = clock
        self.scheduler = AsyncIOScheduler()
        self.snoozed_until: Optional[datetime] = None
        self.last_run: Optional[ClassificationRun] = None
        self.warnings: list[str] = []

    # ============================================
    # SNOOZE
    # ============================================

    def snooze(self, minutes: int) -> Optional[datetime]:
        """
        Suppress refreshes for ``minutes``; 0 cancels and refreshes right away.

        Returns the snooze deadline, or None when cancelled.
        """
        if minutes <= 0:
            self.snoozed_until = None
            logger.info("Snooze cancelled, alerts active")
            self._refresh_now()
            return None

        self.snoozed_until = self.clock() + timedelta(minutes=minutes)
        logger.info(f"Alerts snoozed for {minutes} minutes (until {self.snoozed_until:%H:%M})")
        return self.snoozed_until

    @property
    def is_snoozed(self) -> bool:
        if self.snoozed_until is None:
            return False
        if self.clock() >= self.snoozed_until:
            self.snoozed_until = None
            logger.info("Snooze ended, alerts active again")
            return False
        return True

    def set_location(self, user_location: str) -> None:
        """Change the user location and refresh on the next tick."""
        if user_location == self.user_location:
            return
        logger.info(f"Location changed: {self.user_location} -> {user_location}")
        self.user_location = user_location
        self._refresh_now()

    def set_coordinates(self, latitude: float, longitude: float) -> str:
        """Set the user location to the nearest known city; returns that city."""
        city = reverse_geocode(latitude, longitude)
        logger.debug(f"Coordinates ({latitude:.4f}, {longitude:.4f}) resolved to {city}")
        self.set_location(city)
        return city

    def _refresh_now(self) -> None:
        if self.scheduler.running and self.scheduler.get_job(REFRESH_JOB_ID):
            self.scheduler.modify_job(REFRESH_JOB_ID, next_run_time=datetime.now())

    # ============================================
    # JOBS
    # ============================================

    async def refresh(self, force: bool = False) -> Optional[ClassificationRun]:
        """
        Job: fetch feed items, classify them and hand the run to the sink.

        Returns None when skipped (snoozed) or when the feed provider failed.
        """
        if self.is_snoozed and not force:
            logger.debug(f"Refresh skipped, snoozed until {self.snoozed_until:%H:%M}")
            return None

        try:
            items = self.feed_provider()
            if inspect.isawaitable(items):
                items = await items
            items = list(items)
        except Exception as e:
            logger.exception(f"Feed provider failed: {e}")
            return None

        logger.info(f"Fetched {len(items)} feed items")
        run = await self.pipeline.run(
            items,
            self.user_location,
            mode=self.mode,
            on_warning=self.warnings.append,
        )
        self.last_run = run
        self.sink(run)
        return run

    def setup(self):
        """Setup scheduled jobs."""
        self.scheduler.add_job(
            self.refresh,
            IntervalTrigger(seconds=self.interval_seconds),
            id=REFRESH_JOB_ID,
            name="Refresh Alerts",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            next_run_time=datetime.now(),
        )
        logger.info(
            f"Scheduler setup complete: refresh every {self.interval_seconds}s "
            f"for {self.user_location} (mode={self.mode.value})"
        )

    def start(self):
        """Start the scheduler. Must be called from a running event loop."""
        self.setup()
        self.scheduler.start()
        logger.info("Scheduler started - Press Ctrl+C to stop")

    def stop(self):
        """Stop the scheduler."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")


def run_scheduler(scheduler: AlertScheduler):
    """Run the scheduler until SIGINT/SIGTERM."""

    async def _main():
        stop_event = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, stop_event.set)
            except NotImplementedError:
                # add_signal_handler is unavailable on Windows event loops
                pass

        scheduler.start()
        try:
            await stop_event.wait()
        finally:
            logger.info("Received shutdown signal")
            scheduler.stop()

    try:
        asyncio.run(_main())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")


def main():
    """Main entry point with CLI arguments."""
    import argparse

    from crawlers import get_sample_items, load_feed_file

    parser = argparse.ArgumentParser(description="Security Alert Scheduler")
    parser.add_argument("--once", action="store_true", help="Classify once, print JSON and exit")
    parser.add_argument("--feed", type=Path, help="JSON file of feed items (default: bundled sample feed)")
    parser.add_argument("--location", default=None, help="User location (default: settings.USER_LOCATION)")
    parser.add_argument("--coords", default=None, help="User position as LAT,LON (nearest known city)")
    parser.add_argument("--keyword-only", action="store_true", help="Use keyword classification only")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    args = parser.parse_args()

    if args.verbose:
        setup_logging(log_level="DEBUG", app_name="scheduler")
    else:
        init_logging("scheduler")

    feed_provider = (lambda: load_feed_file(args.feed)) if args.feed else get_sample_items
    mode = ClassificationMode.KEYWORD_ONLY if args.keyword_only else ClassificationMode.AUTO

    scheduler = AlertScheduler(feed_provider, user_location=args.location, mode=mode)
    if args.coords:
        latitude, longitude = (float(part) for part in args.coords.split(","))
        scheduler.set_coordinates(latitude, longitude)

    if args.once:
        run = asyncio.run(scheduler.refresh(force=True))
        if run is None:
            sys.exit(1)
        print(json.dumps(run.to_dict(), ensure_ascii=False, indent=2))
        sys.exit(0)

    run_scheduler(scheduler)


if __name__ == "__main__":
    main()
