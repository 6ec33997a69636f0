from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from voicehub.scheduler.engine import ScheduleRefresher
from voicehub.utils.logger import get_logger

log = get_logger(__name__)

REFRESH_JOB_ID = "voicehub_refresh"


class RefreshScheduler:
    """
    Host timer for a ScheduleRefresher.

    Ticks an interval job on the running event loop and lets the refresher
    shorten or restore the interval through ``set_interval``.
    """

    def __init__(
        self,
        refresher: ScheduleRefresher,
        *,
        interval_seconds: Optional[float] = None,
        scheduler: Optional[AsyncIOScheduler] = None,
        run_on_start: bool = True,
    ):
        self.refresher = refresher
        self.interval_seconds = interval_seconds or refresher.interval_seconds
        self.run_on_start = run_on_start
        self._scheduler = scheduler or AsyncIOScheduler()
        refresher.on_interval_change = self.set_interval

    @property
    def running(self) -> bool:
        return self._scheduler.running

    async def _tick(self):
        """Interval job: hand off to the refresher without waiting for the cycle."""
        self.refresher.request_refresh()

    def start(self):
        """Start ticking. Must be called from inside the running event loop."""
        if self._scheduler.running:
            return

        self._scheduler.add_job(
            self._tick,
            IntervalTrigger(seconds=self.interval_seconds),
            id=REFRESH_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.start()
        log.info(f"Refresh scheduler started (interval: {self.interval_seconds:.0f}s)")

        if self.run_on_start:
            self.refresher.request_refresh()

    def set_interval(self, seconds: float):
        if seconds == self.interval_seconds:
            return

        self.interval_seconds = seconds
        if self._scheduler.running and self._scheduler.get_job(REFRESH_JOB_ID) is not None:
            self._scheduler.reschedule_job(REFRESH_JOB_ID, trigger=IntervalTrigger(seconds=seconds))
        log.info(f"Refresh interval set to {seconds:.0f}s")

    async def shutdown(self):
        """Stop the timer and the refresher. No ticks or publications follow."""
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        await self.refresher.aclose()
        log.info("Refresh scheduler stopped")
