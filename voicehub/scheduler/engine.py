import asyncio
import math
from datetime import date, datetime
from enum import Enum
from typing import Awaitable, Callable, List, Optional

from tenacity import AsyncRetrying, RetryCallState, retry_if_exception_type, stop_after_attempt

from voicehub.core.errors import FeedError, classify_failure
from voicehub.core.fetcher import ScheduleFetcher
from voicehub.core.presenter import failure_message, present_selection, retry_message, waiting_message
from voicehub.core.selector import select_schedule
from voicehub.core.settings import FeedSettings, get_feed_settings
from voicehub.models.schedule import DisplayState, ScheduleEntry
from voicehub.refresh.decision import RetryState, evaluate_refresh
from voicehub.refresh.policy import backoff_delay
from voicehub.utils.logger import get_logger

log = get_logger(__name__)

StateCallback = Callable[[DisplayState], None]
IntervalCallback = Callable[[float], None]


class RefresherState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    BACKOFF = "backoff"
    COOLDOWN = "cooldown"


class ScheduleRefresher:
    """
    Runs fetch -> select -> present cycles for one display surface.

    Failed fetches are retried with exponential backoff; once the retries
    are used up the refresher cools down and asks the host for a shorter
    tick so it notices when the cooldown ends. Only one cycle runs at a
    time: starting a new one cancels the previous one, and a cancelled or
    superseded cycle never publishes.
    """

    def __init__(
        self,
        on_state: StateCallback,
        *,
        settings: Optional[FeedSettings] = None,
        url: Optional[str] = None,
        fetcher: Optional[ScheduleFetcher] = None,
        on_interval_change: Optional[IntervalCallback] = None,
        clock: Callable[[], datetime] = datetime.now,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        settings = settings or get_feed_settings()
        self.on_state = on_state
        self.on_interval_change = on_interval_change
        self.url = url or settings.api_url
        self.label = settings.label
        self.max_retries = settings.max_retries
        self.cooldown_seconds = settings.cooldown_minutes * 60
        self.normal_interval = settings.interval_seconds
        self.cooldown_check_interval = settings.cooldown_check_seconds

        self._owns_fetcher = fetcher is None
        self.fetcher = fetcher or ScheduleFetcher(timeout=settings.timeout_seconds)
        self._clock = clock
        self._sleep = sleep

        self.retry_state = RetryState()
        self.state = RefresherState.IDLE
        self.last_display: Optional[DisplayState] = None
        self.interval_seconds = self.normal_interval

        self._task: Optional[asyncio.Task] = None
        self._generation = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def cooldown_minutes(self) -> int:
        return math.ceil(self.cooldown_seconds / 60)

    def today(self) -> date:
        return self._clock().date()

    def request_refresh(self) -> Optional[asyncio.Task]:
        """Start a new cycle in the background, cancelling any running one."""
        if self._closed:
            log.debug("Refresh requested after close, ignoring")
            return None

        if self._task is not None and not self._task.done():
            log.info("Cancelling superseded refresh cycle")
            self._task.cancel()

        self._generation += 1
        self._task = asyncio.get_running_loop().create_task(self._run_cycle(self._generation))
        return self._task

    async def run(self) -> Optional[DisplayState]:
        """
        Run one cycle and wait for it.

        Returns:
            The final DisplayState of the cycle, or None if it was superseded
            or the refresher is closed
        """
        task = self.request_refresh()
        if task is None:
            return None
        try:
            await asyncio.wait({task})
        except asyncio.CancelledError:
            task.cancel()
            raise
        if task.cancelled():
            return None
        return task.result()

    async def aclose(self):
        """Stop the running cycle and release the HTTP client. No publications follow."""
        self._closed = True
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            await asyncio.wait({task})
        if self._owns_fetcher:
            await self.fetcher.close()
        self.state = RefresherState.IDLE
        log.info("Schedule refresher closed")

    async def _run_cycle(self, generation: int) -> Optional[DisplayState]:
        now = self._clock()
        decision = evaluate_refresh(self.retry_state, now=now, cooldown_seconds=self.cooldown_seconds)
        if not decision.should_run:
            self.state = RefresherState.COOLDOWN
            log.debug(f"Skipping fetch: {decision.reason}")
            return self._publish(generation, DisplayState.network_error(waiting_message(decision.remaining_seconds)))

        if self.retry_state.last_failure_time is not None:
            log.info("Cooldown elapsed, restarting retry sequence")
        self.retry_state.reset()

        self.state = RefresherState.FETCHING
        self._publish(generation, DisplayState.loading())

        try:
            entries = await self._fetch_with_retry(generation)
            selection = select_schedule(entries, self.today())
            display = present_selection(selection, self.label)
        except asyncio.CancelledError:
            log.debug(f"Refresh cycle {generation} cancelled")
            raise
        except FeedError as e:
            log.error(f"Giving up on schedule feed after {self.max_retries} retries: {e.as_dict()}")
            return self._enter_cooldown(generation, e)
        except Exception as e:
            log.exception(f"Unexpected error in refresh cycle: {e}")
            return self._enter_cooldown(generation, e)

        self.retry_state.reset()
        self.state = RefresherState.IDLE
        published = self._publish(generation, display)
        self._request_interval(generation, self.normal_interval)
        return published

    async def _fetch_with_retry(self, generation: int) -> List[ScheduleEntry]:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=self._backoff_wait,
            retry=retry_if_exception_type(Exception),
            before_sleep=lambda retry_state: self._before_backoff(generation, retry_state),
            sleep=self._sleep,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                self.state = RefresherState.FETCHING
                entries = await self.fetcher.fetch(self.url)
        return entries

    @staticmethod
    def _backoff_wait(retry_state: RetryCallState) -> float:
        return backoff_delay(retry_state.attempt_number - 1)

    def _before_backoff(self, generation: int, retry_state: RetryCallState) -> None:
        attempt = retry_state.attempt_number
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        delay = backoff_delay(attempt - 1)
        log.warning(f"Fetch attempt {attempt} failed: {exc!r}. Retrying in {delay:.0f}s ({attempt}/{self.max_retries})")

        self.retry_state.attempt = attempt
        self.state = RefresherState.BACKOFF
        self._publish(generation, DisplayState.loading(retry_message(attempt, self.max_retries)))

    def _enter_cooldown(self, generation: int, exc: BaseException) -> Optional[DisplayState]:
        kind = classify_failure(exc)
        self.retry_state.record_exhausted(self._clock(), self.max_retries)
        self.state = RefresherState.COOLDOWN
        published = self._publish(generation, DisplayState.network_error(failure_message(kind, self.cooldown_minutes)))
        self._request_interval(generation, self.cooldown_check_interval)
        return published

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    def _publish(self, generation: int, display: DisplayState) -> Optional[DisplayState]:
        if not self._is_current(generation):
            log.debug(f"Dropping stale display update from cycle {generation}")
            return None

        self.last_display = display
        try:
            self.on_state(display)
        except Exception as e:
            log.exception(f"Display callback failed: {e}")
        return display

    def _request_interval(self, generation: int, seconds: float) -> None:
        if not self._is_current(generation) or seconds == self.interval_seconds:
            return

        log.info(f"Refresh interval changed: {self.interval_seconds:.0f}s -> {seconds:.0f}s")
        self.interval_seconds = seconds
        if self.on_interval_change is None:
            return
        try:
            self.on_interval_change(seconds)
        except Exception as e:
            log.exception(f"Failed to change refresh interval: {e}")
