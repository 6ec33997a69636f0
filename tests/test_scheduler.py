import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

from conftest import ScriptedFetcher
from voicehub.core.errors import FeedTransportError
from voicehub.core.settings import FeedSettings
from voicehub.scheduler.engine import ScheduleRefresher
from voicehub.scheduler.scheduler import REFRESH_JOB_ID, RefreshScheduler


def make_refresher_mock(interval=3600.0):
    refresher = MagicMock()
    refresher.interval_seconds = interval
    refresher.aclose = AsyncMock()
    return refresher


def test_start_registers_interval_job_and_refreshes_immediately():
    refresher = make_refresher_mock()

    async def scenario():
        host = RefreshScheduler(refresher)
        host.start()
        job = host._scheduler.get_job(REFRESH_JOB_ID)
        interval = job.trigger.interval
        await host.shutdown()
        return host, interval

    host, interval = asyncio.run(scenario())

    assert interval == timedelta(hours=1)
    refresher.request_refresh.assert_called_once_with()
    refresher.aclose.assert_awaited_once()
    assert not host.running
    assert refresher.on_interval_change == host.set_interval


def test_set_interval_reschedules_job():
    refresher = make_refresher_mock()

    async def scenario():
        host = RefreshScheduler(refresher, run_on_start=False)
        host.start()
        host.set_interval(60)
        interval = host._scheduler.get_job(REFRESH_JOB_ID).trigger.interval
        await host.shutdown()
        return interval

    assert asyncio.run(scenario()) == timedelta(minutes=1)
    refresher.request_refresh.assert_not_called()


def test_tick_requests_refresh():
    refresher = make_refresher_mock()
    host = RefreshScheduler(refresher, run_on_start=False)

    asyncio.run(host._tick())

    refresher.request_refresh.assert_called_once_with()


def test_set_interval_before_start_only_records_value():
    host = RefreshScheduler(make_refresher_mock(), run_on_start=False)
    host.set_interval(120)
    assert host.interval_seconds == 120
    assert not host.running


def test_cooldown_shrinks_host_interval(clock, recording_sleep):
    fetcher = ScriptedFetcher(*(FeedTransportError("down") for _ in range(4)))
    refresher = ScheduleRefresher(
        lambda state: None,
        settings=FeedSettings(api_url="https://voicehub.example.com/api"),
        fetcher=fetcher,
        clock=clock,
        sleep=recording_sleep,
    )

    async def scenario():
        host = RefreshScheduler(refresher, run_on_start=False)
        host.start()
        await refresher.run()
        interval = host._scheduler.get_job(REFRESH_JOB_ID).trigger.interval
        await host.shutdown()
        return interval

    assert asyncio.run(scenario()) == timedelta(minutes=1)
    assert refresher.closed
