import asyncio
from datetime import datetime, timedelta
from typing import List, Optional

import pytest

from voicehub.core.config import Config
from voicehub.core.settings import get_feed_settings
from voicehub.models.schedule import ScheduleEntry, Song


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep tests independent from the caller's environment."""
    monkeypatch.delenv("VOICEHUB_API_URL", raising=False)
    monkeypatch.delenv("VOICEHUB_CONFIG", raising=False)
    Config.reset()
    get_feed_settings.cache_clear()
    yield
    Config.reset()
    get_feed_settings.cache_clear()


def make_entry(play_date: str, sequence: int, title: str = "Song", artist: str = "Artist", requester: str = "Fan") -> ScheduleEntry:
    return ScheduleEntry(
        play_date=play_date,
        sequence=sequence,
        song=Song(title=title, artist=artist, requester=requester, vote_count=sequence),
    )


class FakeClock:
    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2024, 1, 1, 8, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class RecordingSleep:
    """Stands in for asyncio.sleep and remembers the requested delays."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
        await asyncio.sleep(0)


class ScriptedFetcher:
    """Returns (or raises) the scripted outcomes in order."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls: List[str] = []
        self.closed = False

    async def fetch(self, url: str):
        self.calls.append(url)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def close(self):
        self.closed = True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()
