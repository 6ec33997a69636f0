"""Domain models for the broadcast song schedule."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

_PLAY_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_play_date(value: Optional[str]) -> Optional[date]:
    """Parse a strict ``YYYY-MM-DD`` string. Returns None when invalid."""
    if not value or not isinstance(value, str) or not _PLAY_DATE_RE.match(value):
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def _str_field(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _int_field(payload: Mapping[str, Any], key: str) -> int:
    value = payload.get(key)
    if value is None:
        return 0
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer, got {type(value).__name__}")
    return value


@dataclass(frozen=True, slots=True)
class Song:
    title: str = ""
    artist: str = ""
    requester: str = ""
    vote_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "artist": self.artist,
            "requester": self.requester,
            "voteCount": self.vote_count,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Song":
        return cls(
            title=_str_field(payload, "title"),
            artist=_str_field(payload, "artist"),
            requester=_str_field(payload, "requester"),
            vote_count=_int_field(payload, "voteCount"),
        )


@dataclass(frozen=True, slots=True)
class ScheduleEntry:
    """One song slot on a given play date."""

    play_date: str
    sequence: int
    song: Song = field(default_factory=Song)

    def parsed_play_date(self) -> Optional[date]:
        return parse_play_date(self.play_date)

    @property
    def is_valid(self) -> bool:
        return self.parsed_play_date() is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "playDate": self.play_date,
            "sequence": self.sequence,
            "song": self.song.to_dict(),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ScheduleEntry":
        if not isinstance(payload, Mapping):
            raise ValueError(f"entry must be an object, got {type(payload).__name__}")
        song_payload = payload.get("song")
        if song_payload is None:
            song = Song()
        elif isinstance(song_payload, Mapping):
            song = Song.from_dict(song_payload)
        else:
            raise ValueError(f"'song' must be an object, got {type(song_payload).__name__}")
        return cls(
            play_date=_str_field(payload, "playDate"),
            sequence=_int_field(payload, "sequence"),
            song=song,
        )


EMPTY_NO_VALID_ENTRIES = "no valid entries"
EMPTY_NO_UPCOMING = "no upcoming schedule"
EMPTY_DATE_INCONSISTENCY = "date inconsistency"


@dataclass(frozen=True, slots=True)
class SelectionResult:
    """The day picked for display, or an empty result with a reason."""

    display_date: Optional[date] = None
    entries: Tuple[ScheduleEntry, ...] = ()
    reason: Optional[str] = None
    dropped: Tuple[ScheduleEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.display_date is None or not self.entries

    @property
    def is_inconsistent(self) -> bool:
        return bool(self.dropped)

    @classmethod
    def empty(cls, reason: str, *, dropped: Tuple[ScheduleEntry, ...] = ()) -> "SelectionResult":
        return cls(display_date=None, entries=(), reason=reason, dropped=dropped)


class DisplayMode(str, Enum):
    LOADING = "loading"
    NORMAL = "normal"
    NETWORK_ERROR = "network_error"
    NO_SCHEDULE = "no_schedule"


@dataclass(frozen=True, slots=True)
class DisplayState:
    """What the display surface shows: a mode plus its status text."""

    mode: DisplayMode
    text: str = ""

    @classmethod
    def loading(cls, text: str = "Loading...") -> "DisplayState":
        return cls(DisplayMode.LOADING, text)

    @classmethod
    def normal(cls, text: str) -> "DisplayState":
        return cls(DisplayMode.NORMAL, text)

    @classmethod
    def network_error(cls, text: str) -> "DisplayState":
        return cls(DisplayMode.NETWORK_ERROR, text)

    @classmethod
    def no_schedule(cls, text: str) -> "DisplayState":
        return cls(DisplayMode.NO_SCHEDULE, text)


__all__ = [
    "Song",
    "ScheduleEntry",
    "SelectionResult",
    "DisplayMode",
    "DisplayState",
    "parse_play_date",
    "EMPTY_NO_VALID_ENTRIES",
    "EMPTY_NO_UPCOMING",
    "EMPTY_DATE_INCONSISTENCY",
]
