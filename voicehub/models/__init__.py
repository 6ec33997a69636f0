"""Model exports for the VoiceHub schedule feed."""

from .schedule import (
    EMPTY_DATE_INCONSISTENCY,
    EMPTY_NO_UPCOMING,
    EMPTY_NO_VALID_ENTRIES,
    DisplayMode,
    DisplayState,
    ScheduleEntry,
    SelectionResult,
    Song,
    parse_play_date,
)

__all__ = [
    "DisplayMode",
    "DisplayState",
    "ScheduleEntry",
    "SelectionResult",
    "Song",
    "parse_play_date",
    "EMPTY_DATE_INCONSISTENCY",
    "EMPTY_NO_UPCOMING",
    "EMPTY_NO_VALID_ENTRIES",
]
