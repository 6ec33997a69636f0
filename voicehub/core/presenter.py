"""Turn selections and failures into display text."""

from __future__ import annotations

import math
from typing import Dict

from voicehub.core.errors import FailureKind
from voicehub.core.settings import DEFAULT_LABEL
from voicehub.models.schedule import (
    EMPTY_DATE_INCONSISTENCY,
    EMPTY_NO_UPCOMING,
    EMPTY_NO_VALID_ENTRIES,
    DisplayState,
    ScheduleEntry,
    SelectionResult,
)

SEGMENT_SEPARATOR = " | "

EMPTY_MESSAGES: Dict[str, str] = {
    EMPTY_NO_VALID_ENTRIES: "No valid schedule data",
    EMPTY_NO_UPCOMING: "No upcoming schedule",
    EMPTY_DATE_INCONSISTENCY: "Schedule dates are inconsistent",
}
DEFAULT_EMPTY_MESSAGE = "No schedule data"

FAILURE_MESSAGES: Dict[FailureKind, str] = {
    FailureKind.TRANSPORT: "Network error, retry in {minutes} minutes",
    FailureKind.TIMEOUT: "Request timed out, retry in {minutes} minutes",
    FailureKind.PARSE: "Data format error, retry in {minutes} minutes",
    FailureKind.UNKNOWN: "Failed to load, retry in {minutes} minutes",
}


def format_entry(entry: ScheduleEntry) -> str:
    song = entry.song
    return f"#{entry.sequence:02d} {song.artist} - {song.title} - {song.requester}"


def format_schedule(selection: SelectionResult, label: str = DEFAULT_LABEL) -> str:
    """Render ``"{label} | YYYY/MM/DD: #01 ... | #02 ..."``."""
    if selection.display_date is None:
        raise ValueError("Cannot format an empty selection")
    header = f"{label}{SEGMENT_SEPARATOR}{selection.display_date:%Y/%m/%d}: "
    return header + SEGMENT_SEPARATOR.join(format_entry(entry) for entry in selection.entries)


def present_selection(selection: SelectionResult, label: str = DEFAULT_LABEL) -> DisplayState:
    if selection.is_empty:
        return DisplayState.no_schedule(EMPTY_MESSAGES.get(selection.reason or "", DEFAULT_EMPTY_MESSAGE))
    return DisplayState.normal(format_schedule(selection, label))


def failure_message(kind: FailureKind, minutes: int) -> str:
    template = FAILURE_MESSAGES.get(kind, FAILURE_MESSAGES[FailureKind.UNKNOWN])
    return template.format(minutes=minutes)


def retry_message(attempt: int, max_retries: int) -> str:
    return f"Retrying ({attempt}/{max_retries})..."


def waiting_message(remaining_seconds: float) -> str:
    total = max(0, math.ceil(remaining_seconds))
    minutes, seconds = divmod(total, 60)
    return f"Waiting, retry in {minutes}:{seconds:02d}"


__all__ = [
    "format_entry",
    "format_schedule",
    "present_selection",
    "failure_message",
    "retry_message",
    "waiting_message",
    "EMPTY_MESSAGES",
    "FAILURE_MESSAGES",
]
