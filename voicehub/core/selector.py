"""Pick the day's program to display from a schedule feed.

Entries with equal ``sequence`` keep their feed order; the upstream feed
does not promise unique sequence numbers per day.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from voicehub.models.schedule import (
    EMPTY_DATE_INCONSISTENCY,
    EMPTY_NO_UPCOMING,
    EMPTY_NO_VALID_ENTRIES,
    ScheduleEntry,
    SelectionResult,
)
from voicehub.utils.logger import get_logger

log = get_logger(__name__)

_Dated = Tuple[date, ScheduleEntry]


def _valid_entries(feed: Iterable[ScheduleEntry]) -> List[_Dated]:
    dated: List[_Dated] = []
    for entry in feed:
        play_date = entry.parsed_play_date()
        if play_date is not None:
            dated.append((play_date, entry))
    return dated


def _pick_candidates(valid: Sequence[_Dated], today: date) -> Optional[Tuple[date, List[ScheduleEntry]]]:
    todays = [entry for play_date, entry in valid if play_date == today]
    if todays:
        return today, todays

    upcoming: Dict[date, List[ScheduleEntry]] = {}
    for play_date, entry in valid:
        if play_date > today:
            upcoming.setdefault(play_date, []).append(entry)
    if not upcoming:
        return None

    nearest = min(upcoming)
    return nearest, upcoming[nearest]


def _reconcile(display_date: date, group: Sequence[ScheduleEntry]) -> Tuple[List[ScheduleEntry], List[ScheduleEntry]]:
    kept: List[ScheduleEntry] = []
    dropped: List[ScheduleEntry] = []
    for entry in group:
        if entry.parsed_play_date() == display_date:
            kept.append(entry)
        else:
            dropped.append(entry)
    return kept, dropped


def select_schedule(feed: Iterable[ScheduleEntry], today: date) -> SelectionResult:
    """
    Select the entries to display.

    Today's entries win; otherwise the nearest future day is shown. Entries
    with an unparsable play date never take part.

    Args:
        feed: Entries as returned by one fetch
        today: The calendar day considered "today"

    Returns:
        SelectionResult sorted by sequence, or an empty result with a reason
    """
    valid = _valid_entries(feed)
    if not valid:
        return SelectionResult.empty(EMPTY_NO_VALID_ENTRIES)

    picked = _pick_candidates(valid, today)
    if picked is None:
        return SelectionResult.empty(EMPTY_NO_UPCOMING)

    display_date, group = picked
    # sorted() is stable, so equal sequences keep feed order
    ordered = sorted(group, key=lambda entry: entry.sequence)

    kept, dropped = _reconcile(display_date, ordered)
    if dropped:
        log.warning(
            f"Dropped {len(dropped)} entries whose play date does not match {display_date.isoformat()}"
        )
    if not kept:
        return SelectionResult.empty(EMPTY_DATE_INCONSISTENCY, dropped=tuple(dropped))

    return SelectionResult(display_date=display_date, entries=tuple(kept), dropped=tuple(dropped))


__all__ = ["select_schedule"]
