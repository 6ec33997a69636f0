from datetime import date

import pytest

from conftest import make_entry
from voicehub.core.errors import FailureKind
from voicehub.core.presenter import (
    SEGMENT_SEPARATOR,
    failure_message,
    format_schedule,
    present_selection,
    retry_message,
    waiting_message,
)
from voicehub.models.schedule import (
    EMPTY_DATE_INCONSISTENCY,
    EMPTY_NO_UPCOMING,
    EMPTY_NO_VALID_ENTRIES,
    DisplayMode,
    SelectionResult,
)


def _selection(*entries):
    return SelectionResult(display_date=date(2024, 1, 3), entries=tuple(entries))


def test_format_schedule_exact_text():
    selection = _selection(
        make_entry("2024-01-03", 1, title="Yellow", artist="Coldplay", requester="Ann"),
        make_entry("2024-01-03", 12, title="Creep", artist="Radiohead", requester="Bob"),
    )
    assert format_schedule(selection, "Broadcast Schedule") == (
        "Broadcast Schedule | 2024/01/03: #01 Coldplay - Yellow - Ann | #12 Radiohead - Creep - Bob"
    )


def test_format_schedule_segment_count():
    entries = [make_entry("2024-01-03", seq) for seq in range(1, 6)]
    text = format_schedule(_selection(*entries), "Label")
    header, body = text.split(": ", 1)
    assert header == "Label | 2024/01/03"
    assert len(body.split(SEGMENT_SEPARATOR)) == len(entries)


def test_format_schedule_rejects_empty_selection():
    with pytest.raises(ValueError):
        format_schedule(SelectionResult.empty(EMPTY_NO_UPCOMING))


def test_present_selection_normal():
    state = present_selection(_selection(make_entry("2024-01-03", 1)), "Radio")
    assert state.mode is DisplayMode.NORMAL
    assert state.text.startswith("Radio | 2024/01/03: #01")


@pytest.mark.parametrize(
    "reason, text",
    [
        (EMPTY_NO_VALID_ENTRIES, "No valid schedule data"),
        (EMPTY_NO_UPCOMING, "No upcoming schedule"),
        (EMPTY_DATE_INCONSISTENCY, "Schedule dates are inconsistent"),
    ],
)
def test_present_selection_empty_reasons(reason, text):
    state = present_selection(SelectionResult.empty(reason))
    assert state.mode is DisplayMode.NO_SCHEDULE
    assert state.text == text


@pytest.mark.parametrize(
    "kind, text",
    [
        (FailureKind.TRANSPORT, "Network error, retry in 10 minutes"),
        (FailureKind.TIMEOUT, "Request timed out, retry in 10 minutes"),
        (FailureKind.PARSE, "Data format error, retry in 10 minutes"),
        (FailureKind.UNKNOWN, "Failed to load, retry in 10 minutes"),
    ],
)
def test_failure_messages(kind, text):
    assert failure_message(kind, 10) == text


def test_retry_and_waiting_messages():
    assert retry_message(2, 3) == "Retrying (2/3)..."
    assert waiting_message(540) == "Waiting, retry in 9:00"
    assert waiting_message(61.5) == "Waiting, retry in 1:02"
    assert waiting_message(-5) == "Waiting, retry in 0:00"
