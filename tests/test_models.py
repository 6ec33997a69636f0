from datetime import date

import pytest

from voicehub.core.errors import (
    FailureKind,
    FeedParseError,
    FeedTimeoutError,
    FeedTransportError,
    classify_failure,
)
from voicehub.models.schedule import DisplayMode, DisplayState, ScheduleEntry, Song, parse_play_date


def test_entry_from_camel_case_payload():
    entry = ScheduleEntry.from_dict(
        {
            "playDate": "2024-03-08",
            "sequence": 4,
            "song": {"title": "Clocks", "artist": "Coldplay", "requester": "Mia", "voteCount": 12},
        }
    )
    assert entry.parsed_play_date() == date(2024, 3, 8)
    assert entry.song == Song(title="Clocks", artist="Coldplay", requester="Mia", vote_count=12)
    assert entry.to_dict()["song"]["voteCount"] == 12


def test_song_is_immutable_value():
    song = Song(title="Clocks")
    assert song == Song(title="Clocks")
    with pytest.raises(AttributeError):
        song.title = "Fix You"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-02-29", date(2024, 2, 29)),
        ("2023-02-29", None),
        ("2024-2-9", None),
        (" 2024-02-09", None),
        ("2024-02-09T00:00:00", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_play_date_is_strict(value, expected):
    assert parse_play_date(value) == expected


def test_display_state_constructors():
    assert DisplayState.loading() == DisplayState(DisplayMode.LOADING, "Loading...")
    assert DisplayState.normal("x").mode is DisplayMode.NORMAL
    assert DisplayState.network_error("x").mode is DisplayMode.NETWORK_ERROR
    assert DisplayState.no_schedule("x").mode is DisplayMode.NO_SCHEDULE


def test_failure_classification():
    assert classify_failure(FeedTransportError("down")) is FailureKind.TRANSPORT
    assert classify_failure(FeedTimeoutError("slow")) is FailureKind.TIMEOUT
    assert classify_failure(FeedParseError("bad")) is FailureKind.PARSE
    assert classify_failure(KeyError("odd")) is FailureKind.UNKNOWN


def test_error_as_dict_carries_context():
    error = FeedTransportError("Server returned 502", url="https://x", phase="fetch", status_code=502)
    payload = error.as_dict()
    assert payload["error_type"] == "FeedTransportError"
    assert payload["kind"] == "transport"
    assert payload["details"] == {"status_code": 502}
    assert payload["url"] == "https://x"
