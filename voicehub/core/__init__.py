"""Core processing modules exposed for external consumers."""

from .fetcher import ScheduleFetcher, parse_feed
from .presenter import format_schedule, present_selection
from .selector import select_schedule

__all__ = [
    "ScheduleFetcher",
    "parse_feed",
    "format_schedule",
    "present_selection",
    "select_schedule",
]
