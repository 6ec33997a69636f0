"""Refresh timing policy: retry budget, backoff and timer intervals."""

from __future__ import annotations

MAX_RETRY = 3
BACKOFF_BASE_SECONDS = 2
COOLDOWN_SECONDS = 10 * 60
NORMAL_INTERVAL_SECONDS = 60 * 60
COOLDOWN_CHECK_INTERVAL_SECONDS = 60


def backoff_delay(attempt: int) -> float:
    """Delay before retry number ``attempt + 1``: 2s, 4s, 8s, ..."""
    return float(BACKOFF_BASE_SECONDS ** (max(attempt, 0) + 1))


__all__ = [
    "MAX_RETRY",
    "BACKOFF_BASE_SECONDS",
    "COOLDOWN_SECONDS",
    "NORMAL_INTERVAL_SECONDS",
    "COOLDOWN_CHECK_INTERVAL_SECONDS",
    "backoff_delay",
]
