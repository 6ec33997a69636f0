"""Refresh timing helpers for the schedule refresher."""

from .cooldown import cooldown_deadline, is_in_cooldown, remaining_cooldown
from .decision import DecisionResult, RetryState, evaluate_refresh, should_refresh
from .policy import (
    BACKOFF_BASE_SECONDS,
    COOLDOWN_CHECK_INTERVAL_SECONDS,
    COOLDOWN_SECONDS,
    MAX_RETRY,
    NORMAL_INTERVAL_SECONDS,
    backoff_delay,
)

__all__ = [
    "cooldown_deadline",
    "is_in_cooldown",
    "remaining_cooldown",
    "DecisionResult",
    "RetryState",
    "evaluate_refresh",
    "should_refresh",
    "BACKOFF_BASE_SECONDS",
    "COOLDOWN_CHECK_INTERVAL_SECONDS",
    "COOLDOWN_SECONDS",
    "MAX_RETRY",
    "NORMAL_INTERVAL_SECONDS",
    "backoff_delay",
]
