"""Cooldown logic to stop hammering a failing feed."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from voicehub.refresh.policy import COOLDOWN_SECONDS


def cooldown_deadline(last_failure: datetime, cooldown_seconds: float = COOLDOWN_SECONDS) -> datetime:
    return last_failure + timedelta(seconds=cooldown_seconds)


def remaining_cooldown(
    *, last_failure: Optional[datetime], now: datetime, cooldown_seconds: float = COOLDOWN_SECONDS
) -> float:
    if last_failure is None:
        return 0.0
    return max((cooldown_deadline(last_failure, cooldown_seconds) - now).total_seconds(), 0.0)


def is_in_cooldown(
    *, last_failure: Optional[datetime], now: datetime, cooldown_seconds: float = COOLDOWN_SECONDS
) -> bool:
    return remaining_cooldown(last_failure=last_failure, now=now, cooldown_seconds=cooldown_seconds) > 0


__all__ = ["cooldown_deadline", "remaining_cooldown", "is_in_cooldown"]
