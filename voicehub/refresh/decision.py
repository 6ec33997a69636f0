"""Refresh decision engine based on retry and cooldown state."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from voicehub.refresh.cooldown import remaining_cooldown
from voicehub.refresh.policy import COOLDOWN_SECONDS, MAX_RETRY


@dataclass(slots=True)
class RetryState:
    attempt: int = 0
    last_failure_time: Optional[datetime] = None

    def reset(self) -> None:
        self.attempt = 0
        self.last_failure_time = None

    def record_exhausted(self, now: datetime, max_retries: int = MAX_RETRY) -> None:
        self.attempt = max_retries
        self.last_failure_time = now


@dataclass(slots=True)
class DecisionResult:
    should_run: bool
    reason: str
    remaining_seconds: float = 0.0


def evaluate_refresh(
    state: RetryState,
    *,
    now: datetime,
    cooldown_seconds: float = COOLDOWN_SECONDS,
) -> DecisionResult:
    if state.last_failure_time is None:
        return DecisionResult(True, "no recent failure")

    remaining = remaining_cooldown(last_failure=state.last_failure_time, now=now, cooldown_seconds=cooldown_seconds)
    if remaining > 0:
        return DecisionResult(False, f"cooldown active ({int(remaining)}s remaining)", remaining)

    return DecisionResult(True, "cooldown elapsed")


def should_refresh(state: RetryState, *, now: datetime, cooldown_seconds: float = COOLDOWN_SECONDS) -> bool:
    return evaluate_refresh(state, now=now, cooldown_seconds=cooldown_seconds).should_run


__all__ = ["RetryState", "DecisionResult", "evaluate_refresh", "should_refresh"]
