"""Refresh orchestration: the refresher state machine and its host timer."""

from .engine import RefresherState, ScheduleRefresher
from .scheduler import REFRESH_JOB_ID, RefreshScheduler

__all__ = [
    "RefresherState",
    "ScheduleRefresher",
    "REFRESH_JOB_ID",
    "RefreshScheduler",
]
