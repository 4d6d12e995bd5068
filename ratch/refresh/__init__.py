"""Refresh engine: interval scheduling, background runs, and staleness resolution."""

from .executor import DEFAULT_MAX_IN_FLIGHT, Cancelled, Failure, Lines, Outcome, PendingResult, RefreshExecutor
from .resolver import admit, failure_line
from .schedule import IntervalScheduler, due

__all__ = [
    "Cancelled",
    "DEFAULT_MAX_IN_FLIGHT",
    "Failure",
    "IntervalScheduler",
    "Lines",
    "Outcome",
    "PendingResult",
    "RefreshExecutor",
    "admit",
    "due",
    "failure_line",
]
