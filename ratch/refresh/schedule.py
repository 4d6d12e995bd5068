"""Interval scheduling for command re-runs."""

from __future__ import annotations


def due(now: float, last_trigger: float, interval: float) -> bool:
    """Return whether ``interval`` seconds have elapsed since ``last_trigger``.

    Elapsed time is compared as one duration; ``now`` and ``last_trigger`` are
    monotonic clock readings.
    """
    return now - last_trigger >= interval


class IntervalScheduler:
    """Track the last trigger time and report when the next run is due."""

    def __init__(self, interval: float, started_at: float) -> None:
        if interval <= 0:
            raise ValueError("interval must be > 0")
        self.interval = interval
        self.last_trigger = started_at

    def poll(self, now: float) -> bool:
        """Return True and restart the interval if a run is due at ``now``."""
        if not due(now, self.last_trigger, self.interval):
            return False
        self.last_trigger = now
        return True
