"""Time helpers for the simulation clock."""

from __future__ import annotations

from datetime import datetime

SECONDS_PER_DAY = 86400


def whole_days_between(start: datetime, end: datetime) -> int:
    """Number of complete 24 hour periods from ``start`` to ``end`` (floored).

    Measured on absolute time, so a 23 hour day across a DST change is not a whole day.
    """
    return int((end.timestamp() - start.timestamp()) // SECONDS_PER_DAY)


def days_elapsed(since: datetime | None, now: datetime, days: int) -> bool:
    """True when no mark exists yet or at least ``days`` whole days have passed."""
    if since is None:
        return True
    return whole_days_between(since, now) >= days
