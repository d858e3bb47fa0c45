"""
Fixed class-period table used by WakeUp schedules.

A day has twelve periods. Each period is 45 minutes long and is identified
only by its start time; lookups are exact, a start time between two known
slots does not map to anything.
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta

PERIOD_MINUTES = 45
MAX_PERIOD = 12

PERIOD_START_TIMES: tuple[tuple[time, int], ...] = (
    (time(8, 0), 1),
    (time(8, 55), 2),
    (time(10, 10), 3),
    (time(11, 5), 4),
    (time(14, 0), 5),
    (time(14, 55), 6),
    (time(16, 10), 7),
    (time(17, 5), 8),
    (time(18, 30), 9),
    (time(19, 25), 10),
    (time(20, 30), 11),
    (time(21, 25), 12),
)


def period_for_start_time(t: time) -> int | None:
    """Return the period that starts exactly at ``t``, else None."""
    for start, slot in PERIOD_START_TIMES:
        if start == t:
            return slot
    return None


def start_time_for_period(period: int) -> time | None:
    for start, slot in PERIOD_START_TIMES:
        if slot == period:
            return start
    return None


def end_time_for_period(period: int) -> time | None:
    start = start_time_for_period(period)
    if start is None:
        return None
    end = datetime.combine(date.min, start) + timedelta(minutes=PERIOD_MINUTES)
    return end.time()
