"""
Normalized class-schedule entries.

A ScheduleEntry is one weekly class meeting: which day, which periods,
which weeks of the semester. Entries are immutable; the grid/detail
views consume a plain list of them.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List

# Week count shown by the grid when there is nothing to size it from
DEFAULT_MAX_WEEK = 20


class OccurrencePattern(Enum):
    """Which weeks inside ``week_start..week_end`` the class actually meets."""

    EVERY_WEEK = 0
    ODD_WEEKS = 1
    EVEN_WEEKS = 2

    def admits(self, week: int) -> bool:
        if self is OccurrencePattern.ODD_WEEKS:
            return week % 2 == 1
        if self is OccurrencePattern.EVEN_WEEKS:
            return week % 2 == 0
        return True


@dataclass(frozen=True)
class ScheduleEntry:
    title: str
    day_of_week: int  # 1-7: Monday-Sunday
    period_start: int
    period_end: int
    week_start: int
    week_end: int
    room: str = ""
    instructor: str = ""
    note: str = ""
    occurrence: OccurrencePattern = OccurrencePattern.EVERY_WEEK
    color: int = 0xFFE57373  # ARGB
    credit: float = 0.0

    def step(self) -> int:
        """Number of periods the class spans."""
        return self.period_end - self.period_start + 1

    def is_in_week(self, week: int) -> bool:
        if week < self.week_start or week > self.week_end:
            return False
        return self.occurrence.admits(week)

    def to_dict(self) -> Dict[str, object]:
        """Flat JSON/CSV-friendly mapping."""
        return {
            "title": self.title,
            "day_of_week": self.day_of_week,
            "period_start": self.period_start,
            "period_end": self.period_end,
            "week_start": self.week_start,
            "week_end": self.week_end,
            "occurrence": self.occurrence.name,
            "room": self.room,
            "instructor": self.instructor,
            "note": self.note,
            "color": f"#{self.color & 0xFFFFFFFF:08X}",
            "credit": self.credit,
        }


def max_week(entries: Iterable[ScheduleEntry]) -> int:
    weeks = [e.week_end for e in entries]
    return max(weeks) if weeks else DEFAULT_MAX_WEEK


def entries_for_week(entries: Iterable[ScheduleEntry], week: int) -> List[ScheduleEntry]:
    """Entries that meet in ``week`` (1-based), in their original order."""
    if week < 1:
        raise ValueError(f"Week must be >= 1, got {week}")
    return [e for e in entries if e.is_in_week(week)]
