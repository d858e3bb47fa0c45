"""
Turn validated WakeUp events into ScheduleEntry objects.

Per event this derives:
- periods: from a '第3-5节' hint in the description, else from the start
  time via the fixed period table (duration / 45 min gives the span);
  events where both fail are dropped
- weeks: counted from the Monday of the earliest event in the whole set
- room / instructor: from description lines 2-3, else split off LOCATION
- color: picked from a fixed palette by a stable hash of the title
"""
from __future__ import annotations

import hashlib
import re
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from .ics_blocks import split_lines
from .ics_events import IntermediateEvent
from .models import OccurrencePattern, ScheduleEntry
from .periods import PERIOD_MINUTES, period_for_start_time

# ARGB
COLOR_PALETTE: Tuple[int, ...] = (
    0xFFE57373, 0xFF64B5F6, 0xFF81C784, 0xFFFFB74D,
    0xFF4DB6AC, 0xFFF06292, 0xFF9575CD, 0xFFAED581,
    0xFFFFD54F, 0xFF4FC3F7, 0xFFBA68C8, 0xFFFF8A65,
)

# "第 3 - 5 节"; hyphen, tilde, em dash and en dash between the numbers
_PERIOD_HINT_RE = re.compile(r"第\s*(\d{1,3})\s*[-~—–]\s*(\d{1,3})\s*节")


# ──────────────────────────────────────────────────────────────────
#  Weeks
# ──────────────────────────────────────────────────────────────────

def _monday_of(d: date) -> date:
    return d - timedelta(days=d.weekday())


def reference_monday(events: Sequence[IntermediateEvent]) -> date | None:
    """Monday on/before the earliest start date; week 1 starts here."""
    if not events:
        return None
    return _monday_of(min(e.start.date() for e in events))


def _week_number(first_monday: date, d: date) -> int:
    return (_monday_of(d) - first_monday).days // 7 + 1


# ──────────────────────────────────────────────────────────────────
#  Periods
# ──────────────────────────────────────────────────────────────────

def _periods_from_hint(description: Optional[str]) -> Tuple[int, int] | None:
    """First line containing '第N-M节' wins; ranges that run backwards or start at 0 are ignored."""
    if description is None:
        return None
    for line in split_lines(description):
        m = _PERIOD_HINT_RE.search(line)
        if not m:
            continue
        start, end = int(m.group(1)), int(m.group(2))
        if 1 <= start <= end:
            return start, end
    return None


def _periods_from_time(event: IntermediateEvent) -> Tuple[int, int] | None:
    start_period = period_for_start_time(event.start.time())
    if start_period is None:
        return None
    # time of day only; a DTEND on a later date does not stretch the span
    span = (
        datetime.combine(date.min, event.end.time())
        - datetime.combine(date.min, event.start.time())
    )
    minutes = int(span.total_seconds() // 60)
    slots = max(minutes // PERIOD_MINUTES, 1)
    return start_period, start_period + slots - 1


def derive_periods(event: IntermediateEvent) -> Tuple[int, int] | None:
    return _periods_from_hint(event.description) or _periods_from_time(event)


# ──────────────────────────────────────────────────────────────────
#  Room / instructor
# ──────────────────────────────────────────────────────────────────

def _split_location(location: Optional[str]) -> Tuple[str, str]:
    """'A301 Wang' -> ('A301', 'Wang'); 'Gym' -> ('Gym', ''); '*' around the name is dropped."""
    if location is None:
        return "", ""
    location = location.strip()
    if " " not in location:
        return location, ""
    room, _, instructor = location.rpartition(" ")
    return room.strip(), instructor.strip().strip("*")


def split_room_and_instructor(
    location: Optional[str], description: Optional[str]
) -> Tuple[str, str]:
    desc_room = desc_instructor = ""
    if description is not None:
        lines = split_lines(description)
        if len(lines) >= 3:
            desc_room = lines[1].strip()
            desc_instructor = lines[2].strip().strip("*")

    loc_room, loc_instructor = _split_location(location)
    room = desc_room if desc_room.strip() else loc_room
    instructor = desc_instructor if desc_instructor.strip() else loc_instructor
    return room, instructor


# ──────────────────────────────────────────────────────────────────
#  Color
# ──────────────────────────────────────────────────────────────────

def pick_color(title: str) -> int:
    """Same title -> same palette color, across runs (no builtin hash())."""
    digest = hashlib.md5(title.encode("utf-8")).hexdigest()
    return COLOR_PALETTE[int(digest, 16) % len(COLOR_PALETTE)]


# ──────────────────────────────────────────────────────────────────
#  Public entry point
# ──────────────────────────────────────────────────────────────────

def _resolve_event(event: IntermediateEvent, first_monday: date) -> ScheduleEntry | None:
    periods = derive_periods(event)
    if periods is None:
        return None
    period_start, period_end = periods

    week_start = _week_number(first_monday, event.start.date())
    last_day = event.recurrence_until or event.end.date()
    week_end = max(_week_number(first_monday, last_day), week_start)

    room, instructor = split_room_and_instructor(event.location, event.description)

    return ScheduleEntry(
        title=event.title,
        day_of_week=event.start.isoweekday(),
        period_start=period_start,
        period_end=period_end,
        week_start=week_start,
        week_end=week_end,
        room=room,
        instructor=instructor,
        note=event.description or "",
        occurrence=OccurrencePattern.EVERY_WEEK,
        color=pick_color(event.title),
    )


def resolve_schedule(events: Sequence[IntermediateEvent]) -> List[ScheduleEntry]:
    """Resolve all events against one shared week-1 Monday; input order is kept."""
    first_monday = reference_monday(events)
    if first_monday is None:
        return []
    entries: List[ScheduleEntry] = []
    for event in events:
        entry = _resolve_event(event, first_monday)
        if entry is not None:
            entries.append(entry)
    return entries
