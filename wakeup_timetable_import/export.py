"""
Export schedule entries to JSON, CSV, and ICS.
"""
from __future__ import annotations

import csv
import hashlib
import json
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import List

import icalendar
import pytz

from .models import OccurrencePattern, ScheduleEntry
from .periods import end_time_for_period, start_time_for_period

# WakeUp users are mostly on mainland China time
DEFAULT_TIMEZONE = "Asia/Shanghai"


def _first_teaching_week(entry: ScheduleEntry) -> int:
    """First week in range whose parity matches the entry's pattern."""
    week = entry.week_start
    if not entry.occurrence.admits(week):
        week += 1
    return week


def _class_date(first_monday: date, week: int, day_of_week: int) -> date:
    return first_monday + timedelta(weeks=week - 1, days=day_of_week - 1)


def _describe(entry: ScheduleEntry) -> str:
    """Same line layout WakeUp writes: period hint, room, instructor, then notes."""
    lines = [f"第{entry.period_start}-{entry.period_end}节", entry.room, entry.instructor]
    if entry.note:
        lines.append(entry.note)
    return "\n".join(lines)


def build_calendar(
    entries: List[ScheduleEntry],
    term_start: date,
    tz_name: str = DEFAULT_TIMEZONE,
) -> icalendar.Calendar:
    """Build a weekly-recurring VEVENT per entry; week 1 is the week of term_start."""
    cal = icalendar.Calendar()
    cal.add("prodid", "-//WakeUp Timetable Import//EN")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("x-wr-calname", "WakeUp Timetable")
    cal.add("x-wr-timezone", tz_name)

    tz = pytz.timezone(tz_name)
    first_monday = term_start - timedelta(days=term_start.weekday())

    for e in entries:
        start_time = start_time_for_period(e.period_start)
        end_time = end_time_for_period(e.period_end)
        if start_time is None or end_time is None:
            continue
        first_week = _first_teaching_week(e)
        if first_week > e.week_end:
            continue

        first_day = _class_date(first_monday, first_week, e.day_of_week)
        last_day = _class_date(first_monday, e.week_end, e.day_of_week)

        event = icalendar.Event()

        # Deterministic UID so re-exports update instead of duplicating
        uid_string = (
            f"{e.title}-{e.day_of_week}-{e.period_start}-{e.period_end}"
            f"-{e.week_start}-{e.week_end}-{e.occurrence.name}"
        )
        uid_hash = hashlib.md5(uid_string.encode("utf-8")).hexdigest()
        event.add("uid", f"{uid_hash}@wakeup-timetable-import")

        event.add("summary", e.title)
        event.add("description", _describe(e))
        location = " ".join(part for part in (e.room, e.instructor) if part)
        if location:
            event.add("location", location)

        event.add("dtstart", tz.localize(datetime.combine(first_day, start_time)))
        event.add("dtend", tz.localize(datetime.combine(first_day, end_time)))
        event.add("dtstamp", datetime.now(timezone.utc))

        until_dt = datetime(
            last_day.year, last_day.month, last_day.day, 23, 59, 59, tzinfo=timezone.utc
        )
        rrule = {"freq": "weekly", "until": until_dt}
        if e.occurrence is not OccurrencePattern.EVERY_WEEK:
            rrule["interval"] = 2
        event.add("rrule", rrule)

        cal.add_component(event)
    return cal


def export_ics(
    entries: List[ScheduleEntry],
    out_path: str | Path,
    term_start: date,
    tz_name: str = DEFAULT_TIMEZONE,
) -> None:
    """
    Export entries to iCalendar (.ics) for Apple/Google calendar.

    icalendar escapes ',' and ';' (undone on re-import) and folds lines
    longer than 75 octets; folded lines are not joined back by ics_blocks,
    so a long description may come back cut.
    """
    cal = build_calendar(entries, term_start, tz_name)
    Path(out_path).write_text(cal.to_ical().decode("utf-8"), encoding="utf-8")


def export_csv(entries: List[ScheduleEntry], out_path: str | Path) -> None:
    """Export entries to CSV."""
    if not entries:
        Path(out_path).write_text("", encoding="utf-8")
        return
    rows = [e.to_dict() for e in entries]
    keys = list(rows[0].keys())
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=keys, extrasaction="ignore")
        w.writeheader()
        w.writerows(rows)


def export_json(entries: List[ScheduleEntry], out_path: str | Path) -> None:
    """Export entries to JSON."""
    Path(out_path).write_text(
        json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False),
        encoding="utf-8",
    )


def export(
    entries: List[ScheduleEntry],
    out_path: str | Path,
    fmt: str,
    term_start: date | None = None,
    tz_name: str = DEFAULT_TIMEZONE,
) -> None:
    """Export to the given format: json, csv, or ics."""
    fmt = fmt.lower()
    if fmt == "ics":
        if term_start is None:
            raise ValueError("ICS export needs a term start date (week 1).")
        export_ics(entries, out_path, term_start, tz_name)
    elif fmt == "csv":
        export_csv(entries, out_path)
    elif fmt == "json":
        export_json(entries, out_path)
    else:
        raise ValueError(f"Unsupported format: {fmt}. Use json, csv, or ics.")
