"""
Parse a WakeUp timetable export (.wakeup_schedule / .ics) into schedule entries.

Usage pattern:
- In the WakeUp app: 导出 → 导出为日历文件 (.ics), or share the
  .wakeup_schedule file it produces
- Pass the file path (or its text) to parse_wakeup_schedule()

Pipeline: text → VEVENT field maps (ics_blocks) → typed events (ics_events)
→ entries (resolver). Bad blocks and events without resolvable periods are
dropped silently; an empty list means "nothing usable in this input".
"""
from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import List

from .ics_blocks import iter_event_blocks
from .ics_events import IntermediateEvent, build_event
from .models import ScheduleEntry
from .resolver import reference_monday, resolve_schedule


def _read_content(content: str | None, path: str | Path | None) -> str:
    if (content is None) == (path is None):
        raise ValueError("Provide exactly one of content or path.")
    if path is not None:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    return content  # type: ignore[return-value]


def build_events(content: str) -> List[IntermediateEvent]:
    events: List[IntermediateEvent] = []
    for fields in iter_event_blocks(content):
        event = build_event(fields)
        if event is not None:
            events.append(event)
    return events


def first_week_monday(content: str) -> date | None:
    """The Monday parse_wakeup_schedule() counts as the start of week 1."""
    return reference_monday(build_events(content))


def parse_wakeup_schedule(
    content: str | None = None,
    path: str | Path | None = None,
) -> List[ScheduleEntry]:
    return resolve_schedule(build_events(_read_content(content, path)))
