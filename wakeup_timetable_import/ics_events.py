"""
Build typed events from the raw field maps of a WakeUp export.

Timestamps are taken as wall-clock values: a trailing 'Z' is dropped and no
timezone conversion happens, because WakeUp writes the local class times.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Optional

_TIMESTAMP_RE = re.compile(r"[0-9]{8}T[0-9]{6}")
_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%S"


@dataclass(frozen=True)
class IntermediateEvent:
    """One VEVENT after field validation, before period/week resolution."""

    title: str
    start: datetime
    end: datetime
    location: Optional[str] = None
    description: Optional[str] = None
    recurrence_until: Optional[date] = None  # None: single occurrence


def _parse_timestamp(raw: str | None) -> datetime | None:
    """Parse '20250901T080000' (optionally with a trailing 'Z')."""
    if raw is None:
        return None
    value = raw.strip()
    if value.endswith("Z"):
        value = value[:-1]
    if not _TIMESTAMP_RE.fullmatch(value):
        return None
    try:
        return datetime.strptime(value, _TIMESTAMP_FORMAT)
    except ValueError:
        # e.g. month 13
        return None


def _parse_until(rrule: str | None) -> date | None:
    """Pick UNTIL out of 'FREQ=WEEKLY;UNTIL=20260110T235959Z;INTERVAL=1'."""
    if not rrule or not rrule.strip():
        return None
    for part in rrule.split(";"):
        if part.startswith("UNTIL="):
            until = _parse_timestamp(part[len("UNTIL="):])
            return until.date() if until else None
    return None


def _clean_text(raw: str | None, unescape_newlines: bool = False) -> str | None:
    if raw is None:
        return None
    if unescape_newlines:
        raw = raw.replace("\\n", "\n")
    # TEXT escapes icalendar writes on export
    raw = raw.replace("\\,", ",").replace("\\;", ";")
    return raw.strip()


def build_event(fields: Dict[str, str]) -> IntermediateEvent | None:
    """
    Validate one field map.

    Returns None when SUMMARY is missing/blank or DTSTART/DTEND are missing
    or not in the exact 'YYYYMMDDTHHMMSS' form. A malformed RRULE UNTIL only
    drops the recurrence.
    """
    summary = _clean_text(fields.get("SUMMARY"))
    if not summary:
        return None
    start = _parse_timestamp(fields.get("DTSTART"))
    if start is None:
        return None
    end = _parse_timestamp(fields.get("DTEND"))
    if end is None:
        return None

    return IntermediateEvent(
        title=summary,
        start=start,
        end=end,
        location=_clean_text(fields.get("LOCATION")),
        description=_clean_text(fields.get("DESCRIPTION"), unescape_newlines=True),
        recurrence_until=_parse_until(fields.get("RRULE")),
    )
