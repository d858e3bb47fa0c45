"""
Split WakeUp calendar export text into per-event field maps.

Only the small iCalendar subset the WakeUp timetable app writes is
understood: one ``KEY[;params]:VALUE`` property per line, events delimited
by ``BEGIN:VEVENT`` / ``END:VEVENT``. Lines outside an event block (the
VCALENDAR header and so on) are ignored.
"""
from __future__ import annotations

import re
from typing import Dict, Iterator, List

BEGIN_EVENT = "BEGIN:VEVENT"
END_EVENT = "END:VEVENT"

# Only CR, LF and CRLF end a line; U+2028, \x0b etc. stay inside values
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> List[str]:
    lines = _LINE_BREAK_RE.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def iter_event_lines(content: str) -> Iterator[List[str]]:
    """
    Yield the raw (stripped) lines of every closed VEVENT block.

    A block that is never closed before the text ends yields nothing.
    """
    collecting = False
    buffer: List[str] = []
    for raw_line in split_lines(content):
        line = raw_line.strip()
        if line == BEGIN_EVENT:
            collecting = True
            buffer = []
        elif line == END_EVENT:
            if collecting:
                yield buffer
            collecting = False
            buffer = []
        elif collecting:
            buffer.append(line)


def parse_fields(lines: List[str]) -> Dict[str, str]:
    """
    Turn ``KEY;PARAM=x:VALUE`` lines into ``{KEY: VALUE}``.

    The key is whatever precedes the first ':' with any ';' parameters cut
    off; the value keeps further colons. Lines without a colon are skipped,
    and a repeated key keeps its last value.
    """
    fields: Dict[str, str] = {}
    for line in lines:
        raw_key, sep, value = line.partition(":")
        if not sep:
            continue
        key = raw_key.split(";", 1)[0]
        fields[key] = value
    return fields


def iter_event_blocks(content: str) -> Iterator[Dict[str, str]]:
    for lines in iter_event_lines(content):
        yield parse_fields(lines)
