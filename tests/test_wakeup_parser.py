"""Tests for wakeup_parser.py – whole-file parsing."""
import random
from datetime import date

import pytest

from wakeup_timetable_import import OccurrencePattern, parse_wakeup_schedule
from wakeup_timetable_import.wakeup_parser import build_events, first_week_monday


def _vevent(summary="高等数学", start="20250901T080000", end="20250901T093000",
            rrule="FREQ=WEEKLY;UNTIL=20251222T235959Z;INTERVAL=1",
            location=None, description=None):
    lines = ["BEGIN:VEVENT"]
    if summary is not None:
        lines.append(f"SUMMARY:{summary}")
    if start is not None:
        lines.append(f"DTSTART;TZID=Asia/Shanghai:{start}")
    if end is not None:
        lines.append(f"DTEND;TZID=Asia/Shanghai:{end}")
    if rrule is not None:
        lines.append(f"RRULE:{rrule}")
    if location is not None:
        lines.append(f"LOCATION:{location}")
    if description is not None:
        lines.append(f"DESCRIPTION:{description}")
    lines.append("END:VEVENT")
    return "\n".join(lines)


def _calendar(*events):
    return "\n".join(
        ["BEGIN:VCALENDAR", "VERSION:2.0", "PRODID:-//YZune//WakeUpSchedule//EN", *events, "END:VCALENDAR"]
    ) + "\n"


SCHEDULE = _calendar(
    _vevent(),
    _vevent(
        summary="大学英语",
        start="20250902T101000",
        end="20250902T115000",
        rrule="FREQ=WEEKLY;UNTIL=20251104T235959Z",
        location="B203 李老师",
        description="第3 - 5节\\nB203\\n李老师",
    ),
    _vevent(
        summary="体育",
        start="20250915T183000",
        end="20250915T200500",
        rrule=None,
        location="操场",
    ),
)


class TestParseWakeupSchedule:
    def test_entries(self):
        entries = parse_wakeup_schedule(SCHEDULE)
        assert [e.title for e in entries] == ["高等数学", "大学英语", "体育"]

        math, english, pe = entries
        assert (math.day_of_week, math.period_start, math.period_end) == (1, 1, 2)
        assert (math.week_start, math.week_end) == (1, 17)
        assert (math.room, math.instructor, math.note) == ("", "", "")

        assert (english.day_of_week, english.period_start, english.period_end) == (2, 3, 5)
        assert (english.week_start, english.week_end) == (1, 10)
        assert (english.room, english.instructor) == ("B203", "李老师")
        assert english.note == "第3 - 5节\nB203\n李老师"

        # no RRULE: single occurrence, 95 min -> 2 slots
        assert (pe.day_of_week, pe.period_start, pe.period_end) == (1, 9, 10)
        assert (pe.week_start, pe.week_end) == (3, 3)
        assert (pe.room, pe.instructor) == ("操场", "")

    def test_all_every_week(self):
        assert all(e.occurrence is OccurrencePattern.EVERY_WEEK for e in parse_wakeup_schedule(SCHEDULE))

    def test_idempotent(self):
        assert parse_wakeup_schedule(SCHEDULE) == parse_wakeup_schedule(SCHEDULE)

    def test_ranges_valid(self):
        for e in parse_wakeup_schedule(SCHEDULE):
            assert e.week_end >= e.week_start >= 1
            assert e.period_end >= e.period_start >= 1

    @pytest.mark.parametrize("missing", ["summary", "start", "end"])
    def test_missing_mandatory_field_drops_only_that_block(self, missing):
        kwargs = {"summary": "坏的", missing: None}
        broken = _vevent(**kwargs)
        entries = parse_wakeup_schedule(_calendar(_vevent(), broken, _vevent(summary="线性代数")))
        assert [e.title for e in entries] == ["高等数学", "线性代数"]

    def test_time_table_fallback(self):
        [entry] = parse_wakeup_schedule(_calendar(_vevent(description="备注")))
        assert (entry.period_start, entry.period_end) == (1, 2)

    def test_hint_beats_time_table(self):
        [entry] = parse_wakeup_schedule(_calendar(_vevent(description="第3-5节")))
        assert (entry.period_start, entry.period_end) == (3, 5)

    def test_location_split(self):
        entries = parse_wakeup_schedule(_calendar(
            _vevent(location="A301 Wang"),
            _vevent(location="Gym"),
        ))
        assert [(e.room, e.instructor) for e in entries] == [("A301", "Wang"), ("Gym", "")]

    def test_same_title_same_color(self):
        entries = parse_wakeup_schedule(_calendar(
            _vevent(),
            _vevent(start="20250903T140000", end="20250903T153000"),
        ))
        assert entries[0].color == entries[1].color

    def test_week_numbers_independent_of_block_order(self):
        blocks = [
            _vevent(summary="A", start="20250910T080000", end="20250910T093000", rrule=None),
            _vevent(summary="B", start="20250903T085500", end="20250903T094000", rrule=None),
            _vevent(summary="C", start="20250926T140000", end="20250926T153000",
                    rrule="FREQ=WEEKLY;UNTIL=20251031T235959Z"),
        ]
        expected = {e.title: (e.week_start, e.week_end) for e in parse_wakeup_schedule(_calendar(*blocks))}
        assert expected == {"A": (2, 2), "B": (1, 1), "C": (4, 9)}

        rng = random.Random(7)
        for _ in range(5):
            shuffled = blocks[:]
            rng.shuffle(shuffled)
            got = {e.title: (e.week_start, e.week_end) for e in parse_wakeup_schedule(_calendar(*shuffled))}
            assert got == expected

    def test_no_blocks(self):
        assert parse_wakeup_schedule("BEGIN:VCALENDAR\nEND:VCALENDAR\n") == []
        assert parse_wakeup_schedule("") == []

    def test_overlong_hint_does_not_raise(self):
        description = "第1-" + "9" * 5000 + "节"
        [entry] = parse_wakeup_schedule(_calendar(_vevent(description=description)))
        assert (entry.period_start, entry.period_end) == (1, 2)

    def test_dtend_on_later_date(self):
        [entry] = parse_wakeup_schedule(_calendar(
            _vevent(start="20250901T080000", end="20250902T093000", rrule=None)
        ))
        assert (entry.period_start, entry.period_end) == (1, 2)
        assert (entry.week_start, entry.week_end) == (1, 1)

    def test_utc_suffix_not_converted(self):
        [entry] = parse_wakeup_schedule(_calendar(
            _vevent(start="20250901T080000Z", end="20250901T093000Z")
        ))
        assert entry.period_start == 1

    def test_from_path(self, tmp_path):
        path = tmp_path / "未命名.wakeup_schedule"
        path.write_text(SCHEDULE, encoding="utf-8")
        assert parse_wakeup_schedule(path=path) == parse_wakeup_schedule(SCHEDULE)

    def test_content_or_path_required(self, tmp_path):
        with pytest.raises(ValueError):
            parse_wakeup_schedule()
        with pytest.raises(ValueError):
            parse_wakeup_schedule(content="", path=tmp_path / "x.ics")


class TestHelpers:
    def test_build_events_skips_rejects(self):
        events = build_events(_calendar(_vevent(), _vevent(start="bad")))
        assert len(events) == 1

    def test_first_week_monday(self):
        assert first_week_monday(SCHEDULE) == date(2025, 9, 1)
        assert first_week_monday("") is None
