"""
Command-line interface: parse a WakeUp timetable export and export it to file.
"""
from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import List

from . import __version__
from .export import DEFAULT_TIMEZONE, export
from .models import OccurrencePattern, ScheduleEntry, entries_for_week
from .sample import sample_entries
from .wakeup_parser import first_week_monday, parse_wakeup_schedule

_DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def _parse_date(text: str) -> date:
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected YYYY-MM-DD, got {text!r}")


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected a week number, got {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError("Week number must be >= 1")
    return value


def _print_entries(entries: List[ScheduleEntry]) -> None:
    print("Day | Periods | Weeks   | Title                | Room         | Instructor")
    print("-" * 78)
    for e in entries:
        day = _DAY_NAMES[e.day_of_week - 1] if 1 <= e.day_of_week <= 7 else "?"
        periods = f"{e.period_start}-{e.period_end}"
        weeks = f"{e.week_start}-{e.week_end}"
        if e.occurrence is OccurrencePattern.ODD_WEEKS:
            weeks += "o"
        elif e.occurrence is OccurrencePattern.EVEN_WEEKS:
            weeks += "e"
        print(f"{day} | {periods:<7} | {weeks:<7} | {e.title[:20]:<20} | {e.room[:12]:<12} | {e.instructor}")


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Convert a WakeUp timetable export (.wakeup_schedule / .ics) into "
            "normalized class-schedule entries and export them to JSON / CSV / ICS."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "input",
        nargs="?",
        metavar="INPUT",
        help="WakeUp export file (.wakeup_schedule or .ics).",
    )
    parser.add_argument(
        "-o",
        "--output",
        default="wakeup_timetable",
        help="Output path (without extension). Default: wakeup_timetable",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "csv", "ics"],
        default="json",
        help="Export format. Default: json",
    )
    parser.add_argument(
        "--term-start",
        metavar="YYYY-MM-DD",
        type=_parse_date,
        help="(ICS only) Any day of week 1. Default: Monday of the earliest class in INPUT.",
    )
    parser.add_argument(
        "--timezone",
        default=DEFAULT_TIMEZONE,
        help=f"(ICS only) Timezone for class times. Default: {DEFAULT_TIMEZONE}",
    )
    parser.add_argument(
        "--week",
        type=_positive_int,
        metavar="N",
        help="Only keep classes that meet in week N.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--sample",
        action="store_true",
        help="Ignore INPUT and use the built-in sample timetable.",
    )
    source.add_argument(
        "--fallback-sample",
        action="store_true",
        help="Use the built-in sample timetable when INPUT has no usable classes.",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the parsed classes then exit.",
    )
    args = parser.parse_args(argv)

    term_start = args.term_start
    if args.sample:
        entries = sample_entries()
    else:
        if not args.input:
            print("Error: INPUT file is required (or use --sample).", file=sys.stderr)
            return 1
        input_path = Path(args.input)
        if not input_path.exists():
            print(f"Error: input file not found: {input_path}", file=sys.stderr)
            return 1
        try:
            content = input_path.read_text(encoding="utf-8", errors="replace")
            entries = parse_wakeup_schedule(content=content)
        except Exception as e:
            print(f"Error parsing WakeUp export: {e}", file=sys.stderr)
            return 1

        if not entries:
            if not args.fallback_sample:
                print(
                    f"Error: no usable classes found in {input_path}. "
                    "Check that it is a WakeUp .wakeup_schedule / .ics export.",
                    file=sys.stderr,
                )
                return 1
            print("No usable classes found in input, using the sample timetable.")
            entries = sample_entries()
        elif term_start is None:
            term_start = first_week_monday(content)

    if args.week is not None:
        entries = entries_for_week(entries, args.week)

    if args.list:
        _print_entries(entries)
        return 0

    if args.format == "ics" and term_start is None:
        print("Error: --term-start is required for ICS export of the sample timetable.", file=sys.stderr)
        return 1

    ext = {"ics": ".ics", "csv": ".csv", "json": ".json"}[args.format]
    out_path = Path(args.output).with_suffix(ext) if Path(args.output).suffix else Path(args.output + ext)
    try:
        export(entries, out_path, args.format, term_start=term_start, tz_name=args.timezone)
    except Exception as e:
        print(f"Error exporting timetable: {e}", file=sys.stderr)
        return 1
    print(f"Exported {len(entries)} class(es) to {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
