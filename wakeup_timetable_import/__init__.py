"""Import WakeUp timetable exports as weekly class-schedule entries."""

__version__ = "0.1.0"

from .models import OccurrencePattern, ScheduleEntry  # noqa: E402
from .wakeup_parser import parse_wakeup_schedule  # noqa: E402

__all__ = ["OccurrencePattern", "ScheduleEntry", "parse_wakeup_schedule", "__version__"]
