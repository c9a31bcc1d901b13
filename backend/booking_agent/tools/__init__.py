"""Slot resolution core and its external collaborators."""

from .availability import find_conflicts, is_occupied
from .busy_intervals import parse_busy_intervals
from .business_hours import BusinessHoursPolicy, Weekday, WeekdaySchedule
from .calendar import CalendarSource, HttpCalendarSource, StaticCalendarSource, load_calendar
from .date_extractor import DateExtractor, GeminiDateExtractor, extract_desired_date
from .errors import (
    CalendarUnavailable,
    DateExtractionFailed,
    MalformedCalendarRecord,
    MalformedDesiredDate,
    SchedulingError,
    SearchExhausted
)
from .models import BusyInterval, RejectionReason, Resolution, ResolutionKind
from .resolver import ResolverConfig, SlotResolver
from .slot_search import find_next_available
from .timezone import TimezoneManager

__all__ = [
    "find_conflicts",
    "is_occupied",
    "parse_busy_intervals",
    "BusinessHoursPolicy",
    "Weekday",
    "WeekdaySchedule",
    "CalendarSource",
    "HttpCalendarSource",
    "StaticCalendarSource",
    "load_calendar",
    "DateExtractor",
    "GeminiDateExtractor",
    "extract_desired_date",
    "CalendarUnavailable",
    "DateExtractionFailed",
    "MalformedCalendarRecord",
    "MalformedDesiredDate",
    "SchedulingError",
    "SearchExhausted",
    "BusyInterval",
    "RejectionReason",
    "Resolution",
    "ResolutionKind",
    "ResolverConfig",
    "SlotResolver",
    "find_next_available",
    "TimezoneManager"
]
