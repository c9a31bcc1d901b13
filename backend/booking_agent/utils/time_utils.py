"""
Time utility functions for the booking wire format and user-facing display.

This module provides a consistent interface for time handling throughout the application:
- Wire format (calendar records, LLM answers, stored state): yyyy/MM/dd HH:mm:ss
- User display: weekday, date and 12-hour time

All timestamps are naive local time in the business timezone; no offsets are carried.
"""

from typing import Optional
from datetime import datetime


TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"


class TimeFormat:
    """
    Utility class for timestamp parsing and formatting.
    Parsing is strict: anything other than the wire format is refused.
    """

    @staticmethod
    def parse(raw: str) -> datetime:
        """
        Parse a wire-format timestamp.

        Args:
            raw: Timestamp such as "2025/03/10 13:00:00"

        Returns:
            Naive datetime

        Raises:
            ValueError: If the string does not match the wire format
        """
        if raw is None:
            raise ValueError("timestamp is missing")
        return datetime.strptime(str(raw).strip(), TIMESTAMP_FORMAT)

    @staticmethod
    def format(moment: datetime) -> str:
        """Render a datetime in the wire format."""
        return moment.strftime(TIMESTAMP_FORMAT)

    @staticmethod
    def to_12hr_display(moment: datetime) -> str:
        """
        Convert a datetime to a user-friendly 12-hour time.

        Examples:
            15:00 → "3 PM"
            15:30 → "3:30 PM"
            09:00 → "9 AM"
        """
        am_pm = "AM" if moment.hour < 12 else "PM"

        hour_12 = moment.hour % 12
        if hour_12 == 0:
            hour_12 = 12

        if moment.minute == 0:
            return f"{hour_12} {am_pm}"
        return f"{hour_12}:{moment.minute:02d} {am_pm}"

    @staticmethod
    def to_friendly(moment: datetime) -> str:
        """
        Full spoken-style description, e.g. "Monday, March 10 at 2 PM".
        """
        return f"{moment.strftime('%A, %B')} {moment.day} at {TimeFormat.to_12hr_display(moment)}"

    @staticmethod
    def minutes_between(start: datetime, end: datetime) -> float:
        """Signed minutes from start to end."""
        return (end - start).total_seconds() / 60


# Convenience functions for common use cases

def parse_timestamp(raw: str) -> datetime:
    """Shorthand for TimeFormat.parse()"""
    return TimeFormat.parse(raw)


def format_timestamp(moment: Optional[datetime]) -> Optional[str]:
    """Shorthand for TimeFormat.format() that passes None through."""
    if moment is None:
        return None
    return TimeFormat.format(moment)
