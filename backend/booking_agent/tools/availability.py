from datetime import datetime, timedelta
from typing import Iterable, List

from .models import BusyInterval


def overlaps(candidate: datetime, meeting_duration: timedelta, interval: BusyInterval) -> bool:
    # Half-open ranges: touching edges do not conflict.
    return candidate < interval.end and candidate + meeting_duration > interval.start


def find_conflicts(
    candidate: datetime,
    busy_intervals: Iterable[BusyInterval],
    meeting_duration: timedelta
) -> List[BusyInterval]:
    """Return every busy interval that the slot [candidate, candidate + duration) overlaps."""
    return [interval for interval in busy_intervals if overlaps(candidate, meeting_duration, interval)]


def is_occupied(
    candidate: datetime,
    busy_intervals: Iterable[BusyInterval],
    meeting_duration: timedelta
) -> bool:
    return any(overlaps(candidate, meeting_duration, interval) for interval in busy_intervals)
