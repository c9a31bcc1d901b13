from datetime import datetime, timedelta
from typing import Iterator, Sequence

from .availability import is_occupied
from .errors import SearchExhausted
from .models import BusyInterval
from ..utils.time_utils import TimeFormat
from ..utils.logger import logger


def candidate_steps(start: datetime, meeting_duration: timedelta) -> Iterator[datetime]:
    """Yield start + 1·duration, start + 2·duration, ... without end."""
    candidate = start
    while True:
        candidate = candidate + meeting_duration
        yield candidate


def meets_minimum_notice(candidate: datetime, now: datetime, minimum_notice_minutes: int) -> bool:
    return TimeFormat.minutes_between(now, candidate) >= minimum_notice_minutes


def find_next_available(
    start: datetime,
    busy_intervals: Sequence[BusyInterval],
    meeting_duration: timedelta,
    now: datetime,
    minimum_notice_minutes: int,
    horizon: datetime
) -> datetime:
    """
    Walk forward from start one meeting duration at a time.

    The first step is start + duration; start itself is never returned.
    Stops at the first candidate that is free and at least the minimum
    notice away from now. Candidates are not snapped to the hour and busy
    ranges are not skipped in bulk.

    Raises:
        SearchExhausted: If the next candidate would pass the horizon
    """
    steps = 0
    for candidate in candidate_steps(start, meeting_duration):
        if candidate > horizon:
            logger.warning(f"Slot search from {start} gave up at horizon {horizon} after {steps} steps")
            raise SearchExhausted(start, horizon)

        steps += 1
        if is_occupied(candidate, busy_intervals, meeting_duration):
            continue
        if not meets_minimum_notice(candidate, now, minimum_notice_minutes):
            continue

        logger.info(f"Slot search from {start} found {candidate} after {steps} steps")
        return candidate
