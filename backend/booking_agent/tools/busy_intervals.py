from datetime import timedelta
from typing import Iterable, List

from .errors import MalformedCalendarRecord
from .models import BusyInterval
from ..utils.time_utils import TimeFormat
from ..utils.logger import logger


def parse_busy_record(record: str, index: int, meeting_duration: timedelta) -> BusyInterval:
    """
    Parse one "<label>,<yyyy/MM/dd HH:mm:ss>" record into a BusyInterval.

    Every booking lasts exactly one meeting duration from its anchor time.
    """
    label, separator, raw_date = str(record).partition(",")
    if not separator:
        raise MalformedCalendarRecord(record, index, "missing ',' between label and timestamp")

    try:
        start = TimeFormat.parse(raw_date)
    except ValueError as e:
        raise MalformedCalendarRecord(record, index, str(e)) from e

    return BusyInterval(label=label.strip(), start=start, end=start + meeting_duration)


def parse_busy_intervals(records: Iterable[str], meeting_duration: timedelta) -> List[BusyInterval]:
    """
    Parse a calendar snapshot into busy intervals.

    Args:
        records: Ordered raw calendar records
        meeting_duration: Fixed length given to every booking

    Returns:
        Intervals in record order

    Raises:
        MalformedCalendarRecord: On the first record that fails to parse.
            No partial calendar is ever returned.
    """
    if meeting_duration <= timedelta(0):
        raise ValueError("Meeting duration must be positive")

    intervals = [
        parse_busy_record(record, index, meeting_duration)
        for index, record in enumerate(records or [])
    ]
    logger.info(f"Parsed {len(intervals)} busy intervals from calendar")
    return intervals
