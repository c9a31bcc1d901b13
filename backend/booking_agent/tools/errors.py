from datetime import datetime
from typing import Optional


class SchedulingError(Exception):
    """Base class for failures raised while resolving a booking request."""


class MalformedCalendarRecord(SchedulingError):
    def __init__(self, record: str, index: int, detail: Optional[str] = None):
        self.record = record
        self.index = index
        self.detail = detail
        message = f"Calendar record #{index} could not be parsed: {record!r}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class MalformedDesiredDate(SchedulingError):
    def __init__(self, raw: Optional[str], detail: Optional[str] = None):
        self.raw = raw
        self.detail = detail
        message = f"Desired date could not be parsed: {raw!r}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class SearchExhausted(SchedulingError):
    """No bookable slot was found before the search horizon. Recoverable."""

    def __init__(self, desired: datetime, horizon: datetime):
        self.desired = desired
        self.horizon = horizon
        super().__init__(
            f"No available slot after {desired.isoformat()} before {horizon.isoformat()}"
        )


class CalendarUnavailable(SchedulingError):
    pass


class DateExtractionFailed(SchedulingError):
    pass
