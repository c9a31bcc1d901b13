from datetime import datetime, timedelta
from enum import IntEnum
from typing import Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .models import RejectionReason
from ..utils.logger import logger


class Weekday(IntEnum):
    """Numbered like datetime.weekday()."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def of(cls, moment: datetime) -> "Weekday":
        return cls(moment.weekday())

    @classmethod
    def from_name(cls, name: str) -> "Weekday":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown weekday: {name!r}")

    @property
    def is_weekend(self) -> bool:
        return self in (Weekday.SATURDAY, Weekday.SUNDAY)


class WeekdaySchedule(BaseModel):
    model_config = ConfigDict(frozen=True)

    earliest_hour: int = Field(ge=0, le=23)
    latest_hour: int = Field(ge=0, le=23)

    @model_validator(mode="after")
    def _ordered(self) -> "WeekdaySchedule":
        if self.earliest_hour > self.latest_hour:
            raise ValueError(
                f"earliest_hour ({self.earliest_hour}) is after latest_hour ({self.latest_hour})"
            )
        return self

    def opening(self, day: datetime) -> datetime:
        return day.replace(hour=self.earliest_hour, minute=0, second=0, microsecond=0)

    def closing(self, day: datetime) -> datetime:
        return day.replace(hour=self.latest_hour, minute=0, second=0, microsecond=0)


DEFAULT_FALLBACK_SCHEDULE = WeekdaySchedule(earliest_hour=9, latest_hour=16)


class BusinessHoursPolicy:
    """
    Per-weekday opening hours plus the rules that apply them.

    Only Monday to Friday may carry a schedule. A working weekday without an
    entry uses the fallback schedule; weekends are never bookable.
    """

    def __init__(
        self,
        schedules: Mapping[Union[Weekday, str], WeekdaySchedule],
        fallback: WeekdaySchedule = DEFAULT_FALLBACK_SCHEDULE
    ):
        table: Dict[Weekday, WeekdaySchedule] = {}
        for day, schedule in schedules.items():
            weekday = day if isinstance(day, Weekday) else Weekday.from_name(str(day))
            if weekday.is_weekend:
                raise ValueError(f"{weekday.name.title()} cannot have business hours")
            table[weekday] = schedule

        self._schedules = table
        self.fallback = fallback

    @property
    def schedules(self) -> Dict[Weekday, WeekdaySchedule]:
        return dict(self._schedules)

    def schedule_for(self, moment: datetime) -> WeekdaySchedule:
        return self._schedules.get(Weekday.of(moment), self.fallback)

    def is_working_day(self, moment: datetime) -> bool:
        return not Weekday.of(moment).is_weekend

    def check_requested_time(self, desired: datetime) -> Optional[RejectionReason]:
        """
        Policy check for a requested slot that is free.

        Returns the rejection reason, or None when the request can be
        accepted as is. The request is never moved.
        """
        schedule = self.schedule_for(desired)
        if desired.hour < schedule.earliest_hour or desired.hour > schedule.latest_hour:
            return RejectionReason.OUTSIDE_HOURS

        # Weekends fall back to the default hours above.
        if not self.is_working_day(desired):
            return RejectionReason.WEEKEND

        return None

    def clamp(self, candidate: datetime) -> datetime:
        """
        Fold a candidate into its weekday's hours.

        Before opening it moves to opening time the same day; after closing
        it rolls once to the next calendar day's opening time.
        """
        schedule = self.schedule_for(candidate)
        opening = schedule.opening(candidate)
        closing = schedule.closing(candidate)

        if candidate < opening:
            logger.info(f"Clamped {candidate} forward to opening time {opening}")
            return opening

        if candidate > closing:
            next_day = candidate + timedelta(days=1)
            rolled = self.schedule_for(next_day).opening(next_day)
            logger.info(f"Rolled {candidate} past closing time to {rolled}")
            return rolled

        return candidate

    def next_working_opening(self, candidate: datetime) -> datetime:
        """Move a candidate that sits on a weekend to the opening of the next working day."""
        moved = candidate
        while not self.is_working_day(moved):
            moved = moved + timedelta(days=1)
            moved = self.schedule_for(moved).opening(moved)

        if moved != candidate:
            logger.info(f"Moved weekend candidate {candidate} to {moved}")
        return moved
