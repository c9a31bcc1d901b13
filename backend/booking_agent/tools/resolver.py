"""
Slot resolution: decide whether a desired meeting time can be offered as is,
must be replaced by the nearest free slot, or breaks the weekday policy.
"""

from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .availability import find_conflicts, is_occupied
from .errors import SearchExhausted
from .busy_intervals import parse_busy_intervals
from .business_hours import (
    BusinessHoursPolicy,
    DEFAULT_FALLBACK_SCHEDULE,
    Weekday,
    WeekdaySchedule
)
from .models import BusyInterval, Resolution
from .slot_search import find_next_available, meets_minimum_notice
from ..utils.config import Settings
from ..utils.logger import logger


class ResolverConfig(BaseModel):
    """Immutable settings for one SlotResolver."""

    model_config = ConfigDict(frozen=True)

    meeting_duration_minutes: int = Field(default=60, gt=0)
    minimum_notice_minutes: int = Field(default=120, ge=0)
    search_horizon_days: int = Field(default=14, gt=0)
    business_hours: Dict[Weekday, WeekdaySchedule] = Field(default_factory=dict)
    fallback_schedule: WeekdaySchedule = DEFAULT_FALLBACK_SCHEDULE

    @property
    def meeting_duration(self) -> timedelta:
        return timedelta(minutes=self.meeting_duration_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ResolverConfig":
        business_hours = {
            Weekday.from_name(day): WeekdaySchedule(earliest_hour=hours[0], latest_hour=hours[1])
            for day, hours in settings.business_hours.items()
        }
        return cls(
            meeting_duration_minutes=settings.meeting_duration_minutes,
            minimum_notice_minutes=settings.minimum_notice_minutes,
            search_horizon_days=settings.search_horizon_days,
            business_hours=business_hours,
            fallback_schedule=WeekdaySchedule(
                earliest_hour=settings.fallback_earliest_hour,
                latest_hour=settings.fallback_latest_hour
            )
        )


class SlotResolver:
    def __init__(self, config: ResolverConfig):
        self.config = config
        self.policy = BusinessHoursPolicy(config.business_hours, fallback=config.fallback_schedule)

    def parse_calendar(self, records: Iterable[str]) -> List[BusyInterval]:
        return parse_busy_intervals(records, self.config.meeting_duration)

    def is_bookable(self, candidate: datetime, busy_intervals: Sequence[BusyInterval], now: datetime) -> bool:
        return (
            not is_occupied(candidate, busy_intervals, self.config.meeting_duration)
            and meets_minimum_notice(candidate, now, self.config.minimum_notice_minutes)
        )

    def search_horizon(self, desired: datetime, now: datetime) -> datetime:
        earliest_allowed = now + timedelta(minutes=self.config.minimum_notice_minutes)
        return max(desired, earliest_allowed) + timedelta(days=self.config.search_horizon_days)

    def resolve(self, desired: datetime, busy_intervals: Sequence[BusyInterval], now: datetime) -> Resolution:
        """
        Resolve a desired timestamp against the calendar.

        A free request is only checked against the weekday policy and is
        never moved. A conflicting request triggers the next-slot search,
        whose result is folded into business hours.

        Raises:
            SearchExhausted: If no slot is found within the search horizon,
                or the slot moved into business hours lands past it
        """
        conflicts = find_conflicts(desired, busy_intervals, self.config.meeting_duration)

        if conflicts:
            logger.info(
                f"Desired time {desired} conflicts with: {', '.join(c.label for c in conflicts)}"
            )
            alternative = self.find_alternative(desired, busy_intervals, now)
            logger.info(f"Resolution: alternative {alternative}")
            return Resolution.alternative(alternative)

        reason = self.policy.check_requested_time(desired)
        if reason is not None:
            logger.info(f"Resolution: rejected {desired} ({reason.value})")
            return Resolution.rejected(reason)

        logger.info(f"Resolution: available {desired}")
        return Resolution.available(desired)

    def find_alternative(self, desired: datetime, busy_intervals: Sequence[BusyInterval], now: datetime) -> datetime:
        horizon = self.search_horizon(desired, now)
        candidate = find_next_available(
            desired,
            busy_intervals,
            self.config.meeting_duration,
            now,
            self.config.minimum_notice_minutes,
            horizon
        )

        while True:
            placed = self.policy.next_working_opening(self.policy.clamp(candidate))
            if placed > horizon:
                logger.warning(f"Clamped slot {placed} lies past horizon {horizon}")
                raise SearchExhausted(desired, horizon)

            if placed == candidate or self.is_bookable(placed, busy_intervals, now):
                return placed

            # The opening we were moved to is taken; keep walking from there.
            logger.info(f"Clamped slot {placed} is not bookable, resuming search")
            candidate = find_next_available(
                placed,
                busy_intervals,
                self.config.meeting_duration,
                now,
                self.config.minimum_notice_minutes,
                horizon
            )
