"""Shared test fixtures for the booking agent tests.

The business calendar used throughout mirrors a small practice:
- 60 minute meetings, 120 minutes of minimum notice
- Monday 12:00-16:00, Tuesday 10:00-14:00, other weekdays 9:00-16:00
- 2025/03/10 is a Monday
"""

from datetime import datetime
from typing import List, Optional

import pytest

from booking_agent.tools.business_hours import Weekday, WeekdaySchedule
from booking_agent.tools.date_extractor import DateExtractor
from booking_agent.tools.resolver import ResolverConfig, SlotResolver


MONDAY = datetime(2025, 3, 10)
TUESDAY = datetime(2025, 3, 11)
FRIDAY = datetime(2025, 3, 14)
SATURDAY = datetime(2025, 3, 15)
SUNDAY = datetime(2025, 3, 16)

# Far enough before every test date that minimum notice never binds.
LONG_AGO = datetime(2025, 3, 1, 9, 0)


def at(day: datetime, hour: int, minute: int = 0) -> datetime:
    return day.replace(hour=hour, minute=minute, second=0, microsecond=0)


class ScriptedDateExtractor(DateExtractor):
    """Answers with canned wire-format strings, one per call."""

    def __init__(self, answers: List[Optional[str]]):
        self.answers = list(answers)
        self.transcripts: List[str] = []

    async def extract_raw(self, transcript: str, now: datetime) -> str:
        self.transcripts.append(transcript)
        return self.answers.pop(0)


@pytest.fixture
def resolver_config() -> ResolverConfig:
    return ResolverConfig(
        meeting_duration_minutes=60,
        minimum_notice_minutes=120,
        search_horizon_days=14,
        business_hours={
            Weekday.MONDAY: WeekdaySchedule(earliest_hour=12, latest_hour=16),
            Weekday.TUESDAY: WeekdaySchedule(earliest_hour=10, latest_hour=14),
        },
    )


@pytest.fixture
def resolver(resolver_config: ResolverConfig) -> SlotResolver:
    return SlotResolver(resolver_config)
