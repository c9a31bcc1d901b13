"""Tests for the next-slot search walk."""

from datetime import datetime, timedelta
from itertools import islice

import pytest

from booking_agent.tools.availability import is_occupied
from booking_agent.tools.errors import SearchExhausted
from booking_agent.tools.models import BusyInterval
from booking_agent.tools.slot_search import (
    candidate_steps,
    find_next_available,
    meets_minimum_notice,
)
from tests.conftest import LONG_AGO, MONDAY, at


HOUR = timedelta(minutes=60)
FAR_HORIZON = datetime(2025, 4, 30)


def booked(*starts: datetime, minutes: int = 60):
    return [
        BusyInterval(label=f"B{i}", start=s, end=s + timedelta(minutes=minutes))
        for i, s in enumerate(starts)
    ]


class TestCandidateSteps:
    def test_strictly_increasing_by_one_duration(self):
        steps = list(islice(candidate_steps(at(MONDAY, 13), HOUR), 5))
        assert steps[0] == at(MONDAY, 14)
        for earlier, later in zip(steps, steps[1:]):
            assert later - earlier == HOUR

    def test_does_not_snap_to_the_hour(self):
        steps = list(islice(candidate_steps(at(MONDAY, 13, 10), timedelta(minutes=45)), 2))
        assert steps == [at(MONDAY, 13, 55), at(MONDAY, 14, 40)]


class TestMinimumNotice:
    def test_exactly_on_the_limit(self):
        now = at(MONDAY, 10)
        assert meets_minimum_notice(at(MONDAY, 12), now, 120)

    def test_just_short(self):
        now = at(MONDAY, 10, 1)
        assert not meets_minimum_notice(at(MONDAY, 12), now, 120)

    def test_past_candidate(self):
        assert not meets_minimum_notice(at(MONDAY, 9), at(MONDAY, 10), 0)


class TestFindNextAvailable:
    def test_first_free_step(self):
        busy = booked(at(MONDAY, 13))
        assert find_next_available(at(MONDAY, 13), busy, HOUR, LONG_AGO, 120, FAR_HORIZON) == at(MONDAY, 14)

    def test_never_returns_the_start(self):
        assert find_next_available(at(MONDAY, 13), [], HOUR, LONG_AGO, 120, FAR_HORIZON) == at(MONDAY, 14)

    def test_walks_over_consecutive_bookings(self):
        busy = booked(at(MONDAY, 13), at(MONDAY, 14), at(MONDAY, 15))
        assert find_next_available(at(MONDAY, 13), busy, HOUR, LONG_AGO, 120, FAR_HORIZON) == at(MONDAY, 16)

    def test_keeps_desired_minute_offset(self):
        busy = booked(at(MONDAY, 13))
        result = find_next_available(at(MONDAY, 13, 30), busy, HOUR, LONG_AGO, 120, FAR_HORIZON)
        assert result == at(MONDAY, 14, 30)

    def test_steps_past_partial_overlap(self):
        # 13:30 still overlaps the 13:00-14:00 booking shifted by thirty minutes.
        busy = booked(at(MONDAY, 13, 30))
        result = find_next_available(at(MONDAY, 12, 30), busy, HOUR, LONG_AGO, 120, FAR_HORIZON)
        assert result == at(MONDAY, 14, 30)

    def test_waits_for_minimum_notice(self):
        now = at(MONDAY, 12, 30)
        busy = booked(at(MONDAY, 13))
        # 14:00 is free but only 90 minutes away; 15:00 is the first with 120.
        assert find_next_available(at(MONDAY, 13), busy, HOUR, now, 120, FAR_HORIZON) == at(MONDAY, 15)

    def test_result_is_free_and_respects_notice(self):
        now = at(MONDAY, 11)
        busy = booked(at(MONDAY, 13), at(MONDAY, 14), at(MONDAY, 16))
        result = find_next_available(at(MONDAY, 13), busy, HOUR, now, 120, FAR_HORIZON)
        assert not is_occupied(result, busy, HOUR)
        assert meets_minimum_notice(result, now, 120)
        assert (result - at(MONDAY, 13)) % HOUR == timedelta(0)
        assert result == at(MONDAY, 15)

    def test_horizon_stops_the_search(self):
        start = at(MONDAY, 0)
        busy = [BusyInterval(label="Closed", start=start, end=start + timedelta(days=30))]
        with pytest.raises(SearchExhausted) as excinfo:
            find_next_available(start, busy, HOUR, LONG_AGO, 120, start + timedelta(days=2))
        assert excinfo.value.desired == start
        assert excinfo.value.horizon == start + timedelta(days=2)

    def test_unreachable_notice_is_exhausted(self):
        now = at(MONDAY, 13) + timedelta(days=365)
        with pytest.raises(SearchExhausted):
            find_next_available(at(MONDAY, 13), [], HOUR, now, 120, at(MONDAY, 13) + timedelta(days=3))
