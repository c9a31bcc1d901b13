"""Tests for parsing calendar records into busy intervals."""

from datetime import datetime, timedelta

import pytest

from booking_agent.tools.busy_intervals import parse_busy_intervals, parse_busy_record
from booking_agent.tools.errors import MalformedCalendarRecord
from booking_agent.tools.models import BusyInterval


HOUR = timedelta(minutes=60)


class TestParseBusyRecord:
    def test_start_and_end(self):
        interval = parse_busy_record("Alice,2025/03/10 13:00:00", 0, HOUR)
        assert interval.label == "Alice"
        assert interval.start == datetime(2025, 3, 10, 13, 0)
        assert interval.end == datetime(2025, 3, 10, 14, 0)

    def test_whitespace_is_trimmed(self):
        interval = parse_busy_record(" Bob , 2025/03/10 09:30:00 ", 0, HOUR)
        assert interval.label == "Bob"
        assert interval.start == datetime(2025, 3, 10, 9, 30)

    def test_custom_duration(self):
        interval = parse_busy_record("Carol,2025/03/10 09:00:00", 0, timedelta(minutes=45))
        assert interval.end == datetime(2025, 3, 10, 9, 45)

    def test_missing_comma(self):
        with pytest.raises(MalformedCalendarRecord) as excinfo:
            parse_busy_record("Alice 2025/03/10 13:00:00", 3, HOUR)
        assert excinfo.value.index == 3
        assert excinfo.value.record == "Alice 2025/03/10 13:00:00"

    @pytest.mark.parametrize("raw", [
        "Alice,2025-03-10 13:00:00",
        "Alice,2025/03/10 13:00",
        "Alice,2025/13/10 13:00:00",
        "Alice,tomorrow at one",
        "Alice,",
    ])
    def test_malformed_timestamp(self, raw):
        with pytest.raises(MalformedCalendarRecord):
            parse_busy_record(raw, 0, HOUR)


class TestParseBusyIntervals:
    def test_keeps_record_order(self):
        intervals = parse_busy_intervals(
            ["B,2025/03/10 15:00:00", "A,2025/03/10 13:00:00"],
            HOUR,
        )
        assert [i.label for i in intervals] == ["B", "A"]

    def test_empty_calendar(self):
        assert parse_busy_intervals([], HOUR) == []
        assert parse_busy_intervals(None, HOUR) == []

    def test_one_bad_record_aborts_everything(self):
        with pytest.raises(MalformedCalendarRecord) as excinfo:
            parse_busy_intervals(
                ["A,2025/03/10 13:00:00", "B,not a date", "C,2025/03/10 15:00:00"],
                HOUR,
            )
        assert excinfo.value.index == 1

    def test_rejects_non_positive_duration(self):
        with pytest.raises(ValueError):
            parse_busy_intervals(["A,2025/03/10 13:00:00"], timedelta(0))

    def test_every_interval_ends_after_it_starts(self):
        intervals = parse_busy_intervals(
            ["A,2025/03/10 13:00:00", "B,2025/03/11 23:30:00"],
            HOUR,
        )
        assert all(i.end > i.start for i in intervals)


class TestBusyIntervalModel:
    def test_immutable(self):
        interval = BusyInterval(
            label="A", start=datetime(2025, 3, 10, 13), end=datetime(2025, 3, 10, 14)
        )
        with pytest.raises(Exception):
            interval.label = "B"

    def test_end_must_follow_start(self):
        with pytest.raises(ValueError):
            BusyInterval(label="A", start=datetime(2025, 3, 10, 13), end=datetime(2025, 3, 10, 13))
