"""
Tests for the boot status domain: duration formatting, event selection,
shutdown classification and record assembly.
"""

from datetime import datetime, timedelta

import pytest
from pydantic import ValidationError

from autobootaudit.domain.boot_status import (
    SHUTDOWN_EVENT_IDS,
    UNKNOWN_SHUTDOWN_TIME,
    BootStatusRecord,
    ShutdownType,
    build_boot_status,
    classify_event,
    format_duration,
    select_latest_event,
)
from conftest import make_event, make_facts


class TestFormatDuration:
    """Test cases for format_duration."""

    def test_days_hours_minutes_seconds(self):
        """1 day 2 h 3 m 4 s renders zero padded."""
        assert format_duration(timedelta(days=1, hours=2, minutes=3, seconds=4)) == "01.02:03:04"

    def test_zero(self):
        assert format_duration(timedelta(0)) == "00.00:00:00"

    def test_fractional_seconds_truncated(self):
        assert format_duration(timedelta(minutes=10, seconds=5, milliseconds=999)) == "00.00:10:05"

    def test_days_widen_past_two_digits(self):
        assert format_duration(timedelta(days=123, seconds=1)) == "123.00:00:01"

    def test_negative_duration_keeps_sign(self):
        """Inconsistent logs can produce negative downtime."""
        assert format_duration(-timedelta(minutes=10)) == "-00.00:10:00"


class TestClassifyEvent:
    """Test cases for event ID classification."""

    @pytest.mark.parametrize("event_id", [41, 6008])
    def test_unexpected_events(self, event_id):
        assert classify_event(event_id) is ShutdownType.UNEXPECTED

    def test_user_initiated_event_is_normal(self):
        assert classify_event(1074) is ShutdownType.NORMAL

    def test_other_ids_are_unknown(self):
        assert classify_event(7045) is ShutdownType.UNKNOWN

    def test_queried_event_ids(self):
        assert set(SHUTDOWN_EVENT_IDS) == {41, 6008, 1074}


class TestSelectLatestEvent:
    """Test cases for select_latest_event."""

    def test_no_events(self):
        assert select_latest_event([]) is None

    def test_latest_timestamp_wins(self):
        """Events at t=10 (1074) and t=20 (41) select 41."""
        base = datetime(2024, 1, 1)
        events = [
            make_event(1074, base + timedelta(seconds=10)),
            make_event(41, base + timedelta(seconds=20)),
        ]

        latest = select_latest_event(events)

        assert latest.event_id == 41
        assert latest.time_created == base + timedelta(seconds=20)

    def test_order_independent(self):
        base = datetime(2024, 1, 1)
        events = [
            make_event(41, base + timedelta(seconds=20)),
            make_event(6008, base + timedelta(seconds=5)),
            make_event(1074, base + timedelta(seconds=10)),
        ]

        assert select_latest_event(events).event_id == 41
        assert select_latest_event(list(reversed(events))).event_id == 41

    @pytest.mark.parametrize(
        "ids, expected",
        [
            ([41, 6008, 1074], 1074),
            ([41, 6008], 6008),
            ([6008, 41], 6008),
            ([41, 9999], 41),
        ],
    )
    def test_exact_ties_prefer_user_initiated(self, ids, expected):
        when = datetime(2024, 1, 1, 12, 0)
        events = [make_event(event_id, when) for event_id in ids]

        assert select_latest_event(events).event_id == expected


class TestBuildBootStatus:
    """Test cases for build_boot_status."""

    def test_normal_restart_scenario(self):
        """HOST1: 1074 ten minutes before boot."""
        facts = make_facts("HOST1")
        events = [make_event(1074, datetime(2024, 1, 10, 7, 50))]

        record = build_boot_status(facts, events)

        assert record.computer_name == "HOST1"
        assert record.last_shutdown_type is ShutdownType.NORMAL
        assert record.last_shutdown_time == datetime(2024, 1, 10, 7, 50)
        assert record.downtime == timedelta(minutes=10)
        assert record.uptime == timedelta(hours=1)
        assert record.downtime_days == "00.00:10:00"
        assert record.uptime_days == "00.01:00:00"
        assert record.install_date == datetime(2023, 1, 1)
        assert record.last_boot_up_time == datetime(2024, 1, 10, 8, 0)

    def test_no_events_scenario(self):
        """HOST2: empty event log."""
        record = build_boot_status(make_facts("HOST2"), [])

        assert record.last_shutdown_type is ShutdownType.UNKNOWN
        assert record.last_shutdown_time == UNKNOWN_SHUTDOWN_TIME
        assert record.last_shutdown_time == datetime(1900, 1, 1)
        assert record.downtime == timedelta(0)
        assert record.uptime == timedelta(hours=1)

    @pytest.mark.parametrize("event_id", [41, 6008])
    def test_unexpected_shutdown_has_no_downtime(self, event_id):
        events = [make_event(event_id, datetime(2024, 1, 10, 7, 0))]

        record = build_boot_status(make_facts(), events)

        assert record.last_shutdown_type is ShutdownType.UNEXPECTED
        assert record.last_shutdown_time == datetime(2024, 1, 10, 7, 0)
        assert record.downtime == timedelta(0)
        assert record.downtime_days == "00.00:00:00"

    def test_unexpected_latest_overrides_older_normal(self):
        events = [
            make_event(1074, datetime(2024, 1, 10, 6, 0)),
            make_event(41, datetime(2024, 1, 10, 7, 30)),
        ]

        record = build_boot_status(make_facts(), events)

        assert record.last_shutdown_type is ShutdownType.UNEXPECTED
        assert record.downtime == timedelta(0)

    def test_negative_downtime_is_not_clamped(self):
        """A 1074 logged after the boot time gives negative downtime."""
        events = [make_event(1074, datetime(2024, 1, 10, 8, 5))]

        record = build_boot_status(make_facts(), events)

        assert record.downtime == timedelta(minutes=-5)
        assert record.downtime_days == "-00.00:05:00"

    def test_negative_uptime_passes_through(self):
        facts = make_facts(boot=datetime(2024, 1, 10, 9, 0), now=datetime(2024, 1, 10, 8, 0))

        record = build_boot_status(facts, [])

        assert record.uptime == timedelta(hours=-1)

    def test_uptime_independent_of_classification(self):
        facts = make_facts(now=datetime(2024, 1, 12, 10, 3, 4))
        for events in ([], [make_event(41, datetime(2024, 1, 9))], [make_event(1074, datetime(2024, 1, 9))]):
            record = build_boot_status(facts, events)
            assert record.uptime == timedelta(days=2, hours=2, minutes=3, seconds=4)
            assert record.uptime_days == "02.02:03:04"


class TestBootStatusRecord:
    """Validation of the record itself."""

    def _kwargs(self, **overrides):
        data = dict(
            computer_name="HOST1",
            last_shutdown_time=datetime(2024, 1, 10, 7, 50),
            last_shutdown_type=ShutdownType.NORMAL,
            downtime=timedelta(minutes=10),
            last_boot_up_time=datetime(2024, 1, 10, 8, 0),
            uptime=timedelta(hours=1),
            install_date=datetime(2023, 1, 1),
            downtime_days="00.00:10:00",
            uptime_days="00.01:00:00",
        )
        data.update(overrides)
        return data

    def test_valid_record(self):
        record = BootStatusRecord(**self._kwargs())
        assert record.last_shutdown_type is ShutdownType.NORMAL

    def test_downtime_must_be_zero_unless_normal(self):
        with pytest.raises(ValidationError):
            BootStatusRecord(**self._kwargs(last_shutdown_type=ShutdownType.UNEXPECTED))

    def test_formatted_durations_must_match(self):
        with pytest.raises(ValidationError):
            BootStatusRecord(**self._kwargs(uptime_days="00.02:00:00"))

    def test_computer_name_required(self):
        with pytest.raises(ValidationError):
            BootStatusRecord(**self._kwargs(computer_name="  "))

    def test_record_is_immutable(self):
        record = BootStatusRecord(**self._kwargs())
        with pytest.raises(ValidationError):
            record.computer_name = "OTHER"
