"""
Tests for live store status evaluation with injected instants.
"""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from app.application.exceptions import InvalidScheduleError
from app.application.use_cases.store_status import get_status
from app.domain.entities.override import Override
from app.domain.entities.store_status import StatusLabel
from app.domain.entities.weekly_rule import WeeklyRule

MONDAY = "2024-01-01"
MONDAY_RULE = WeeklyRule(day_of_week=1, is_open=True, start_time="09:00", end_time="12:00")


def _at(hour: int, minute: int = 0, day: int = 1) -> datetime:
    return datetime(2024, 1, day, hour, minute)


def test_open_in_the_middle_of_the_day():
    status = get_status(MONDAY, [MONDAY_RULE], [], now=_at(10))

    assert status.is_open is True
    assert status.next_opening == "09:00"
    assert status.next_closing == "12:00"
    assert status.current_status == StatusLabel.open


def test_closing_soon_within_thirty_minutes():
    status = get_status(MONDAY, [MONDAY_RULE], [], now=_at(11, 45))

    assert status.is_open is True
    assert status.current_status == StatusLabel.closing_soon


def test_boundaries_are_inclusive():
    assert get_status(MONDAY, [MONDAY_RULE], [], now=_at(9)).is_open is True
    at_close = get_status(MONDAY, [MONDAY_RULE], [], now=_at(12))
    assert at_close.is_open is True
    assert at_close.current_status == StatusLabel.closing_soon


def test_opening_soon_within_an_hour():
    status = get_status(MONDAY, [MONDAY_RULE], [], now=_at(8, 15))

    assert status.is_open is False
    assert status.current_status == StatusLabel.opening_soon
    assert status.next_opening == "09:00"
    assert status.next_closing == "12:00"


def test_closed_more_than_an_hour_before_opening():
    status = get_status(MONDAY, [MONDAY_RULE], [], now=_at(7, 59))

    assert status.current_status == StatusLabel.closed


def test_closed_after_closing_time():
    status = get_status(MONDAY, [MONDAY_RULE], [], now=_at(12, 1))

    assert status.is_open is False
    assert status.current_status == StatusLabel.closed
    assert status.next_closing == "12:00"


def test_closed_override_reports_closed():
    rules = [WeeklyRule(day_of_week=3, is_open=True, start_time="09:00", end_time="17:00")]
    overrides = [Override(day=25, month=12, is_open=False, start_time="10:00", end_time="14:00")]

    status = get_status("2024-12-25", rules, overrides, now=datetime(2024, 12, 25, 11))

    assert status.is_open is False
    assert status.current_status == StatusLabel.closed
    assert status.next_opening == "10:00"
    assert status.next_closing is None


def test_no_rule_reports_closed_without_times():
    status = get_status("2024-01-07", [MONDAY_RULE], [], now=datetime(2024, 1, 7, 10))

    assert status.is_open is False
    assert status.next_opening is None
    assert status.next_closing is None
    assert status.current_status == StatusLabel.closed


def test_open_override_takes_precedence():
    overrides = [Override(day=1, month=1, is_open=True, start_time="14:00", end_time="16:00")]

    status = get_status(MONDAY, [MONDAY_RULE], overrides, now=_at(10))

    assert status.is_open is False
    assert status.next_opening == "14:00"
    assert status.next_closing == "16:00"


def test_overnight_hours_stay_open_after_midnight():
    rules = [WeeklyRule(day_of_week=1, is_open=True, start_time="22:00", end_time="02:00")]

    late = get_status(MONDAY, rules, [], now=datetime(2024, 1, 2, 1, 0))
    assert late.is_open is True
    assert late.current_status == StatusLabel.open
    assert late.next_closing == "02:00"

    assert get_status(MONDAY, rules, [], now=datetime(2024, 1, 2, 1, 40)).current_status == StatusLabel.closing_soon


def test_aware_now_is_converted_to_store_time():
    # 15:00 UTC is 10:00 in New York in January
    now = datetime(2024, 1, 1, 15, 0, tzinfo=timezone.utc)

    status = get_status(MONDAY, [MONDAY_RULE], [], now=now, timezone="America/New_York")

    assert status.is_open is True
    assert status.current_status == StatusLabel.open


def test_store_timezone_is_used_not_utc_wall_time():
    # 10:00 UTC is 05:00 in New York: before opening, not open
    now = datetime(2024, 1, 1, 10, 0, tzinfo=ZoneInfo("UTC"))

    assert get_status(MONDAY, [MONDAY_RULE], [], now=now).is_open is False


def test_custom_look_ahead_windows():
    status = get_status(MONDAY, [MONDAY_RULE], [], now=_at(7, 30), opening_soon_minutes=90)
    assert status.current_status == StatusLabel.opening_soon

    status = get_status(MONDAY, [MONDAY_RULE], [], now=_at(11), closing_soon_minutes=60)
    assert status.current_status == StatusLabel.closing_soon


def test_malformed_schedule_fails_fast():
    rules = [WeeklyRule(day_of_week=9, is_open=True, start_time="09:00", end_time="12:00")]

    with pytest.raises(InvalidScheduleError):
        get_status(MONDAY, rules, [], now=_at(10))
