"""Next-occurrence calculation."""

from datetime import datetime

import pytest

from mission.errors import ValidationError
from mission.lib import clock, schedule

NOW = datetime(2024, 1, 1, 10, 0, 0)  # Monday


def test_daily_time_already_passed_rolls_to_tomorrow():
    assert schedule.next_occurrence("0 1 * * *", NOW) == datetime(2024, 1, 2, 1, 0)


def test_weekly_friday():
    assert schedule.next_occurrence("0 14 * * 5", NOW) == datetime(2024, 1, 5, 14, 0)


def test_later_today():
    assert schedule.next_occurrence("30 12 * * *", NOW) == datetime(2024, 1, 1, 12, 30)


def test_exactly_now_is_not_future():
    assert schedule.next_occurrence("0 10 * * *", NOW) == datetime(2024, 1, 2, 10, 0)


def test_seconds_are_zeroed():
    now = datetime(2024, 1, 1, 9, 59, 59, 999000)
    assert schedule.next_occurrence("0 10 * * *", now) == datetime(2024, 1, 1, 10, 0)


def test_same_weekday_later_today():
    assert schedule.next_occurrence("0 11 * * 1", NOW) == datetime(2024, 1, 1, 11, 0)


def test_same_weekday_passed_waits_a_week():
    assert schedule.next_occurrence("0 9 * * 1", NOW) == datetime(2024, 1, 8, 9, 0)


def test_sunday_is_zero():
    assert schedule.next_occurrence("0 8 * * 0", NOW) == datetime(2024, 1, 7, 8, 0)
    assert schedule.cron_weekday(datetime(2024, 1, 7)) == 0


def test_day_of_month_and_month_ignored():
    assert schedule.next_occurrence("0 1 15 6 *", NOW) == datetime(2024, 1, 2, 1, 0)


def test_month_end_rollover():
    now = datetime(2024, 2, 29, 23, 0)
    assert schedule.next_occurrence("0 1 * * *", now) == datetime(2024, 3, 1, 1, 0)


def test_later_now_gives_later_result():
    first = schedule.next_occurrence("0 1 * * *", NOW)
    second = schedule.next_occurrence("0 1 * * *", first)
    assert second == datetime(2024, 1, 3, 1, 0)


@pytest.mark.parametrize(
    "expr",
    ["0 1 * *", "0 1 * * * *", "x 1 * * *", "0 24 * * *", "60 1 * * *", "0 1 * * 7", "0 1 * * mon"],
)
def test_malformed_expressions_rejected(expr):
    with pytest.raises(ValidationError):
        schedule.parse(expr)


def test_next_run_ms_uses_clock():
    fixed = clock.FixedClock(NOW)
    assert schedule.next_run_ms("0 1 * * *", fixed) == clock.to_ms(datetime(2024, 1, 2, 1, 0))


def test_next_run_ms_uses_installed_clock(fixed_clock):
    expected = clock.to_ms(datetime(2024, 1, 5, 14, 0))
    assert schedule.next_run_ms("0 14 * * 5") == expected
