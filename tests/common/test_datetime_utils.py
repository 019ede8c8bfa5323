from datetime import date, time, timedelta

from src.sphere_time.sphere_time.common.datetime_utils import (
    format_hhmm,
    month_range,
    parse_hhmm,
    start_of_week,
    to_hours,
    working_days,
)


def test_working_days_skip_weekend():
    days = working_days(date(2026, 1, 2), date(2026, 1, 6))

    assert days == [date(2026, 1, 2), date(2026, 1, 5), date(2026, 1, 6)]


def test_start_of_week_is_monday():
    assert start_of_week(date(2026, 1, 11)) == date(2026, 1, 5)
    assert start_of_week(date(2026, 1, 5)) == date(2026, 1, 5)


def test_month_range():
    assert month_range(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_range(date(2026, 12, 31)) == (date(2026, 12, 1), date(2026, 12, 31))


def test_duration_formatting():
    assert format_hhmm(timedelta(hours=26, minutes=5)) == "26:05"
    assert to_hours(timedelta(minutes=20)) == 0.33
    assert parse_hhmm(" 09:15") == time(9, 15)
