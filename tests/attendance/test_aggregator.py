from datetime import datetime, timedelta

from src.sphere_time.sphere_time.attendance.aggregator import aggregate, aggregate_by_day, aggregate_period, group_by_day
from src.sphere_time.sphere_time.attendance.model import WorkedTime
from src.sphere_time.sphere_time.core.enums import EventKind


def at(hour: int, minute: int = 0, day: int = 5) -> datetime:
    return datetime(2026, 1, day, hour, minute)


def test_full_day_with_break(make_event):
    events = [
        make_event(EventKind.CHECK_IN, at(9)),
        make_event(EventKind.BREAK_START, at(12)),
        make_event(EventKind.BREAK_END, at(12, 30)),
        make_event(EventKind.CHECK_OUT, at(17)),
    ]

    result = aggregate(events)

    assert result.worked == timedelta(hours=8)
    assert result.break_time == timedelta(minutes=30)
    assert result.first_check_in == at(9)
    assert result.last_check_out == at(17)
    assert result.open_check_in is None


def test_lunch_counts_as_break(make_event):
    events = [
        make_event(EventKind.CHECK_IN, at(8)),
        make_event(EventKind.LUNCH_START, at(12)),
        make_event(EventKind.LUNCH_END, at(13)),
        make_event(EventKind.CHECK_OUT, at(16)),
    ]

    result = aggregate(events)

    assert result.worked == timedelta(hours=8)
    assert result.break_time == timedelta(hours=1)


def test_open_check_in_contributes_nothing(make_event):
    result = aggregate([make_event(EventKind.CHECK_IN, at(9))])

    assert result.worked == timedelta(0)
    assert result.open_check_in == at(9)
    assert result.first_check_in == at(9)


def test_end_without_start_is_ignored(make_event):
    result = aggregate([make_event(EventKind.CHECK_OUT, at(17)), make_event(EventKind.BREAK_END, at(12))])

    assert result == WorkedTime(last_check_out=at(17))


def test_second_check_in_replaces_the_first(make_event):
    events = [
        make_event(EventKind.CHECK_IN, at(8)),
        make_event(EventKind.CHECK_IN, at(9)),
        make_event(EventKind.CHECK_OUT, at(17)),
    ]

    result = aggregate(events)

    assert result.worked == timedelta(hours=8)
    assert result.first_check_in == at(8)


def test_out_of_order_span_never_negative(make_event):
    result = aggregate([make_event(EventKind.CHECK_IN, at(17)), make_event(EventKind.CHECK_OUT, at(9))])

    assert result.worked == timedelta(0)


def test_multiple_sessions_in_one_day(make_event):
    events = [
        make_event(EventKind.CHECK_IN, at(8)),
        make_event(EventKind.CHECK_OUT, at(12)),
        make_event(EventKind.CHECK_IN, at(13)),
        make_event(EventKind.CHECK_OUT, at(15, 30)),
    ]

    result = aggregate(events)

    assert result.worked == timedelta(hours=6, minutes=30)
    assert result.last_check_out == at(15, 30)


def test_group_by_day_sorts_each_bucket(make_event):
    late = make_event(EventKind.CHECK_OUT, at(17, day=6))
    early = make_event(EventKind.CHECK_IN, at(9, day=6))
    other = make_event(EventKind.CHECK_IN, at(9, day=5))

    days = group_by_day([late, other, early])

    assert list(days) == [other.occurred_at.date(), early.occurred_at.date()]
    assert days[early.occurred_at.date()] == [early, late]


def test_period_does_not_pair_across_midnight(make_event):
    events = [
        make_event(EventKind.CHECK_IN, at(22, day=5)),
        make_event(EventKind.CHECK_OUT, at(6, day=6)),
        make_event(EventKind.CHECK_IN, at(9, day=6)),
        make_event(EventKind.CHECK_OUT, at(17, day=6)),
    ]

    per_day = aggregate_by_day(events)
    total = aggregate_period(events)

    assert per_day[at(0, day=5).date()].open_check_in == at(22, day=5)
    assert total.worked == timedelta(hours=8)
    assert total.first_check_in == at(22, day=5)
    assert total.last_check_out == at(17, day=6)


def test_empty_input():
    assert aggregate([]) == WorkedTime()
    assert aggregate_period([]) == WorkedTime()
