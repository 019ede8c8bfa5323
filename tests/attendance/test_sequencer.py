from datetime import datetime

import pytest

from src.sphere_time.sphere_time.attendance import sequencer
from src.sphere_time.sphere_time.core.enums import EmployeeStatus, EventKind
from src.sphere_time.sphere_time.core.exceptions import (
    AlreadyCheckedInError,
    NoOpenBreakError,
    NotCheckedInError,
    NotWorkingError,
    PunchSequenceError,
)

AT = datetime(2026, 1, 5, 9, 0)


def test_no_history_only_allows_check_in():
    assert sequencer.current_status(None) == EmployeeStatus.CHECKED_OUT
    assert sequencer.allowed_kinds(None) == frozenset({EventKind.CHECK_IN})


@pytest.mark.parametrize(
    "last_kind,expected",
    [
        (EventKind.CHECK_IN, {EventKind.CHECK_OUT, EventKind.BREAK_START, EventKind.LUNCH_START}),
        (EventKind.BREAK_START, {EventKind.BREAK_END}),
        (EventKind.LUNCH_START, {EventKind.LUNCH_END}),
        (EventKind.BREAK_END, {EventKind.CHECK_OUT, EventKind.BREAK_START, EventKind.LUNCH_START}),
        (EventKind.LUNCH_END, {EventKind.CHECK_OUT, EventKind.BREAK_START, EventKind.LUNCH_START}),
        (EventKind.CHECK_OUT, {EventKind.CHECK_IN}),
    ],
)
def test_allowed_kinds_follow_last_punch(make_event, last_kind, expected):
    last = make_event(last_kind, AT)
    assert sequencer.allowed_kinds(last) == frozenset(expected)


def test_check_in_rejected_while_checked_in(make_event):
    with pytest.raises(AlreadyCheckedInError):
        sequencer.validate(make_event(EventKind.CHECK_IN, AT), EventKind.CHECK_IN)


def test_check_in_rejected_when_open_from_previous_day(make_event):
    yesterday = make_event(EventKind.CHECK_IN, datetime(2026, 1, 4, 9, 0))
    with pytest.raises(AlreadyCheckedInError):
        sequencer.validate(yesterday, EventKind.CHECK_IN)


def test_check_out_without_check_in():
    with pytest.raises(NotCheckedInError):
        sequencer.validate(None, EventKind.CHECK_OUT)


def test_check_out_during_break_names_the_break(make_event):
    with pytest.raises(NotCheckedInError, match="break"):
        sequencer.validate(make_event(EventKind.BREAK_START, AT), EventKind.CHECK_OUT)


def test_break_requires_working(make_event):
    with pytest.raises(NotWorkingError):
        sequencer.validate(make_event(EventKind.CHECK_OUT, AT), EventKind.BREAK_START)


def test_break_end_must_match_open_break(make_event):
    with pytest.raises(NoOpenBreakError):
        sequencer.validate(make_event(EventKind.LUNCH_START, AT), EventKind.BREAK_END)
    with pytest.raises(NoOpenBreakError):
        sequencer.validate(make_event(EventKind.BREAK_START, AT), EventKind.LUNCH_END)


def test_all_sequence_errors_share_a_base(make_event):
    with pytest.raises(PunchSequenceError):
        sequencer.validate(None, EventKind.BREAK_END)
    assert not sequencer.is_admissible(None, EventKind.LUNCH_START)
    assert sequencer.is_admissible(make_event(EventKind.CHECK_IN, AT), EventKind.LUNCH_START)


def test_status_after_each_kind(make_event):
    assert sequencer.current_status(make_event(EventKind.BREAK_START, AT)) == EmployeeStatus.ON_BREAK
    assert sequencer.current_status(make_event(EventKind.LUNCH_START, AT)) == EmployeeStatus.ON_LUNCH
    assert sequencer.current_status(make_event(EventKind.LUNCH_END, AT)) == EmployeeStatus.CHECKED_IN
    assert sequencer.current_status(make_event(EventKind.CHECK_OUT, AT)) == EmployeeStatus.CHECKED_OUT
