from datetime import datetime, timedelta

from src.sphere_time.sphere_time.attendance.factory import AttendanceStatusFactory
from src.sphere_time.sphere_time.attendance.model import WorkedTime
from src.sphere_time.sphere_time.attendance.strategies.absent_strategy import AbsentStrategy
from src.sphere_time.sphere_time.attendance.strategies.irregular_strategy import IrregularStrategy
from src.sphere_time.sphere_time.attendance.strategies.no_checkout_strategy import NoCheckOutStrategy
from src.sphere_time.sphere_time.attendance.strategies.present_strategy import PresentStrategy
from src.sphere_time.sphere_time.core.enums import AttendanceStatus

CHECK_IN = datetime(2026, 1, 5, 9, 0)
NORMAL_DAY = WorkedTime(
    worked=timedelta(hours=8), first_check_in=CHECK_IN, last_check_out=datetime(2026, 1, 5, 17, 0)
)


def test_no_events_is_absent():
    strategy = AttendanceStatusFactory().for_day(
        has_events=False, worked=WorkedTime(), is_late=False, is_early_leave=False
    )

    assert isinstance(strategy, AbsentStrategy)
    assert strategy.decide(worked=WorkedTime(), is_late=False, is_early_leave=False).status == AttendanceStatus.ABSENT


def test_normal_day_is_present():
    strategy = AttendanceStatusFactory().for_day(has_events=True, worked=NORMAL_DAY, is_late=False, is_early_leave=False)

    assert isinstance(strategy, PresentStrategy)


def test_open_check_in_wins_over_lateness():
    worked = WorkedTime(first_check_in=CHECK_IN, open_check_in=CHECK_IN)
    strategy = AttendanceStatusFactory().for_day(has_events=True, worked=worked, is_late=True, is_early_leave=False)
    decision = strategy.decide(worked=worked, is_late=True, is_early_leave=False)

    assert isinstance(strategy, NoCheckOutStrategy)
    assert decision.status == AttendanceStatus.NO_CHECK_OUT
    assert decision.note == "Open check-in since 09:00"


def test_late_and_early_leave_are_irregular():
    strategy = AttendanceStatusFactory().for_day(has_events=True, worked=NORMAL_DAY, is_late=True, is_early_leave=True)
    decision = strategy.decide(worked=NORMAL_DAY, is_late=True, is_early_leave=True)

    assert isinstance(strategy, IrregularStrategy)
    assert decision.note == "Late arrival, Early leave"


def test_punches_without_check_in_are_irregular():
    worked = WorkedTime(break_time=timedelta(minutes=10))
    strategy = AttendanceStatusFactory().for_day(has_events=True, worked=worked, is_late=False, is_early_leave=False)

    assert isinstance(strategy, IrregularStrategy)
    assert strategy.decide(worked=worked, is_late=False, is_early_leave=False).note == "No check-in"
