from datetime import timedelta

from src.sphere_time.sphere_time.attendance.model import WorkedTime
from src.sphere_time.sphere_time.reports.calculator.gross_calculator import GrossHoursCalculator
from src.sphere_time.sphere_time.reports.calculator.standard_calculator import StandardHoursCalculator


def test_standard_calculator_subtracts_break():
    worked = WorkedTime(worked=timedelta(hours=8), break_time=timedelta(minutes=30))

    assert StandardHoursCalculator().net_worked(worked) == timedelta(hours=7, minutes=30)


def test_standard_calculator_never_negative():
    worked = WorkedTime(worked=timedelta(minutes=10), break_time=timedelta(hours=1))

    assert StandardHoursCalculator().net_worked(worked) == timedelta(0)


def test_gross_calculator_keeps_breaks():
    worked = WorkedTime(worked=timedelta(hours=8), break_time=timedelta(minutes=30))

    assert GrossHoursCalculator().net_worked(worked) == timedelta(hours=8)
