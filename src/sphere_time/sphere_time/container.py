from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import TimeClockService
from .core.constants import EDIT_WINDOW_FUTURE_MINUTES, EDIT_WINDOW_PAST_DAYS
from .database.connection import TenantDatabases
from .employees.mysql_department_repository import MySQLDepartmentRepository
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .reports.calculator.base import HoursCalculator
from .reports.calculator.gross_calculator import GrossHoursCalculator
from .reports.calculator.standard_calculator import StandardHoursCalculator
from .reports.model import ReportPolicy
from .reports.service import PeriodReportService
from .tenancy.resolver import TenantRegistry


@dataclass(frozen=True)
class Container:
    databases: TenantDatabases
    registry: TenantRegistry

    employees_repo: MySQLEmployeeRepository
    departments_repo: MySQLDepartmentRepository
    attendance_repo: MySQLAttendanceRepository

    time_clock_service: TimeClockService
    report_service: PeriodReportService


def hours_calculator(*, subtract_breaks: bool) -> HoursCalculator:
    return StandardHoursCalculator() if subtract_breaks else GrossHoursCalculator()


def build_container(
    *,
    db_config: dict,
    registry: TenantRegistry | None = None,
    policy: ReportPolicy | None = None,
    subtract_breaks: bool = True,
    edit_future_minutes: int = EDIT_WINDOW_FUTURE_MINUTES,
    edit_past_days: int = EDIT_WINDOW_PAST_DAYS,
) -> Container:
    databases = TenantDatabases.from_dict(db_config)
    calculator = hours_calculator(subtract_breaks=subtract_breaks)

    employees_repo = MySQLEmployeeRepository(databases)
    departments_repo = MySQLDepartmentRepository(databases)
    attendance_repo = MySQLAttendanceRepository(databases)

    time_clock_service = TimeClockService(
        attendance_repo,
        employees_repo,
        calculator=calculator,
        edit_future_minutes=edit_future_minutes,
        edit_past_days=edit_past_days,
    )
    report_service = PeriodReportService(
        attendance_repo,
        employees_repo,
        departments_repo,
        policy=policy or ReportPolicy(),
        calculator=calculator,
    )

    return Container(
        databases=databases,
        registry=registry or TenantRegistry(),
        employees_repo=employees_repo,
        departments_repo=departments_repo,
        attendance_repo=attendance_repo,
        time_clock_service=time_clock_service,
        report_service=report_service,
    )
