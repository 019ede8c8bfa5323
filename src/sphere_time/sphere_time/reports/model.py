from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Sequence

from ..attendance.model import ZERO
from ..common.datetime_utils import to_hours
from ..core.constants import DEFAULT_EARLY_LEAVE_CUTOFF, DEFAULT_LATE_CUTOFF, DEFAULT_REGULAR_HOURS_PER_DAY
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class ReportPolicy:
    """Tolerance windows and the regular working day used by reports."""

    late_cutoff: time = DEFAULT_LATE_CUTOFF
    early_leave_cutoff: time = DEFAULT_EARLY_LEAVE_CUTOFF
    regular_hours_per_day: float = DEFAULT_REGULAR_HOURS_PER_DAY

    @property
    def regular_day(self) -> timedelta:
        return timedelta(hours=self.regular_hours_per_day)


@dataclass(frozen=True)
class ReportFilters:
    """``None`` means no filter; an empty sequence matches nobody."""

    employee_ids: Optional[Sequence[int]] = None
    department_ids: Optional[Sequence[int]] = None


@dataclass(frozen=True)
class DailyAttendanceSummary:
    """Derived, recomputed on demand: one employee on one date."""

    employee_id: int
    work_date: date
    worked: timedelta
    break_time: timedelta
    net_worked: timedelta
    overtime: timedelta
    first_check_in: Optional[datetime]
    last_check_out: Optional[datetime]
    is_late: bool
    is_early_leave: bool
    status: AttendanceStatus
    note: Optional[str] = None

    @property
    def worked_hours(self) -> float:
        return to_hours(self.net_worked)

    @property
    def break_hours(self) -> float:
        return to_hours(self.break_time)

    @property
    def overtime_hours(self) -> float:
        return to_hours(self.overtime)


@dataclass(frozen=True)
class ReportRow:
    """Read-model for report tables and file exports."""

    employee_id: int
    first_name: str
    last_name: str
    employee_code: str
    dept_id: Optional[int]
    dept_name: Optional[str]
    summary: DailyAttendanceSummary

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def work_date(self) -> date:
        return self.summary.work_date

    @property
    def status(self) -> AttendanceStatus:
        return self.summary.status


@dataclass(frozen=True)
class HoursReportRow:
    employee_id: int
    full_name: str
    employee_code: str
    dept_name: Optional[str]
    total_worked: timedelta
    regular: timedelta
    overtime: timedelta
    total_break: timedelta
    days_worked: int
    days_present: int
    days_absent: int

    @property
    def total_worked_hours(self) -> float:
        return to_hours(self.total_worked)

    @property
    def regular_hours(self) -> float:
        return to_hours(self.regular)

    @property
    def overtime_hours(self) -> float:
        return to_hours(self.overtime)


@dataclass(frozen=True)
class EmployeeSummary:
    employee_id: int
    full_name: str
    dept_name: Optional[str]
    total_worked: timedelta

    @property
    def total_hours(self) -> float:
        return to_hours(self.total_worked)


@dataclass(frozen=True)
class DepartmentSummary:
    dept_id: Optional[int]
    dept_name: str
    total_employees: int
    active_employees: int
    total_worked: timedelta
    attendance_rate: float
    punctuality_rate: float

    @property
    def total_hours(self) -> float:
        return to_hours(self.total_worked)

    @property
    def average_hours_per_employee(self) -> float:
        if not self.active_employees:
            return 0.0
        return round(self.total_hours / self.active_employees, 2)


@dataclass(frozen=True)
class SummaryReport:
    tenant_id: str
    start_date: date
    end_date: date
    total_employees: int
    total_records: int
    total_worked: timedelta
    total_overtime: timedelta
    attendance_rate: float
    punctuality_rate: float
    working_days_in_period: int
    active_working_employees: int
    top_department_by_hours: str = ""
    top_department_by_attendance: str = ""
    department_summaries: List[DepartmentSummary] = field(default_factory=list)
    top_employees_by_hours: List[EmployeeSummary] = field(default_factory=list)
    generated_at: Optional[datetime] = None

    @property
    def period(self) -> str:
        return f"{self.start_date.strftime('%d/%m/%Y')} - {self.end_date.strftime('%d/%m/%Y')}"

    @property
    def total_worked_hours(self) -> float:
        return to_hours(self.total_worked)

    @property
    def total_overtime_hours(self) -> float:
        return to_hours(self.total_overtime)

    @property
    def average_hours_per_employee(self) -> float:
        if not self.active_working_employees:
            return 0.0
        return round(self.total_worked_hours / self.active_working_employees, 2)


@dataclass(frozen=True)
class EmployeeStats:
    employee_id: int
    start_date: date
    end_date: date
    total_worked: timedelta = ZERO
    total_break: timedelta = ZERO
    overtime: timedelta = ZERO
    days_worked: int = 0

    @property
    def total_worked_hours(self) -> float:
        return to_hours(self.total_worked)

    @property
    def average_hours_per_day(self) -> float:
        if not self.days_worked:
            return 0.0
        return round(self.total_worked_hours / self.days_worked, 2)


@dataclass(frozen=True)
class DashboardStats:
    tenant_id: str
    day: date
    total_employees: int
    present_today: int
    absent_today: int
    on_break: int
    total_hours_this_month: float
    average_hours_per_day: float
