from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple

from ..attendance.aggregator import aggregate, group_by_day
from ..attendance.model import ZERO, AttendanceEvent
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_range, now_local, to_hours
from ..common.validators import require_date_range
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.enums import EventKind, ReportOrder
from ..employees.department_model import Department
from ..employees.department_repository import DepartmentRepository
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..tenancy.model import TenantContext
from . import export, reporter
from .calculator.base import HoursCalculator
from .calculator.standard_calculator import StandardHoursCalculator
from .model import (
    DashboardStats,
    EmployeeStats,
    HoursReportRow,
    ReportFilters,
    ReportPolicy,
    ReportRow,
    SummaryReport,
)

logger = logging.getLogger(__name__)

_ON_BREAK_KINDS = (EventKind.BREAK_START, EventKind.LUNCH_START)


class PeriodReportService:
    """Loads punches and employees for a tenant and hands them to the reporter."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        departments: DepartmentRepository | None = None,
        *,
        policy: ReportPolicy | None = None,
        calculator: HoursCalculator | None = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._departments = departments
        self._policy = policy or ReportPolicy()
        self._calculator = calculator or StandardHoursCalculator()

    def _load(
        self,
        tenant: TenantContext,
        *,
        start: date,
        end: date,
        filters: Optional[ReportFilters],
    ) -> Tuple[List[AttendanceEvent], List[Employee]]:
        require_date_range(start, end)
        filters = filters or ReportFilters()
        try:
            employees = list(
                self._employees.list_active(
                    tenant, employee_ids=filters.employee_ids, department_ids=filters.department_ids
                )
            )
            events = list(
                self._attendance.list_events(
                    tenant,
                    start_date=start,
                    end_date=end,
                    employee_ids=filters.employee_ids,
                    department_ids=filters.department_ids,
                )
            )
        except Exception:
            logger.exception("Failed to load report data for tenant %s (%s - %s)", tenant.tenant_id, start, end)
            raise
        return events, employees

    def list_departments(self, tenant: TenantContext) -> List[Department]:
        """Departments offered as report filters."""

        if self._departments is None:
            return []
        return list(self._departments.list_all(tenant))

    def build_attendance_report(
        self,
        tenant: TenantContext,
        *,
        start: date,
        end: date,
        filters: ReportFilters | None = None,
        order: ReportOrder = ReportOrder.EMPLOYEE_DATE,
        today: date | None = None,
    ) -> List[ReportRow]:
        today = today or now_local().date()
        events, employees = self._load(tenant, start=start, end=end, filters=filters)
        rows = reporter.build_report(
            events,
            employees,
            start=start,
            end=end,
            filters=filters,
            policy=self._policy,
            calculator=self._calculator,
            order=order,
            absent_through=today,
        )
        logger.info("Attendance report for tenant %s: %d rows (%s - %s)", tenant.tenant_id, len(rows), start, end)
        return rows

    def build_hours_report(
        self,
        tenant: TenantContext,
        *,
        start: date,
        end: date,
        filters: ReportFilters | None = None,
        today: date | None = None,
    ) -> List[HoursReportRow]:
        rows = self.build_attendance_report(tenant, start=start, end=end, filters=filters, today=today)
        return reporter.build_hours_report(rows, policy=self._policy)

    def build_summary_report(
        self,
        tenant: TenantContext,
        *,
        start: date,
        end: date,
        filters: ReportFilters | None = None,
        today: date | None = None,
        now: datetime | None = None,
    ) -> SummaryReport:
        now = now or now_local()
        today = today or now.date()
        events, employees = self._load(tenant, start=start, end=end, filters=filters)
        rows = reporter.build_report(
            events,
            employees,
            start=start,
            end=end,
            filters=filters,
            policy=self._policy,
            calculator=self._calculator,
            absent_through=today,
        )
        return reporter.build_summary(
            rows,
            events,
            employees,
            tenant_id=tenant.tenant_id,
            start=start,
            end=end,
            filters=filters,
            policy=self._policy,
            generated_at=now,
        )

    def get_employee_stats(
        self,
        tenant: TenantContext,
        employee_id: int,
        *,
        start: date | None = None,
        end: date | None = None,
    ) -> EmployeeStats:
        end = end or now_local().date()
        start = start or end - timedelta(days=DEFAULT_REPORT_DAYS)
        require_date_range(start, end)

        events = self._attendance.list_events(tenant, start_date=start, end_date=end, employee_ids=[employee_id])
        return reporter.employee_stats(
            employee_id, events, start=start, end=end, policy=self._policy, calculator=self._calculator
        )

    def get_dashboard_stats(self, tenant: TenantContext, *, today: date | None = None) -> DashboardStats:
        today = today or now_local().date()
        month_start, _ = month_range(today)

        total = self._employees.count_active(tenant)
        active_ids = {e.employee_id for e in self._employees.list_active(tenant)}
        events = [
            e
            for e in self._attendance.list_events(tenant, start_date=month_start, end_date=today)
            if e.employee_id in active_ids
        ]
        today_events = [e for e in events if e.occurred_at.date() == today]

        present = {e.employee_id for e in today_events if e.kind == EventKind.CHECK_IN}

        last_today: dict[int, AttendanceEvent] = {}
        for e in today_events:
            last_today[e.employee_id] = e
        on_break = sum(1 for e in last_today.values() if e.kind in _ON_BREAK_KINDS)

        month_total = ZERO
        days_worked = 0
        per_employee: dict[int, List[AttendanceEvent]] = {}
        for e in events:
            per_employee.setdefault(e.employee_id, []).append(e)
        for emp_events in per_employee.values():
            for day_events in group_by_day(emp_events).values():
                worked = aggregate(day_events)
                month_total += self._calculator.net_worked(worked)
                if worked.first_check_in is not None:
                    days_worked += 1

        month_hours = to_hours(month_total)
        return DashboardStats(
            tenant_id=tenant.tenant_id,
            day=today,
            total_employees=total,
            present_today=len(present),
            absent_today=max(total - len(present), 0),
            on_break=on_break,
            total_hours_this_month=month_hours,
            average_hours_per_day=round(month_hours / days_worked, 2) if days_worked else 0.0,
        )

    # ---------- exports ----------

    def export_attendance_csv(
        self,
        tenant: TenantContext,
        *,
        start: date,
        end: date,
        filters: ReportFilters | None = None,
        order: ReportOrder = ReportOrder.EMPLOYEE_DATE,
        today: date | None = None,
    ) -> Tuple[str, bytes]:
        rows = self.build_attendance_report(tenant, start=start, end=end, filters=filters, order=order, today=today)
        return _filename("attendance", start, end), export.attendance_csv(rows)

    def export_hours_csv(
        self,
        tenant: TenantContext,
        *,
        start: date,
        end: date,
        filters: ReportFilters | None = None,
        today: date | None = None,
    ) -> Tuple[str, bytes]:
        rows = self.build_hours_report(tenant, start=start, end=end, filters=filters, today=today)
        return _filename("hours", start, end), export.hours_csv(rows)


def _filename(prefix: str, start: date, end: date) -> str:
    return f"{prefix}_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
