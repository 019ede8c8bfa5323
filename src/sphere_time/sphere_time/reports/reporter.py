"""Period reporting over already-fetched punches.

Everything here is a pure function: inputs are in-memory sequences, outputs are
new read-models. Empty inputs give empty results, never errors.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..attendance.aggregator import aggregate, group_by_day
from ..attendance.factory import AttendanceStatusFactory
from ..attendance.model import ZERO, AttendanceEvent
from ..common.datetime_utils import is_working_day, working_days
from ..core.constants import TOP_EMPLOYEES_LIMIT
from ..core.enums import AttendanceStatus, EventKind, ReportOrder
from ..employees.model import Employee
from .calculator.base import HoursCalculator
from .calculator.standard_calculator import StandardHoursCalculator
from .model import (
    DailyAttendanceSummary,
    DepartmentSummary,
    EmployeeStats,
    EmployeeSummary,
    HoursReportRow,
    ReportFilters,
    ReportPolicy,
    ReportRow,
    SummaryReport,
)

NO_DEPARTMENT = "No department"


def _in_range(events: Iterable[AttendanceEvent], start: date, end: date) -> List[AttendanceEvent]:
    return [e for e in events if start <= e.occurred_at.date() <= end]


def _by_employee(events: Iterable[AttendanceEvent]) -> Dict[int, List[AttendanceEvent]]:
    out: Dict[int, List[AttendanceEvent]] = {}
    for e in events:
        out.setdefault(e.employee_id, []).append(e)
    return out


def filter_employees(employees: Iterable[Employee], filters: Optional[ReportFilters]) -> List[Employee]:
    selected = list(employees)
    if filters is None:
        return selected
    if filters.employee_ids is not None:
        wanted = {int(i) for i in filters.employee_ids}
        selected = [e for e in selected if e.employee_id in wanted]
    if filters.department_ids is not None:
        wanted = {int(i) for i in filters.department_ids}
        selected = [e for e in selected if e.dept_id in wanted]
    return selected


def summarize_day(
    employee_id: int,
    work_date: date,
    events: Sequence[AttendanceEvent],
    *,
    policy: ReportPolicy,
    calculator: HoursCalculator,
    factory: Optional[AttendanceStatusFactory] = None,
) -> DailyAttendanceSummary:
    """Aggregate one employee-day and decide its status."""

    factory = factory or AttendanceStatusFactory()
    worked = aggregate(sorted(events, key=lambda e: e.occurred_at))
    net = calculator.net_worked(worked)

    is_late = worked.first_check_in is not None and worked.first_check_in.time() > policy.late_cutoff
    is_early_leave = worked.last_check_out is not None and worked.last_check_out.time() < policy.early_leave_cutoff

    strategy = factory.for_day(has_events=bool(events), worked=worked, is_late=is_late, is_early_leave=is_early_leave)
    decision = strategy.decide(worked=worked, is_late=is_late, is_early_leave=is_early_leave)

    return DailyAttendanceSummary(
        employee_id=employee_id,
        work_date=work_date,
        worked=worked.worked,
        break_time=worked.break_time,
        net_worked=net,
        overtime=max(net - policy.regular_day, ZERO),
        first_check_in=worked.first_check_in,
        last_check_out=worked.last_check_out,
        is_late=is_late,
        is_early_leave=is_early_leave,
        status=decision.status,
        note=decision.note,
    )


def _row(employee: Employee, summary: DailyAttendanceSummary) -> ReportRow:
    return ReportRow(
        employee_id=employee.employee_id,
        first_name=employee.first_name,
        last_name=employee.last_name,
        employee_code=employee.employee_code,
        dept_id=employee.dept_id,
        dept_name=employee.dept_name,
        summary=summary,
    )


def _sort_key(order: ReportOrder):
    if order == ReportOrder.DATE_EMPLOYEE:
        return lambda r: (r.work_date, r.last_name.lower(), r.first_name.lower(), r.employee_id)
    return lambda r: (r.last_name.lower(), r.first_name.lower(), r.employee_id, r.work_date)


def build_report(
    events: Iterable[AttendanceEvent],
    employees: Iterable[Employee],
    *,
    start: date,
    end: date,
    filters: Optional[ReportFilters] = None,
    policy: Optional[ReportPolicy] = None,
    calculator: Optional[HoursCalculator] = None,
    order: ReportOrder = ReportOrder.EMPLOYEE_DATE,
    absent_through: Optional[date] = None,
) -> List[ReportRow]:
    """One row per (employee, date).

    Days with punches always get a row. Workdays without punches get an
    ABSENT row, up to ``absent_through`` when given (so future days in the
    range are not reported as absences). Punches of employees not in
    ``employees`` are ignored.
    """

    policy = policy or ReportPolicy()
    calculator = calculator or StandardHoursCalculator()
    factory = AttendanceStatusFactory()

    selected = filter_employees(employees, filters)
    events_by_employee = _by_employee(_in_range(events, start, end))

    absent_end = min(end, absent_through) if absent_through else end
    absent_days = working_days(start, absent_end) if absent_end >= start else []

    rows: List[ReportRow] = []
    for employee in selected:
        by_day = group_by_day(events_by_employee.get(employee.employee_id, []))

        for work_date, day_events in by_day.items():
            summary = summarize_day(
                employee.employee_id, work_date, day_events, policy=policy, calculator=calculator, factory=factory
            )
            rows.append(_row(employee, summary))

        for work_date in absent_days:
            if work_date in by_day:
                continue
            summary = summarize_day(
                employee.employee_id, work_date, [], policy=policy, calculator=calculator, factory=factory
            )
            rows.append(_row(employee, summary))

    rows.sort(key=_sort_key(order))
    return rows


def _checked_in_days(events: Iterable[AttendanceEvent]) -> Dict[Tuple[int, date], datetime]:
    """First check-in per (employee, date)."""

    firsts: Dict[Tuple[int, date], datetime] = {}
    for e in events:
        if e.kind != EventKind.CHECK_IN:
            continue
        key = (e.employee_id, e.occurred_at.date())
        if key not in firsts or e.occurred_at < firsts[key]:
            firsts[key] = e.occurred_at
    return firsts


def attendance_rate(events: Iterable[AttendanceEvent], *, start: date, end: date, active_employees: int) -> float:
    """Employee-days with a check-in / (workdays x active employees) x 100.

    Only workdays count on both sides, so weekend shifts cannot push the rate
    above 100.
    """

    days = len(working_days(start, end))
    if days == 0 or active_employees <= 0:
        return 0.0
    present = sum(1 for (_, d) in _checked_in_days(_in_range(events, start, end)) if is_working_day(d))
    return round(present / (days * active_employees) * 100, 2)


def punctuality_rate(events: Iterable[AttendanceEvent], *, cutoff) -> float:
    """First check-ins at or before ``cutoff`` / all first check-ins x 100.

    Only the first check-in of each employee-day counts; later check-ins on
    the same day (split shifts) are not arrivals.
    """

    firsts = list(_checked_in_days(events).values())
    if not firsts:
        return 0.0
    on_time = sum(1 for t in firsts if t.time() <= cutoff)
    return round(on_time / len(firsts) * 100, 2)


def build_hours_report(rows: Iterable[ReportRow], *, policy: Optional[ReportPolicy] = None) -> List[HoursReportRow]:
    """Per-employee totals from daily rows."""

    policy = policy or ReportPolicy()
    grouped: Dict[int, List[ReportRow]] = {}
    for r in rows:
        grouped.setdefault(r.employee_id, []).append(r)

    out: List[HoursReportRow] = []
    for employee_id, emp_rows in grouped.items():
        first = emp_rows[0]
        total = sum((r.summary.net_worked for r in emp_rows), ZERO)
        regular = sum((min(r.summary.net_worked, policy.regular_day) for r in emp_rows), ZERO)
        out.append(
            HoursReportRow(
                employee_id=employee_id,
                full_name=first.full_name,
                employee_code=first.employee_code,
                dept_name=first.dept_name,
                total_worked=total,
                regular=regular,
                overtime=sum((r.summary.overtime for r in emp_rows), ZERO),
                total_break=sum((r.summary.break_time for r in emp_rows), ZERO),
                days_worked=sum(1 for r in emp_rows if r.summary.net_worked > ZERO),
                days_present=sum(1 for r in emp_rows if r.status != AttendanceStatus.ABSENT),
                days_absent=sum(1 for r in emp_rows if r.status == AttendanceStatus.ABSENT),
            )
        )

    out.sort(key=lambda h: (h.full_name.lower(), h.employee_id))
    return out


def _department_summaries(
    rows: Sequence[ReportRow],
    events: Sequence[AttendanceEvent],
    employees: Sequence[Employee],
    *,
    start: date,
    end: date,
    policy: ReportPolicy,
) -> List[DepartmentSummary]:
    by_dept: Dict[Optional[int], List[Employee]] = {}
    for e in employees:
        by_dept.setdefault(e.dept_id, []).append(e)

    out: List[DepartmentSummary] = []
    for dept_id, members in by_dept.items():
        ids = {m.employee_id for m in members}
        dept_events = [e for e in events if e.employee_id in ids]
        worked_ids = {employee_id for (employee_id, _) in _checked_in_days(dept_events)}
        out.append(
            DepartmentSummary(
                dept_id=dept_id,
                dept_name=members[0].dept_name or NO_DEPARTMENT,
                total_employees=len(members),
                active_employees=len(worked_ids),
                total_worked=sum((r.summary.net_worked for r in rows if r.employee_id in ids), ZERO),
                attendance_rate=attendance_rate(dept_events, start=start, end=end, active_employees=len(members)),
                punctuality_rate=punctuality_rate(dept_events, cutoff=policy.late_cutoff),
            )
        )

    out.sort(key=lambda d: d.dept_name.lower())
    return out


def build_summary(
    rows: Sequence[ReportRow],
    events: Iterable[AttendanceEvent],
    employees: Iterable[Employee],
    *,
    tenant_id: str,
    start: date,
    end: date,
    filters: Optional[ReportFilters] = None,
    policy: Optional[ReportPolicy] = None,
    generated_at: Optional[datetime] = None,
) -> SummaryReport:
    """Cross-employee statistics for the period."""

    policy = policy or ReportPolicy()
    selected = filter_employees(employees, filters)
    ids = {e.employee_id for e in selected}
    period_events = [e for e in _in_range(events, start, end) if e.employee_id in ids]

    departments = _department_summaries(rows, period_events, selected, start=start, end=end, policy=policy)

    per_employee: Dict[int, EmployeeSummary] = {}
    for r in rows:
        current = per_employee.get(r.employee_id)
        total = (current.total_worked if current else ZERO) + r.summary.net_worked
        per_employee[r.employee_id] = EmployeeSummary(
            employee_id=r.employee_id, full_name=r.full_name, dept_name=r.dept_name, total_worked=total
        )
    top_employees = sorted(per_employee.values(), key=lambda s: (-s.total_worked, s.full_name.lower()))

    top_by_hours = max(departments, key=lambda d: d.total_worked, default=None)
    top_by_attendance = max(departments, key=lambda d: d.attendance_rate, default=None)

    return SummaryReport(
        tenant_id=tenant_id,
        start_date=start,
        end_date=end,
        total_employees=len(selected),
        total_records=len(period_events),
        total_worked=sum((r.summary.net_worked for r in rows), ZERO),
        total_overtime=sum((r.summary.overtime for r in rows), ZERO),
        attendance_rate=attendance_rate(period_events, start=start, end=end, active_employees=len(selected)),
        punctuality_rate=punctuality_rate(period_events, cutoff=policy.late_cutoff),
        working_days_in_period=len(working_days(start, end)),
        active_working_employees=len({employee_id for (employee_id, _) in _checked_in_days(period_events)}),
        top_department_by_hours=top_by_hours.dept_name if top_by_hours else "",
        top_department_by_attendance=top_by_attendance.dept_name if top_by_attendance else "",
        department_summaries=departments,
        top_employees_by_hours=top_employees[:TOP_EMPLOYEES_LIMIT],
        generated_at=generated_at,
    )


def employee_stats(
    employee_id: int,
    events: Iterable[AttendanceEvent],
    *,
    start: date,
    end: date,
    policy: Optional[ReportPolicy] = None,
    calculator: Optional[HoursCalculator] = None,
) -> EmployeeStats:
    policy = policy or ReportPolicy()
    calculator = calculator or StandardHoursCalculator()

    own = [e for e in _in_range(events, start, end) if e.employee_id == employee_id]
    total = ZERO
    total_break = ZERO
    overtime = ZERO
    days_worked = 0
    for day_events in group_by_day(own).values():
        worked = aggregate(day_events)
        net = calculator.net_worked(worked)
        total += net
        total_break += worked.break_time
        overtime += max(net - policy.regular_day, ZERO)
        if worked.first_check_in is not None:
            days_worked += 1

    return EmployeeStats(
        employee_id=employee_id,
        start_date=start,
        end_date=end,
        total_worked=total,
        total_break=total_break,
        overtime=overtime,
        days_worked=days_worked,
    )
