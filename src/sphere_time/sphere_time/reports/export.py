from __future__ import annotations

import csv
import io
from typing import Iterable, List

from ..common.datetime_utils import format_hhmm
from .model import HoursReportRow, ReportRow

ATTENDANCE_FIELDS = [
    "work_date",
    "employee_id",
    "employee_code",
    "full_name",
    "dept_name",
    "check_in",
    "check_out",
    "worked_hours",
    "break_hours",
    "overtime_hours",
    "is_late",
    "is_early_leave",
    "status",
    "note",
]

HOURS_FIELDS = [
    "employee_id",
    "employee_code",
    "full_name",
    "dept_name",
    "total_worked_hours",
    "regular_hours",
    "overtime_hours",
    "total_break",
    "days_worked",
    "days_present",
    "days_absent",
]


def attendance_row_dict(r: ReportRow) -> dict:
    s = r.summary
    return {
        "work_date": s.work_date.strftime("%Y-%m-%d"),
        "employee_id": r.employee_id,
        "employee_code": r.employee_code,
        "full_name": r.full_name,
        "dept_name": r.dept_name or "-",
        "check_in": s.first_check_in.strftime("%H:%M") if s.first_check_in else "-",
        "check_out": s.last_check_out.strftime("%H:%M") if s.last_check_out else "-",
        "worked_hours": format_hhmm(s.net_worked),
        "break_hours": format_hhmm(s.break_time),
        "overtime_hours": format_hhmm(s.overtime),
        "is_late": "yes" if s.is_late else "no",
        "is_early_leave": "yes" if s.is_early_leave else "no",
        "status": s.status.value,
        "note": s.note or "",
    }


def hours_row_dict(h: HoursReportRow) -> dict:
    return {
        "employee_id": h.employee_id,
        "employee_code": h.employee_code,
        "full_name": h.full_name,
        "dept_name": h.dept_name or "-",
        "total_worked_hours": h.total_worked_hours,
        "regular_hours": h.regular_hours,
        "overtime_hours": h.overtime_hours,
        "total_break": format_hhmm(h.total_break),
        "days_worked": h.days_worked,
        "days_present": h.days_present,
        "days_absent": h.days_absent,
    }


def _write_csv(fieldnames: List[str], rows: Iterable[dict]) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=fieldnames)
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    # BOM so spreadsheet apps pick UTF-8 for accented names.
    return out.getvalue().encode("utf-8-sig")


def attendance_csv(rows: Iterable[ReportRow]) -> bytes:
    return _write_csv(ATTENDANCE_FIELDS, (attendance_row_dict(r) for r in rows))


def hours_csv(rows: Iterable[HoursReportRow]) -> bytes:
    return _write_csv(HOURS_FIELDS, (hours_row_dict(h) for h in rows))
