from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization checks."""

    EMPLOYEE = "employee"
    SUPERVISOR = "supervisor"
    COMPANY_ADMIN = "company_admin"
    SPHERE_ADMIN = "sphere_admin"

    @property
    def is_admin(self) -> bool:
        return self in (Role.COMPANY_ADMIN, Role.SPHERE_ADMIN)


class EventKind(str, Enum):
    """Punch types stored in the time_records table."""

    CHECK_IN = "CHECK_IN"
    CHECK_OUT = "CHECK_OUT"
    BREAK_START = "BREAK_START"
    BREAK_END = "BREAK_END"
    LUNCH_START = "LUNCH_START"
    LUNCH_END = "LUNCH_END"


class EmployeeStatus(str, Enum):
    """Where an employee currently is, derived from the last punch."""

    CHECKED_OUT = "CHECKED_OUT"
    CHECKED_IN = "CHECKED_IN"
    ON_BREAK = "ON_BREAK"
    ON_LUNCH = "ON_LUNCH"


class AttendanceStatus(str, Enum):
    """Status of one employee-day in reports."""

    ABSENT = "ABSENT"
    PRESENT = "PRESENT"
    NO_CHECK_OUT = "NO_CHECK_OUT"
    IRREGULAR = "IRREGULAR"


class ReportOrder(str, Enum):
    EMPLOYEE_DATE = "employee_date"
    DATE_EMPLOYEE = "date_employee"
