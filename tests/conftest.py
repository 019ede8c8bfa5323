from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

import pytest

from src.sphere_time.sphere_time.attendance.model import AttendanceEvent, EventPatch, NewEvent
from src.sphere_time.sphere_time.core.enums import EventKind
from src.sphere_time.sphere_time.employees.model import Employee
from src.sphere_time.sphere_time.tenancy.model import TenantContext

# Monday
MONDAY = date(2026, 1, 5)


class InMemoryEmployees:
    def __init__(self, employees: Sequence[Employee] = ()):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, tenant: TenantContext, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def list_active(self, tenant: TenantContext, *, employee_ids=None, department_ids=None):
        items = [e for e in self._by_id.values() if e.is_active]
        if employee_ids is not None:
            items = [e for e in items if e.employee_id in set(employee_ids)]
        if department_ids is not None:
            items = [e for e in items if e.dept_id in set(department_ids)]
        return items

    def count_active(self, tenant: TenantContext) -> int:
        return len(self.list_active(tenant))


class InMemoryAttendance:
    def __init__(self, employees: Optional[InMemoryEmployees] = None):
        self._events: dict[int, AttendanceEvent] = {}
        self._id = 0
        self._employees = employees
        self.calls: list[dict] = []

    def seed(self, employee_id: int, kind: EventKind, occurred_at: datetime, **kwargs) -> AttendanceEvent:
        return self.insert_event(None, NewEvent(employee_id=employee_id, kind=kind, occurred_at=occurred_at, **kwargs))

    def _ordered(self):
        return sorted(self._events.values(), key=lambda e: (e.occurred_at, e.event_id))

    def get_last_event(self, tenant, employee_id: int) -> Optional[AttendanceEvent]:
        items = [e for e in self._ordered() if e.employee_id == employee_id]
        return items[-1] if items else None

    def get_by_id(self, tenant, event_id: int) -> Optional[AttendanceEvent]:
        return self._events.get(event_id)

    def list_events(self, tenant, *, start_date, end_date, employee_ids=None, department_ids=None):
        self.calls.append(
            {"start_date": start_date, "end_date": end_date, "employee_ids": employee_ids, "department_ids": department_ids}
        )
        items = [e for e in self._ordered() if start_date <= e.occurred_at.date() <= end_date]
        if employee_ids is not None:
            items = [e for e in items if e.employee_id in set(employee_ids)]
        if department_ids is not None and self._employees is not None:
            depts = set(department_ids)
            items = [
                e
                for e in items
                if (emp := self._employees.get_by_id(tenant, e.employee_id)) is not None and emp.dept_id in depts
            ]
        return items

    def _matching(self, *, employee_id=None, start_date=None, end_date=None, kind=None):
        items = self._ordered()
        if employee_id is not None:
            items = [e for e in items if e.employee_id == employee_id]
        if start_date is not None:
            items = [e for e in items if e.occurred_at.date() >= start_date]
        if end_date is not None:
            items = [e for e in items if e.occurred_at.date() <= end_date]
        if kind is not None:
            items = [e for e in items if e.kind == kind]
        return items

    def list_records(self, tenant, *, offset=0, limit=20, **filters):
        newest_first = list(reversed(self._matching(**filters)))
        return newest_first[offset : offset + limit]

    def count_records(self, tenant, **filters) -> int:
        return len(self._matching(**filters))

    def insert_event(self, tenant, event: NewEvent) -> AttendanceEvent:
        self._id += 1
        stored = AttendanceEvent(
            event_id=self._id,
            employee_id=event.employee_id,
            kind=event.kind,
            occurred_at=event.occurred_at,
            notes=event.notes,
            location=event.location,
            latitude=event.latitude,
            longitude=event.longitude,
            device_info=event.device_info,
            is_manual_entry=event.is_manual_entry,
            created_by=event.created_by,
            created_at=event.occurred_at,
        )
        self._events[self._id] = stored
        return stored

    def update_event(self, tenant, event_id: int, patch: EventPatch) -> bool:
        current = self._events.get(event_id)
        if current is None:
            return False
        changes = {k: v for k, v in vars(patch).items() if v is not None}
        if not changes:
            return False
        self._events[event_id] = replace(current, **changes)
        return True

    def delete_event(self, tenant, event_id: int) -> bool:
        return self._events.pop(event_id, None) is not None


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 1, 7, 10, 0)


@pytest.fixture
def tenant() -> TenantContext:
    return TenantContext(tenant_id="acme", database="sphere_acme")


@pytest.fixture
def employees() -> list[Employee]:
    return [
        Employee(employee_id=1, first_name="Ana", last_name="Silva", employee_code="E001", dept_id=10, dept_name="Sales"),
        Employee(employee_id=2, first_name="Bruno", last_name="Costa", employee_code="E002", dept_id=20, dept_name="IT"),
        Employee(
            employee_id=3,
            first_name="Carla",
            last_name="Dias",
            employee_code="E003",
            dept_id=20,
            dept_name="IT",
            is_active=False,
        ),
    ]


@pytest.fixture
def employees_repo(employees) -> InMemoryEmployees:
    return InMemoryEmployees(employees)


@pytest.fixture
def attendance_repo(employees_repo) -> InMemoryAttendance:
    return InMemoryAttendance(employees_repo)


@pytest.fixture
def make_event():
    """Build a stored punch without going through a repository."""

    counter = {"id": 0}

    def _make(kind: EventKind, at: datetime, *, employee_id: int = 1, **kwargs) -> AttendanceEvent:
        counter["id"] += 1
        return AttendanceEvent(event_id=counter["id"], employee_id=employee_id, kind=kind, occurred_at=at, **kwargs)

    return _make
