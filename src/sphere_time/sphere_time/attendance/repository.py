from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import EventKind
from ..tenancy.model import TenantContext
from .model import AttendanceEvent, EventPatch, NewEvent


class AttendanceRepository(Protocol):
    def get_last_event(self, tenant: TenantContext, employee_id: int) -> Optional[AttendanceEvent]:
        """Most recent punch of the employee, any day."""

        raise NotImplementedError

    def get_by_id(self, tenant: TenantContext, event_id: int) -> Optional[AttendanceEvent]:
        raise NotImplementedError

    def list_events(
        self,
        tenant: TenantContext,
        *,
        start_date: date,
        end_date: date,
        employee_ids: Optional[Sequence[int]] = None,
        department_ids: Optional[Sequence[int]] = None,
    ) -> Sequence[AttendanceEvent]:
        """Punches whose date falls in [start_date, end_date], ordered by occurred_at."""

        raise NotImplementedError

    def list_records(
        self,
        tenant: TenantContext,
        *,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        kind: Optional[EventKind] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Sequence[AttendanceEvent]:
        """One page of punches, newest first."""

        raise NotImplementedError

    def count_records(
        self,
        tenant: TenantContext,
        *,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        kind: Optional[EventKind] = None,
    ) -> int:
        raise NotImplementedError

    def insert_event(self, tenant: TenantContext, event: NewEvent) -> AttendanceEvent:
        raise NotImplementedError

    def update_event(self, tenant: TenantContext, event_id: int, patch: EventPatch) -> bool:
        raise NotImplementedError

    def delete_event(self, tenant: TenantContext, event_id: int) -> bool:
        raise NotImplementedError
