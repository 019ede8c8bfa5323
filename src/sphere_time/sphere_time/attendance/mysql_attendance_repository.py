from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..core.enums import EventKind
from ..database.connection import TenantDatabases
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from ..tenancy.model import TenantContext
from .model import AttendanceEvent, EventPatch, NewEvent
from .repository import AttendanceRepository

_COLUMNS = """
    tr.record_id, tr.employee_id, tr.record_type, tr.occurred_at, tr.notes, tr.location,
    tr.latitude, tr.longitude, tr.device_info, tr.is_manual_entry, tr.created_by, tr.created_at
"""


def _to_event(r: Dict[str, Any]) -> AttendanceEvent:
    return AttendanceEvent(
        event_id=int(r["record_id"]),
        employee_id=int(r["employee_id"]),
        kind=EventKind(r["record_type"]),
        occurred_at=r["occurred_at"],
        notes=r.get("notes"),
        location=r.get("location"),
        latitude=float(r["latitude"]) if r.get("latitude") is not None else None,
        longitude=float(r["longitude"]) if r.get("longitude") is not None else None,
        device_info=r.get("device_info"),
        is_manual_entry=bool(r.get("is_manual_entry")),
        created_by=r.get("created_by"),
        created_at=r.get("created_at"),
    )


def _record_filters(
    employee_id: Optional[int],
    start_date: Optional[date],
    end_date: Optional[date],
    kind: Optional[EventKind],
) -> Tuple[str, List[object]]:
    clauses = ["1=1"]
    params: List[object] = []
    if employee_id is not None:
        clauses.append("tr.employee_id=%s")
        params.append(int(employee_id))
    if start_date is not None:
        clauses.append("tr.occurred_at >= %s")
        params.append(datetime.combine(start_date, datetime.min.time()))
    if end_date is not None:
        clauses.append("tr.occurred_at < %s")
        params.append(datetime.combine(end_date + timedelta(days=1), datetime.min.time()))
    if kind is not None:
        clauses.append("tr.record_type=%s")
        params.append(kind.value)
    return " AND ".join(clauses), params


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, databases: TenantDatabases):
        self._databases = databases

    def get_last_event(self, tenant: TenantContext, employee_id: int) -> Optional[AttendanceEvent]:
        with db_cursor(self._databases, tenant) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_records tr
                WHERE tr.employee_id=%s
                ORDER BY tr.occurred_at DESC, tr.record_id DESC
                LIMIT 1
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _to_event(r) if r else None

    def get_by_id(self, tenant: TenantContext, event_id: int) -> Optional[AttendanceEvent]:
        with db_cursor(self._databases, tenant) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM time_records tr WHERE tr.record_id=%s", (int(event_id),))
            r = fetchone(cur)
            return _to_event(r) if r else None

    def list_events(
        self,
        tenant: TenantContext,
        *,
        start_date: date,
        end_date: date,
        employee_ids: Optional[Sequence[int]] = None,
        department_ids: Optional[Sequence[int]] = None,
    ) -> Sequence[AttendanceEvent]:
        if employee_ids is not None and not employee_ids:
            return []
        if department_ids is not None and not department_ids:
            return []

        # Half-open range on the DATETIME column keeps the index usable.
        clauses = ["tr.occurred_at >= %s", "tr.occurred_at < %s"]
        params: list[object] = [
            datetime.combine(start_date, datetime.min.time()),
            datetime.combine(end_date + timedelta(days=1), datetime.min.time()),
        ]

        if employee_ids:
            clause, ids = in_clause("tr.employee_id", employee_ids)
            clauses.append(clause)
            params.extend(ids)
        if department_ids:
            clause, ids = in_clause("e.dept_id", department_ids)
            clauses.append(clause)
            params.extend(ids)

        where = " AND ".join(clauses)

        with db_cursor(self._databases, tenant) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_records tr
                JOIN employees e ON e.employee_id = tr.employee_id
                WHERE {where}
                ORDER BY tr.occurred_at ASC, tr.record_id ASC
                """,
                tuple(params),
            )
            return [_to_event(r) for r in fetchall(cur)]

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
        where, params = _record_filters(employee_id, start_date, end_date, kind)
        params.extend([int(limit), int(offset)])

        with db_cursor(self._databases, tenant) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_records tr
                WHERE {where}
                ORDER BY tr.occurred_at DESC, tr.record_id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def count_records(
        self,
        tenant: TenantContext,
        *,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        kind: Optional[EventKind] = None,
    ) -> int:
        where, params = _record_filters(employee_id, start_date, end_date, kind)

        with db_cursor(self._databases, tenant) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM time_records tr WHERE {where}", tuple(params))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def insert_event(self, tenant: TenantContext, event: NewEvent) -> AttendanceEvent:
        created_at = datetime.now()
        with db_cursor(self._databases, tenant) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_records(
                    employee_id, record_type, occurred_at, notes, location, latitude, longitude,
                    device_info, is_manual_entry, created_by, created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(event.employee_id),
                    event.kind.value,
                    event.occurred_at,
                    event.notes,
                    event.location,
                    event.latitude,
                    event.longitude,
                    event.device_info,
                    int(event.is_manual_entry),
                    event.created_by,
                    created_at,
                    created_at,
                ),
            )
            event_id = int(cur.lastrowid)

        return AttendanceEvent(
            event_id=event_id,
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
            created_at=created_at,
        )

    def update_event(self, tenant: TenantContext, event_id: int, patch: EventPatch) -> bool:
        sets: list[str] = []
        params: list[object] = []
        if patch.notes is not None:
            sets.append("notes=%s")
            params.append(patch.notes)
        if patch.location is not None:
            sets.append("location=%s")
            params.append(patch.location)
        if patch.occurred_at is not None:
            sets.append("occurred_at=%s")
            params.append(patch.occurred_at)
        if not sets:
            return False

        sets.append("updated_at=%s")
        params.append(datetime.now())
        params.append(int(event_id))

        with db_cursor(self._databases, tenant) as (_, cur):
            cur.execute(f"UPDATE time_records SET {', '.join(sets)} WHERE record_id=%s", tuple(params))
            return cur.rowcount > 0

    def delete_event(self, tenant: TenantContext, event_id: int) -> bool:
        with db_cursor(self._databases, tenant) as (_, cur):
            cur.execute("DELETE FROM time_records WHERE record_id=%s", (int(event_id),))
            return cur.rowcount > 0
