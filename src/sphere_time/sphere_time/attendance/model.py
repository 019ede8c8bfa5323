from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..core.enums import EventKind

ZERO = timedelta(0)


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one punch by one employee (table time_records)."""

    event_id: int
    employee_id: int
    kind: EventKind
    occurred_at: datetime
    notes: Optional[str] = None
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    device_info: Optional[str] = None
    is_manual_entry: bool = False
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class NewEvent:
    """Insert payload; the repository assigns id and created_at."""

    employee_id: int
    kind: EventKind
    occurred_at: datetime
    notes: Optional[str] = None
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    device_info: Optional[str] = None
    is_manual_entry: bool = False
    created_by: Optional[int] = None


@dataclass(frozen=True)
class EventPatch:
    """Correction to an existing punch. Only these fields are editable."""

    notes: Optional[str] = None
    location: Optional[str] = None
    occurred_at: Optional[datetime] = None

    def is_empty(self) -> bool:
        return self.notes is None and self.location is None and self.occurred_at is None


@dataclass(frozen=True)
class WorkedTime:
    """Worked and break durations for one employee over a scan of punches.

    ``open_check_in`` is the check-in still waiting for its check-out when the
    scan ended; it never counts toward ``worked``.
    """

    worked: timedelta = ZERO
    break_time: timedelta = ZERO
    first_check_in: Optional[datetime] = None
    last_check_out: Optional[datetime] = None
    open_check_in: Optional[datetime] = None

    def __add__(self, other: "WorkedTime") -> "WorkedTime":
        if not isinstance(other, WorkedTime):
            return NotImplemented
        return WorkedTime(
            worked=self.worked + other.worked,
            break_time=self.break_time + other.break_time,
            first_check_in=_earliest(self.first_check_in, other.first_check_in),
            last_check_out=_latest(self.last_check_out, other.last_check_out),
            open_check_in=_latest(self.open_check_in, other.open_check_in),
        )


def _earliest(a: Optional[datetime], b: Optional[datetime]) -> Optional[datetime]:
    if a is None:
        return b
    if b is None:
        return a
    return min(a, b)


def _latest(a: Optional[datetime], b: Optional[datetime]) -> Optional[datetime]:
    if a is None:
        return b
    if b is None:
        return a
    return max(a, b)
