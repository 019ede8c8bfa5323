from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence

from ..common.datetime_utils import now_local, start_of_week
from ..common.validators import optional_text, require_within_edit_window
from ..core.constants import DEFAULT_PAGE_SIZE, EDIT_WINDOW_FUTURE_MINUTES, EDIT_WINDOW_PAST_DAYS, MAX_PAGE_SIZE
from ..core.enums import EmployeeStatus, EventKind, Role
from ..core.exceptions import AuthorizationError, EditWindowError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..reports.calculator.base import HoursCalculator
from ..reports.calculator.standard_calculator import StandardHoursCalculator
from ..tenancy.model import TenantContext
from . import sequencer
from .aggregator import aggregate, aggregate_by_day
from .model import ZERO, AttendanceEvent, EventPatch, NewEvent, WorkedTime
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClockStatus:
    employee_id: int
    status: EmployeeStatus
    last_activity: Optional[datetime]
    last_kind: Optional[EventKind]
    can_check_in: bool
    can_check_out: bool
    can_start_break: bool
    can_end_break: bool
    can_start_lunch: bool
    can_end_lunch: bool


@dataclass(frozen=True)
class DayTimeline:
    employee_id: int
    day: date
    events: List[AttendanceEvent] = field(default_factory=list)
    worked: WorkedTime = field(default_factory=WorkedTime)


@dataclass(frozen=True)
class ClockDashboard:
    """What an employee sees on the time clock page."""

    employee_id: int
    day: date
    status: ClockStatus
    worked_today: timedelta = ZERO
    break_today: timedelta = ZERO
    worked_this_week: timedelta = ZERO
    open_since: Optional[datetime] = None


@dataclass(frozen=True)
class WeekDay:
    day: date
    first_check_in: Optional[datetime]
    last_check_out: Optional[datetime]
    worked: timedelta
    is_today: bool


@dataclass(frozen=True)
class WeekView:
    """Monday through today, one entry per day."""

    employee_id: int
    week_start: date
    week_end: date
    days: List[WeekDay] = field(default_factory=list)
    total: timedelta = ZERO

    @property
    def average_per_day(self) -> timedelta:
        return self.total / max(1, len(self.days))


@dataclass(frozen=True)
class RecordPage:
    items: List[AttendanceEvent]
    total: int
    page: int
    page_size: int

    @property
    def pages(self) -> int:
        return (self.total + self.page_size - 1) // self.page_size


class TimeClockService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        calculator: HoursCalculator | None = None,
        edit_future_minutes: int = EDIT_WINDOW_FUTURE_MINUTES,
        edit_past_days: int = EDIT_WINDOW_PAST_DAYS,
    ):
        self._attendance = attendance
        self._employees = employees
        self._calculator = calculator or StandardHoursCalculator()
        self._edit_future_minutes = int(edit_future_minutes)
        self._edit_past_days = int(edit_past_days)

    def _require_employee(self, tenant: TenantContext, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(tenant, employee_id)
        if not employee:
            raise ValidationError("Employee not found")
        if not employee.is_active:
            raise ValidationError("Employee is not active")
        return employee

    # ---------- punches ----------

    def punch(
        self,
        tenant: TenantContext,
        employee_id: int,
        kind: EventKind,
        *,
        now: datetime | None = None,
        notes: str | None = None,
        location: str | None = None,
        latitude: float | None = None,
        longitude: float | None = None,
        device_info: str | None = None,
    ) -> AttendanceEvent:
        now = now or now_local()
        self._require_employee(tenant, employee_id)

        last = self._attendance.get_last_event(tenant, employee_id)
        sequencer.validate(last, kind)

        try:
            event = self._attendance.insert_event(
                tenant,
                NewEvent(
                    employee_id=employee_id,
                    kind=kind,
                    occurred_at=now,
                    notes=optional_text(notes),
                    location=optional_text(location),
                    latitude=latitude,
                    longitude=longitude,
                    device_info=optional_text(device_info),
                ),
            )
        except Exception:
            logger.exception("Failed to store %s for employee %s (tenant %s)", kind.value, employee_id, tenant.tenant_id)
            raise

        logger.info("Employee %s %s at %s (tenant %s)", employee_id, kind.value, now.isoformat(), tenant.tenant_id)
        return event

    def check_in(self, tenant: TenantContext, employee_id: int, **kwargs) -> AttendanceEvent:
        return self.punch(tenant, employee_id, EventKind.CHECK_IN, **kwargs)

    def check_out(self, tenant: TenantContext, employee_id: int, **kwargs) -> AttendanceEvent:
        return self.punch(tenant, employee_id, EventKind.CHECK_OUT, **kwargs)

    def start_break(self, tenant: TenantContext, employee_id: int, **kwargs) -> AttendanceEvent:
        return self.punch(tenant, employee_id, EventKind.BREAK_START, **kwargs)

    def end_break(self, tenant: TenantContext, employee_id: int, **kwargs) -> AttendanceEvent:
        return self.punch(tenant, employee_id, EventKind.BREAK_END, **kwargs)

    def start_lunch(self, tenant: TenantContext, employee_id: int, **kwargs) -> AttendanceEvent:
        return self.punch(tenant, employee_id, EventKind.LUNCH_START, **kwargs)

    def end_lunch(self, tenant: TenantContext, employee_id: int, **kwargs) -> AttendanceEvent:
        return self.punch(tenant, employee_id, EventKind.LUNCH_END, **kwargs)

    # ---------- read side ----------

    def get_status(self, tenant: TenantContext, employee_id: int) -> ClockStatus:
        last = self._attendance.get_last_event(tenant, employee_id)
        allowed = sequencer.allowed_kinds(last)
        return ClockStatus(
            employee_id=employee_id,
            status=sequencer.current_status(last),
            last_activity=last.occurred_at if last else None,
            last_kind=last.kind if last else None,
            can_check_in=EventKind.CHECK_IN in allowed,
            can_check_out=EventKind.CHECK_OUT in allowed,
            can_start_break=EventKind.BREAK_START in allowed,
            can_end_break=EventKind.BREAK_END in allowed,
            can_start_lunch=EventKind.LUNCH_START in allowed,
            can_end_lunch=EventKind.LUNCH_END in allowed,
        )

    def _events(self, tenant: TenantContext, employee_id: int, start: date, end: date) -> Sequence[AttendanceEvent]:
        return self._attendance.list_events(tenant, start_date=start, end_date=end, employee_ids=[employee_id])

    def get_day(self, tenant: TenantContext, employee_id: int, day: date) -> DayTimeline:
        events = list(self._events(tenant, employee_id, day, day))
        return DayTimeline(employee_id=employee_id, day=day, events=events, worked=aggregate(events))

    def get_dashboard(self, tenant: TenantContext, employee_id: int, today: date | None = None) -> ClockDashboard:
        today = today or now_local().date()
        status = self.get_status(tenant, employee_id)

        week_events = list(self._events(tenant, employee_id, start_of_week(today), today))
        per_day = aggregate_by_day(week_events)
        today_worked = per_day.get(today, WorkedTime())

        return ClockDashboard(
            employee_id=employee_id,
            day=today,
            status=status,
            worked_today=self._calculator.net_worked(today_worked),
            break_today=today_worked.break_time,
            worked_this_week=sum((self._calculator.net_worked(w) for w in per_day.values()), ZERO),
            open_since=today_worked.open_check_in,
        )

    def get_week(self, tenant: TenantContext, employee_id: int, today: date | None = None) -> WeekView:
        today = today or now_local().date()
        monday = start_of_week(today)
        per_day = aggregate_by_day(self._events(tenant, employee_id, monday, today))

        days: List[WeekDay] = []
        total = ZERO
        for offset in range((today - monday).days + 1):
            day = monday + timedelta(days=offset)
            worked = per_day.get(day, WorkedTime())
            net = self._calculator.net_worked(worked)
            total += net
            days.append(
                WeekDay(
                    day=day,
                    first_check_in=worked.first_check_in,
                    last_check_out=worked.last_check_out,
                    worked=net,
                    is_today=day == today,
                )
            )

        return WeekView(
            employee_id=employee_id,
            week_start=monday,
            week_end=monday + timedelta(days=6),
            days=days,
            total=total,
        )

    def list_records(
        self,
        tenant: TenantContext,
        *,
        employee_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        kind: EventKind | None = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> RecordPage:
        """Admin listing of punches, newest first."""

        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise ValidationError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")
        if start_date and end_date and end_date < start_date:
            raise ValidationError("End date cannot be before start date")

        filters = dict(employee_id=employee_id, start_date=start_date, end_date=end_date, kind=kind)
        total = self._attendance.count_records(tenant, **filters)
        items = self._attendance.list_records(tenant, offset=(page - 1) * page_size, limit=page_size, **filters)
        return RecordPage(items=list(items), total=total, page=page, page_size=page_size)

    # ---------- corrections ----------

    def update_event(
        self,
        tenant: TenantContext,
        event_id: int,
        patch: EventPatch,
        *,
        now: datetime | None = None,
    ) -> AttendanceEvent:
        """Apply a correction to notes, location or time of an existing punch."""

        now = now or now_local()
        # Blank text is no change.
        patch = EventPatch(
            notes=optional_text(patch.notes),
            location=optional_text(patch.location),
            occurred_at=patch.occurred_at,
        )
        if patch.is_empty():
            raise ValidationError("Nothing to update")

        existing = self._attendance.get_by_id(tenant, event_id)
        if not existing:
            raise ValidationError("Time record not found")

        if patch.occurred_at is not None:
            require_within_edit_window(
                patch.occurred_at,
                now=now,
                future_minutes=self._edit_future_minutes,
                past_days=self._edit_past_days,
            )

        if not self._attendance.update_event(tenant, event_id, patch):
            raise ValidationError("Time record not found")

        logger.info("Time record %s updated (tenant %s)", event_id, tenant.tenant_id)
        updated = self._attendance.get_by_id(tenant, event_id)
        return updated or existing

    def record_manual_event(
        self,
        tenant: TenantContext,
        current_role: Role,
        *,
        employee_id: int,
        kind: EventKind,
        occurred_at: datetime,
        created_by: int | None = None,
        notes: str | None = None,
        location: str | None = None,
        now: datetime | None = None,
    ) -> AttendanceEvent:
        """Admin entry for a forgotten punch. Not checked against the punch chain."""

        if not current_role.is_admin:
            raise AuthorizationError("Only administrators can create manual entries")

        now = now or now_local()
        if occurred_at > now + timedelta(minutes=self._edit_future_minutes):
            raise EditWindowError("Manual entries cannot be in the future")

        self._require_employee(tenant, employee_id)

        event = self._attendance.insert_event(
            tenant,
            NewEvent(
                employee_id=employee_id,
                kind=kind,
                occurred_at=occurred_at,
                notes=optional_text(notes),
                location=optional_text(location),
                is_manual_entry=True,
                created_by=created_by,
            ),
        )
        logger.info(
            "Manual %s for employee %s at %s by %s (tenant %s)",
            kind.value,
            employee_id,
            occurred_at.isoformat(),
            created_by,
            tenant.tenant_id,
        )
        return event

    def delete_event(self, tenant: TenantContext, current_role: Role, event_id: int) -> None:
        existing = self._attendance.get_by_id(tenant, event_id)
        if not existing:
            raise ValidationError("Time record not found")

        if existing.is_manual_entry:
            if not (current_role.is_admin or current_role == Role.SUPERVISOR):
                raise AuthorizationError("Not allowed to delete this time record")
        elif not current_role.is_admin:
            raise AuthorizationError("Only administrators can delete device punches")

        if not self._attendance.delete_event(tenant, event_id):
            raise ValidationError("Time record not found")
        logger.info("Time record %s deleted (tenant %s)", event_id, tenant.tenant_id)
