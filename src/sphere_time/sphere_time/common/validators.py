from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from ..core.constants import EDIT_WINDOW_FUTURE_MINUTES, EDIT_WINDOW_PAST_DAYS
from ..core.exceptions import EditWindowError, ValidationError


def optional_text(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


def require_date_range(start: date, end: date) -> None:
    if end < start:
        raise ValidationError("End date cannot be before start date")


def require_within_edit_window(
    occurred_at: datetime,
    *,
    now: datetime,
    future_minutes: int = EDIT_WINDOW_FUTURE_MINUTES,
    past_days: int = EDIT_WINDOW_PAST_DAYS,
) -> datetime:
    if occurred_at > now + timedelta(minutes=future_minutes):
        raise EditWindowError(f"Time cannot be more than {future_minutes} minutes in the future")
    if occurred_at < now - timedelta(days=past_days):
        raise EditWindowError(f"Time cannot be more than {past_days} days in the past")
    return occurred_at
