from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator

SATURDAY = 5


def parse_hhmm(value: str) -> time:
    """Parse HH:MM string into time."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def iter_days(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def is_working_day(day: date) -> bool:
    return day.weekday() < SATURDAY


def working_days(start: date, end: date) -> list[date]:
    """Monday-Friday dates in [start, end]. No holiday calendar."""
    return [d for d in iter_days(start, end) if is_working_day(d)]


def start_of_week(day: date) -> date:
    """Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def month_range(day: date) -> tuple[date, date]:
    first = day.replace(day=1)
    next_first = (first + timedelta(days=32)).replace(day=1)
    return first, next_first - timedelta(days=1)


def to_hours(value: timedelta) -> float:
    return round(value.total_seconds() / 3600, 2)


def format_hhmm(value: timedelta) -> str:
    """Format a non-negative duration as HH:MM (hours may exceed 24)."""
    minutes = int(value.total_seconds() // 60)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
