from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from functools import reduce
from typing import Dict, Iterable, List, Optional, Sequence

from ..core.enums import EventKind
from .model import ZERO, AttendanceEvent, WorkedTime

logger = logging.getLogger(__name__)

# start kind -> end kind
_PAIRS = {
    EventKind.CHECK_IN: EventKind.CHECK_OUT,
    EventKind.BREAK_START: EventKind.BREAK_END,
    EventKind.LUNCH_START: EventKind.LUNCH_END,
}
_START_OF = {end: start for start, end in _PAIRS.items()}


def _span(start: datetime, end: datetime) -> timedelta:
    # Clock skew or bad data must never subtract time.
    return max(end - start, ZERO)


def aggregate(events: Iterable[AttendanceEvent]) -> WorkedTime:
    """Worked and break durations of one employee's punches, in the given order.

    Callers sort by ``occurred_at`` first. An end punch without a pending start
    is ignored; a start left pending at the end contributes nothing. A second
    start while one is pending replaces the earlier one.
    """

    pending: Dict[EventKind, AttendanceEvent] = {}
    worked = ZERO
    break_time = ZERO
    first_check_in: Optional[datetime] = None
    last_check_out: Optional[datetime] = None

    for event in events:
        kind = event.kind

        if kind == EventKind.CHECK_IN and first_check_in is None:
            first_check_in = event.occurred_at
        if kind == EventKind.CHECK_OUT and (last_check_out is None or event.occurred_at > last_check_out):
            last_check_out = event.occurred_at

        if kind in _PAIRS:
            previous = pending.get(kind)
            if previous is not None:
                logger.debug(
                    "Discarding unmatched %s of employee %s at %s",
                    kind.value,
                    previous.employee_id,
                    previous.occurred_at,
                )
            pending[kind] = event
            continue

        start = pending.pop(_START_OF[kind], None)
        if start is None:
            continue

        if kind == EventKind.CHECK_OUT:
            worked += _span(start.occurred_at, event.occurred_at)
        else:
            break_time += _span(start.occurred_at, event.occurred_at)

    open_check_in = pending.get(EventKind.CHECK_IN)
    return WorkedTime(
        worked=worked,
        break_time=break_time,
        first_check_in=first_check_in,
        last_check_out=last_check_out,
        open_check_in=open_check_in.occurred_at if open_check_in else None,
    )


def group_by_day(events: Iterable[AttendanceEvent]) -> Dict[date, List[AttendanceEvent]]:
    """Events bucketed by calendar date in date order, each bucket sorted chronologically."""

    days: Dict[date, List[AttendanceEvent]] = {}
    for event in events:
        days.setdefault(event.occurred_at.date(), []).append(event)
    for bucket in days.values():
        bucket.sort(key=lambda e: e.occurred_at)
    return dict(sorted(days.items()))


def aggregate_by_day(events: Iterable[AttendanceEvent]) -> Dict[date, WorkedTime]:
    return {day: aggregate(bucket) for day, bucket in group_by_day(events).items()}


def aggregate_period(events: Sequence[AttendanceEvent]) -> WorkedTime:
    """Multi-day total: each calendar day aggregated on its own, then summed.

    Intervals never span midnight, so a check-in left open at the end of one
    day does not pair with a check-out on the next.
    """

    return reduce(lambda acc, day: acc + day, aggregate_by_day(events).values(), WorkedTime())
