"""Punch sequencing rules.

An employee's punches form one chain::

    CHECKED_OUT --CHECK_IN--> CHECKED_IN --BREAK_START--> ON_BREAK --BREAK_END--> CHECKED_IN
                              CHECKED_IN --LUNCH_START--> ON_LUNCH --LUNCH_END--> CHECKED_IN
                              CHECKED_IN --CHECK_OUT--> CHECKED_OUT

The state is always recomputed from the last persisted punch; nothing is held
between calls. A check-in is refused while any check-in is still open, even
one from a previous day.
"""

from __future__ import annotations

from typing import Optional

from ..core.enums import EmployeeStatus, EventKind
from ..core.exceptions import (
    AlreadyCheckedInError,
    NoOpenBreakError,
    NotCheckedInError,
    NotWorkingError,
    PunchSequenceError,
)
from .model import AttendanceEvent

WORKING_KINDS = frozenset({EventKind.CHECK_IN, EventKind.BREAK_END, EventKind.LUNCH_END})

_STATUS_AFTER = {
    EventKind.CHECK_IN: EmployeeStatus.CHECKED_IN,
    EventKind.BREAK_END: EmployeeStatus.CHECKED_IN,
    EventKind.LUNCH_END: EmployeeStatus.CHECKED_IN,
    EventKind.BREAK_START: EmployeeStatus.ON_BREAK,
    EventKind.LUNCH_START: EmployeeStatus.ON_LUNCH,
    EventKind.CHECK_OUT: EmployeeStatus.CHECKED_OUT,
}


def current_status(last_event: Optional[AttendanceEvent]) -> EmployeeStatus:
    if last_event is None:
        return EmployeeStatus.CHECKED_OUT
    return _STATUS_AFTER[last_event.kind]


def validate(last_event: Optional[AttendanceEvent], proposed: EventKind) -> None:
    """Raise a PunchSequenceError if ``proposed`` cannot follow ``last_event``."""

    last = last_event.kind if last_event is not None else None

    if proposed == EventKind.CHECK_IN:
        if last is not None and last != EventKind.CHECK_OUT:
            raise AlreadyCheckedInError("Already checked in. Check out first.")
        return

    if proposed == EventKind.CHECK_OUT:
        if last not in WORKING_KINDS:
            if last in (EventKind.BREAK_START, EventKind.LUNCH_START):
                raise NotCheckedInError("End the current break before checking out.")
            raise NotCheckedInError("Not checked in.")
        return

    if proposed in (EventKind.BREAK_START, EventKind.LUNCH_START):
        if last not in WORKING_KINDS:
            raise NotWorkingError("You must be working to start a break.")
        return

    if proposed == EventKind.BREAK_END:
        if last != EventKind.BREAK_START:
            raise NoOpenBreakError("No break in progress.")
        return

    if proposed == EventKind.LUNCH_END:
        if last != EventKind.LUNCH_START:
            raise NoOpenBreakError("No lunch break in progress.")
        return

    raise PunchSequenceError(f"Unknown punch type: {proposed!r}")


def is_admissible(last_event: Optional[AttendanceEvent], proposed: EventKind) -> bool:
    try:
        validate(last_event, proposed)
    except PunchSequenceError:
        return False
    return True


def allowed_kinds(last_event: Optional[AttendanceEvent]) -> frozenset[EventKind]:
    return frozenset(k for k in EventKind if is_admissible(last_event, k))
