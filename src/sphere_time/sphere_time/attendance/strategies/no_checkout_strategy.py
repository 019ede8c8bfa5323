from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import WorkedTime
from .base import AttendanceStrategy, StatusDecision


class NoCheckOutStrategy(AttendanceStrategy):
    """A check-in was never closed; the open interval counts zero hours."""

    def decide(self, *, worked: WorkedTime, is_late: bool, is_early_leave: bool) -> StatusDecision:
        note = None
        if worked.open_check_in is not None:
            note = f"Open check-in since {worked.open_check_in.strftime('%H:%M')}"
        return StatusDecision(status=AttendanceStatus.NO_CHECK_OUT, note=note)
