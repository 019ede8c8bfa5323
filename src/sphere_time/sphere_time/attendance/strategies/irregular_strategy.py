from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import WorkedTime
from .base import AttendanceStrategy, StatusDecision


class IrregularStrategy(AttendanceStrategy):
    """Late arrival, early leave, or punches without any check-in."""

    def decide(self, *, worked: WorkedTime, is_late: bool, is_early_leave: bool) -> StatusDecision:
        reasons = []
        if worked.first_check_in is None:
            reasons.append("No check-in")
        if is_late:
            reasons.append("Late arrival")
        if is_early_leave:
            reasons.append("Early leave")
        return StatusDecision(status=AttendanceStatus.IRREGULAR, note=", ".join(reasons) or None)
