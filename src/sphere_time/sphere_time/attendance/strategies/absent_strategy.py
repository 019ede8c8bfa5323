from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import WorkedTime
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """No punches that day."""

    def decide(self, *, worked: WorkedTime, is_late: bool, is_early_leave: bool) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT)
