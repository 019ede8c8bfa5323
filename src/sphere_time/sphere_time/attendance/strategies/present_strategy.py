from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import WorkedTime
from .base import AttendanceStrategy, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """On-time check-in, normal check-out."""

    def decide(self, *, worked: WorkedTime, is_late: bool, is_early_leave: bool) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
