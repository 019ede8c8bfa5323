from __future__ import annotations

from datetime import timedelta

from ...attendance.model import ZERO, WorkedTime
from .base import HoursCalculator


class StandardHoursCalculator(HoursCalculator):
    """Standard rule: (check-in to check-out) - breaks, not below 0."""

    def net_worked(self, worked: WorkedTime) -> timedelta:
        return max(worked.worked - worked.break_time, ZERO)
