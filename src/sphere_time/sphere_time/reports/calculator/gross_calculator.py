from __future__ import annotations

from datetime import timedelta

from ...attendance.model import WorkedTime
from .base import HoursCalculator


class GrossHoursCalculator(HoursCalculator):
    """Breaks are reported alongside worked time, never subtracted."""

    def net_worked(self, worked: WorkedTime) -> timedelta:
        return worked.worked
