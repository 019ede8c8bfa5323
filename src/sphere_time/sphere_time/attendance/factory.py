from __future__ import annotations

from dataclasses import dataclass

from .model import WorkedTime
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.irregular_strategy import IrregularStrategy
from .strategies.no_checkout_strategy import NoCheckOutStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStatusFactory:
    """Factory Pattern: choose the status strategy for one employee-day.

    Order matters: an unclosed check-in wins over lateness.
    """

    def for_day(self, *, has_events: bool, worked: WorkedTime, is_late: bool, is_early_leave: bool) -> AttendanceStrategy:
        if not has_events:
            return AbsentStrategy()
        if worked.open_check_in is not None:
            return NoCheckOutStrategy()
        if worked.first_check_in is None or is_late or is_early_leave:
            return IrregularStrategy()
        return PresentStrategy()
