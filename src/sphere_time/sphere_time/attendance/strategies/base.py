from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus
from ..model import WorkedTime


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an employee-day status."""

    @abstractmethod
    def decide(self, *, worked: WorkedTime, is_late: bool, is_early_leave: bool) -> StatusDecision:
        raise NotImplementedError
