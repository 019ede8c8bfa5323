from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta

from ...attendance.model import WorkedTime


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for payable hours)."""

    @abstractmethod
    def net_worked(self, worked: WorkedTime) -> timedelta:
        raise NotImplementedError
