from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: This is a plain data object (no DB access code).
    """

    employee_id: int
    first_name: str
    last_name: str
    employee_code: str
    dept_id: Optional[int]
    dept_name: Optional[str] = None
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
