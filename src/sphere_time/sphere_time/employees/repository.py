from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..tenancy.model import TenantContext
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, tenant: TenantContext, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_active(
        self,
        tenant: TenantContext,
        *,
        employee_ids: Optional[Sequence[int]] = None,
        department_ids: Optional[Sequence[int]] = None,
    ) -> Sequence[Employee]:
        raise NotImplementedError

    def count_active(self, tenant: TenantContext) -> int:
        raise NotImplementedError
