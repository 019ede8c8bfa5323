from __future__ import annotations

from typing import Protocol, Sequence

from ..tenancy.model import TenantContext
from .department_model import Department


class DepartmentRepository(Protocol):
    def list_all(self, tenant: TenantContext) -> Sequence[Department]:
        raise NotImplementedError
