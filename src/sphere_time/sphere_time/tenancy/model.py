from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TenantContext:
    """Request-scoped tenant: one customer organization and its database.

    Passed explicitly into every service and repository call.
    """

    tenant_id: str
    database: str
