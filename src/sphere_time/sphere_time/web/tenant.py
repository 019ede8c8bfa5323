from __future__ import annotations

from flask import Flask, g, request

from ..tenancy.model import TenantContext
from ..tenancy.resolver import TenantRegistry


def install_tenant_resolution(app: Flask, registry: TenantRegistry) -> None:
    """Resolve the tenant of every request into ``g.tenant``."""

    @app.before_request
    def _resolve_tenant():
        g.tenant = registry.resolve(
            host=request.host,
            headers=request.headers,
            query=request.args,
            path=request.path,
        )


def current_tenant() -> TenantContext:
    return g.tenant
