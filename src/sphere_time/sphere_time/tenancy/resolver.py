from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Mapping, Optional

from ..core.constants import DEFAULT_TENANT, TENANT_DB_TEMPLATE, TENANT_HEADER, TENANT_QUERY_PARAM
from ..core.exceptions import ValidationError
from .model import TenantContext

logger = logging.getLogger(__name__)

_TENANT_ID_RE = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")


def _first(value) -> Optional[str]:
    # Header/query mappings may hold a single value or a list of values.
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _from_host(host: Optional[str]) -> Optional[str]:
    if not host:
        return None
    host = host.split(":", 1)[0].strip().lower()
    if not host or host == "localhost":
        return None
    parts = host.split(".")
    # empresa1.example.com -> empresa1
    if len(parts) > 2:
        return parts[0]
    return None


def _from_path(path: Optional[str]) -> Optional[str]:
    if not path:
        return None
    segments = [s for s in path.split("/") if s]
    # /api/tenant/<id>/...
    if len(segments) > 2 and segments[0] == "api" and segments[1] == "tenant":
        return segments[2]
    return None


def resolve_tenant_id(
    *,
    host: Optional[str] = None,
    headers: Optional[Mapping[str, object]] = None,
    query: Optional[Mapping[str, object]] = None,
    path: Optional[str] = None,
    default: str = DEFAULT_TENANT,
) -> str:
    """Pick the tenant for a request.

    Precedence: subdomain, ``X-Tenant-ID`` header, ``tenant`` query parameter,
    ``/api/tenant/<id>/`` path prefix, then ``default``.
    """

    tenant_id = _from_host(host)
    if not tenant_id and headers:
        tenant_id = _first(headers.get(TENANT_HEADER))
    if not tenant_id and query:
        tenant_id = _first(query.get(TENANT_QUERY_PARAM))
    if not tenant_id:
        tenant_id = _from_path(path)

    if tenant_id:
        logger.debug("Tenant resolved: %s", tenant_id)
        return tenant_id

    logger.debug("Using default tenant: %s", default)
    return default


@dataclass(frozen=True)
class TenantRegistry:
    """Maps tenant ids to their dedicated database."""

    db_template: str = TENANT_DB_TEMPLATE
    default_tenant: str = DEFAULT_TENANT

    def context_for(self, tenant_id: str) -> TenantContext:
        tenant_id = (tenant_id or "").strip().lower()
        if not _TENANT_ID_RE.match(tenant_id):
            raise ValidationError("Invalid tenant identifier")
        database = self.db_template.format(tenant=tenant_id.replace("-", "_"))
        return TenantContext(tenant_id=tenant_id, database=database)

    def resolve(
        self,
        *,
        host: Optional[str] = None,
        headers: Optional[Mapping[str, object]] = None,
        query: Optional[Mapping[str, object]] = None,
        path: Optional[str] = None,
    ) -> TenantContext:
        tenant_id = resolve_tenant_id(host=host, headers=headers, query=query, path=path, default=self.default_tenant)
        return self.context_for(tenant_id)
