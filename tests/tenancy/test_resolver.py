import pytest

from src.sphere_time.sphere_time.core.exceptions import ValidationError
from src.sphere_time.sphere_time.tenancy.resolver import TenantRegistry, resolve_tenant_id


def test_subdomain_wins_over_everything():
    tenant_id = resolve_tenant_id(
        host="empresa1.sphere.com:443",
        headers={"X-Tenant-ID": "header"},
        query={"tenant": "query"},
        path="/api/tenant/path/reports",
    )

    assert tenant_id == "empresa1"


def test_header_then_query_then_path():
    assert resolve_tenant_id(host="sphere.com", headers={"X-Tenant-ID": "h"}, query={"tenant": "q"}) == "h"
    assert resolve_tenant_id(host="sphere.com", headers={}, query={"tenant": ["q", "r"]}) == "q"
    assert resolve_tenant_id(host="localhost:5000", path="/api/tenant/p/reports") == "p"


def test_localhost_and_blank_values_fall_back_to_default():
    assert resolve_tenant_id(host="localhost", headers={"X-Tenant-ID": "  "}, default="demo") == "demo"
    assert resolve_tenant_id(path="/api/tenant") == "demo"


def test_registry_builds_database_name():
    registry = TenantRegistry(db_template="sphere_{tenant}")

    context = registry.context_for("North-Wind")

    assert context.tenant_id == "north-wind"
    assert context.database == "sphere_north_wind"


@pytest.mark.parametrize("bad", ["", "-acme", "acme_corp", "a" * 64, "acme;drop"])
def test_registry_rejects_invalid_ids(bad):
    with pytest.raises(ValidationError):
        TenantRegistry().context_for(bad)


def test_registry_resolve_uses_its_default():
    context = TenantRegistry(default_tenant="fallback").resolve(host="localhost")

    assert context.tenant_id == "fallback"
    assert context.database == "sphere_fallback"
