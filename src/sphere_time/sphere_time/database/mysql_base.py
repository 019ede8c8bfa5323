from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

from ..tenancy.model import TenantContext
from .connection import TenantDatabases


@contextmanager
def db_cursor(databases: TenantDatabases, tenant: TenantContext, *, dictionary: bool = True):
    conn = databases.connect(tenant)
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(column: str, values: Sequence[int]) -> tuple[str, list[int]]:
    """Build ``column IN (%s, ...)`` with its parameters."""

    ids = [int(v) for v in values]
    placeholders = ", ".join(["%s"] * len(ids))
    return f"{column} IN ({placeholders})", ids
