from __future__ import annotations

from typing import Sequence

from ..database.connection import TenantDatabases
from ..database.mysql_base import db_cursor, fetchall
from ..tenancy.model import TenantContext
from .department_model import Department
from .department_repository import DepartmentRepository


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, databases: TenantDatabases):
        self._databases = databases

    def list_all(self, tenant: TenantContext) -> Sequence[Department]:
        with db_cursor(self._databases, tenant) as (_, cur):
            cur.execute("SELECT dept_id, dept_name FROM departments ORDER BY dept_name")
            rows = fetchall(cur)
            return [Department(dept_id=int(r["dept_id"]), dept_name=r["dept_name"]) for r in rows]
