from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import TenantDatabases
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from ..tenancy.model import TenantContext
from .model import Employee
from .repository import EmployeeRepository

_SELECT = """
    SELECT e.employee_id, e.first_name, e.last_name, e.employee_code,
           e.dept_id, d.dept_name, e.is_active
    FROM employees e
    LEFT JOIN departments d ON d.dept_id = e.dept_id
"""


def _to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        employee_code=row.get("employee_code") or "",
        dept_id=row.get("dept_id"),
        dept_name=row.get("dept_name"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, databases: TenantDatabases):
        self._databases = databases

    def get_by_id(self, tenant: TenantContext, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._databases, tenant) as (_, cur):
            cur.execute(_SELECT + " WHERE e.employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_active(
        self,
        tenant: TenantContext,
        *,
        employee_ids: Optional[Sequence[int]] = None,
        department_ids: Optional[Sequence[int]] = None,
    ) -> Sequence[Employee]:
        if employee_ids is not None and not employee_ids:
            return []
        if department_ids is not None and not department_ids:
            return []

        clauses = ["e.is_active=1"]
        params: list[object] = []
        if employee_ids:
            clause, ids = in_clause("e.employee_id", employee_ids)
            clauses.append(clause)
            params.extend(ids)
        if department_ids:
            clause, ids = in_clause("e.dept_id", department_ids)
            clauses.append(clause)
            params.extend(ids)

        with db_cursor(self._databases, tenant) as (_, cur):
            cur.execute(
                _SELECT + " WHERE " + " AND ".join(clauses) + " ORDER BY e.last_name, e.first_name",
                tuple(params),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def count_active(self, tenant: TenantContext) -> int:
        with db_cursor(self._databases, tenant) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM employees WHERE is_active=1")
            row = fetchone(cur)
            return int(row["total"]) if row else 0
