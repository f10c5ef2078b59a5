from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, is_duplicate_key
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, full_name, email, role, manager_id, created_at"


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        full_name=r["full_name"],
        email=r["email"],
        role=Role(r["role"]),
        manager_id=int(r["manager_id"]) if r.get("manager_id") is not None else None,
        created_at=r.get("created_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE email=%s", (email,))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def create(
        self,
        *,
        full_name: str,
        email: str,
        role: Role,
        manager_id: Optional[int] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(full_name, email, role, manager_id)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (full_name, email, role.value, manager_id),
                )
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError(f"An employee with email {email} already exists") from e
            raise

    def set_manager(self, employee_ids: Sequence[int], manager_id: Optional[int]) -> int:
        ids = [int(i) for i in employee_ids]
        if not ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE employees SET manager_id=%s WHERE employee_id IN ({in_clause(ids)})",
                (manager_id, *ids),
            )
            return int(cur.rowcount)

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY full_name")
            return [_to_employee(r) for r in fetchall(cur)]

    def list_direct_reports(self, manager_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT employee_id FROM employees WHERE manager_id=%s", (int(manager_id),))
            return [int(r["employee_id"]) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees")
            r = fetchone(cur)
            return int(r["n"]) if r else 0
