from __future__ import annotations

from datetime import date
from typing import Mapping, Optional

from ..core.enums import LeaveCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, is_duplicate_key
from .balance_repository import AccrualRepository, LeaveBalanceRepository
from .model import LeaveBalance

# Whitelisted column per category; safe to interpolate into SQL.
_COLUMN = {
    LeaveCategory.CASUAL: "casual_leaves",
    LeaveCategory.SICK: "sick_leaves",
    LeaveCategory.EARNED: "earned_leaves",
    LeaveCategory.COMPENSATORY: "compensatory_leaves",
}


class MySQLLeaveBalanceRepository(LeaveBalanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, employee_id: int) -> Optional[LeaveBalance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, casual_leaves, sick_leaves, earned_leaves, compensatory_leaves, updated_at
                FROM leave_balances
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return LeaveBalance(
                employee_id=int(r["employee_id"]),
                casual=int(r["casual_leaves"]),
                sick=int(r["sick_leaves"]),
                earned=int(r["earned_leaves"]),
                compensatory=int(r["compensatory_leaves"]),
                updated_at=r.get("updated_at"),
            )

    def create_if_missing(self, employee_id: int, allotment: Mapping[str, int]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT IGNORE INTO leave_balances
                    (employee_id, casual_leaves, sick_leaves, earned_leaves, compensatory_leaves)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    int(allotment[LeaveCategory.CASUAL.value]),
                    int(allotment[LeaveCategory.SICK.value]),
                    int(allotment[LeaveCategory.EARNED.value]),
                    int(allotment[LeaveCategory.COMPENSATORY.value]),
                ),
            )

    def adjust(self, employee_id: int, category: LeaveCategory, delta: int) -> bool:
        column = _COLUMN[LeaveCategory(category)]
        with db_cursor(self._conn_factory) as (_, cur):
            # The guard makes the non-negative check and the write one statement.
            cur.execute(
                f"""
                UPDATE leave_balances
                SET {column} = {column} + %s
                WHERE employee_id=%s AND {column} + %s >= 0
                """,
                (int(delta), int(employee_id), int(delta)),
            )
            return cur.rowcount > 0


class MySQLAccrualRepository(AccrualRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def claim(self, employee_id: int, work_date: date) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO compensatory_accruals(employee_id, work_date) VALUES(%s,%s)",
                    (int(employee_id), work_date),
                )
                return True
        except Exception as e:
            if is_duplicate_key(e):
                return False
            raise

    def release(self, employee_id: int, work_date: date) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM compensatory_accruals WHERE employee_id=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
