from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..core.enums import ApprovalStatus, LeaveCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import LeaveRequest
from .request_repository import LeaveRequestRepository

_COLUMNS = """
    request_id, employee_id, leave_type, start_date, end_date, reason, document_ref,
    status, approved_by, approved_at, applied_at
"""


def _to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        category=LeaveCategory(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        document_ref=r.get("document_ref"),
        status=ApprovalStatus(r["status"]),
        approved_by=int(r["approved_by"]) if r.get("approved_by") is not None else None,
        approved_at=r.get("approved_at"),
        applied_at=r["applied_at"],
    )


class MySQLLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        category: LeaveCategory,
        start_date: date,
        end_date: date,
        reason: str,
        document_ref: Optional[str],
        applied_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(employee_id, leave_type, start_date, end_date, reason, document_ref, status, applied_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    category.value,
                    start_date,
                    end_date,
                    reason,
                    document_ref,
                    ApprovalStatus.PENDING.value,
                    applied_at,
                ),
            )
            return int(cur.lastrowid)

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_for_employee(self, employee_id: int, *, limit: int = 200) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM leave_requests
                WHERE employee_id=%s
                ORDER BY applied_at DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def list_by_status(
        self,
        status: ApprovalStatus,
        *,
        employee_ids: Optional[Iterable[int]] = None,
        limit: int = 500,
    ) -> Sequence[LeaveRequest]:
        clauses = ["status=%s"]
        params: list[object] = [status.value]
        if employee_ids is not None:
            ids = [int(i) for i in employee_ids]
            if not ids:
                return []
            clauses.append(f"employee_id IN ({in_clause(ids)})")
            params.extend(ids)
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM leave_requests
                WHERE {" AND ".join(clauses)}
                ORDER BY applied_at DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: int,
        status: ApprovalStatus,
        approved_by: int,
        approved_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, approved_by=%s, approved_at=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, int(approved_by), approved_at, int(request_id), ApprovalStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def count_by_status(self, status: ApprovalStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM leave_requests WHERE status=%s", (status.value,))
            r = fetchone(cur)
            return int(r["n"]) if r else 0
