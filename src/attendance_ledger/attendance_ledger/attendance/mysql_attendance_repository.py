from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

from ..core.enums import ApprovalStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, is_duplicate_key
from .model import AttendanceSession, Coordinates
from .repository import AttendanceRepository

_COLUMNS = """
    session_id, employee_id, signin_time, signin_lat, signin_lng, signin_photo_ref,
    signout_time, signout_lat, signout_lng, status, approved_by, approved_at
"""


def _coords(lat, lng) -> Optional[Coordinates]:
    if lat is None or lng is None:
        return None
    return Coordinates(latitude=float(lat), longitude=float(lng))


def _split(location: Optional[Coordinates]) -> tuple[Optional[float], Optional[float]]:
    if location is None:
        return None, None
    return location.latitude, location.longitude


def _to_session(r: dict) -> AttendanceSession:
    return AttendanceSession(
        session_id=int(r["session_id"]),
        employee_id=int(r["employee_id"]),
        signin_time=r["signin_time"],
        signin_location=_coords(r.get("signin_lat"), r.get("signin_lng")),
        signin_photo_ref=r.get("signin_photo_ref"),
        signout_time=r.get("signout_time"),
        signout_location=_coords(r.get("signout_lat"), r.get("signout_lng")),
        status=ApprovalStatus(r["status"]),
        approved_by=int(r["approved_by"]) if r.get("approved_by") is not None else None,
        approved_at=r.get("approved_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    """Open-session uniqueness is enforced by `uq_open_session` on (employee_id, open_day)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, session_id: int) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_sessions WHERE session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return _to_session(r) if r else None

    def find_open(
        self,
        employee_id: int,
        work_date: date,
        *,
        status: Optional[ApprovalStatus] = None,
    ) -> Optional[AttendanceSession]:
        clauses = ["employee_id=%s", "open_day=%s"]
        params: list[object] = [int(employee_id), work_date]
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_sessions
                WHERE {" AND ".join(clauses)}
                ORDER BY signin_time DESC
                LIMIT 1
                """,
                tuple(params),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def create(
        self,
        *,
        employee_id: int,
        signin_time: datetime,
        signin_location: Optional[Coordinates],
        signin_photo_ref: Optional[str],
        status: ApprovalStatus,
        approved_by: Optional[int] = None,
        approved_at: Optional[datetime] = None,
    ) -> int:
        lat, lng = _split(signin_location)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_sessions
                        (employee_id, signin_time, signin_lat, signin_lng, signin_photo_ref, status, approved_by, approved_at)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (int(employee_id), signin_time, lat, lng, signin_photo_ref, status.value, approved_by, approved_at),
                )
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError("There is already an open sign-in for today") from e
            raise

    def close(
        self,
        *,
        session_id: int,
        signout_time: datetime,
        signout_location: Optional[Coordinates],
        approved_by: Optional[int] = None,
    ) -> bool:
        lat, lng = _split(signout_location)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_sessions
                SET signout_time=%s, signout_lat=%s, signout_lng=%s,
                    approved_by=COALESCE(%s, approved_by)
                WHERE session_id=%s AND signout_time IS NULL
                """,
                (signout_time, lat, lng, approved_by, int(session_id)),
            )
            return cur.rowcount > 0

    def decide(
        self,
        *,
        session_id: int,
        status: ApprovalStatus,
        approved_by: int,
        approved_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_sessions
                SET status=%s, approved_by=%s, approved_at=%s
                WHERE session_id=%s AND status=%s
                """,
                (status.value, int(approved_by), approved_at, int(session_id), ApprovalStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def list_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_sessions
                WHERE employee_id=%s
                ORDER BY signin_time DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def _list_newest(
        self,
        clauses: list[str],
        params: list[object],
        employee_ids: Optional[Iterable[int]],
        limit: int,
    ) -> Sequence[AttendanceSession]:
        if employee_ids is not None:
            ids = [int(i) for i in employee_ids]
            if not ids:
                return []
            clauses = [*clauses, f"employee_id IN ({in_clause(ids)})"]
            params = [*params, *ids]
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_sessions
                {where}
                ORDER BY signin_time DESC
                LIMIT %s
                """,
                (*params, int(limit)),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def list_by_status(
        self,
        status: ApprovalStatus,
        *,
        employee_ids: Optional[Iterable[int]] = None,
        limit: int = 500,
    ) -> Sequence[AttendanceSession]:
        return self._list_newest(["status=%s"], [status.value], employee_ids, limit)

    def list_recent(
        self,
        *,
        employee_ids: Optional[Iterable[int]] = None,
        limit: int = 100,
    ) -> Sequence[AttendanceSession]:
        return self._list_newest([], [], employee_ids, limit)

    def list_for_range(
        self,
        *,
        employee_id: int,
        start_date: date,
        end_date: date,
        status: Optional[ApprovalStatus] = None,
    ) -> Sequence[AttendanceSession]:
        start = datetime.combine(start_date, datetime.min.time())
        end = datetime.combine(end_date + timedelta(days=1), datetime.min.time())
        clauses = ["employee_id=%s", "signin_time >= %s", "signin_time < %s"]
        params: list[object] = [int(employee_id), start, end]
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_sessions
                WHERE {" AND ".join(clauses)}
                ORDER BY signin_time ASC
                """,
                tuple(params),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def count_by_status(self, status: ApprovalStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM attendance_sessions WHERE status=%s", (status.value,))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def count_open_on(self, work_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM attendance_sessions WHERE open_day=%s", (work_date,))
            r = fetchone(cur)
            return int(r["n"]) if r else 0
