from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Holiday
from .repository import HolidayRepository


def _to_holiday(r: dict) -> Holiday:
    return Holiday(
        holiday_id=int(r["holiday_id"]),
        holiday_date=r["holiday_date"],
        name=r["name"],
        description=r.get("description"),
    )


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_date(self, holiday_date: date) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT holiday_id, holiday_date, name, description FROM holidays WHERE holiday_date=%s",
                (holiday_date,),
            )
            r = fetchone(cur)
            return _to_holiday(r) if r else None

    def list_between(self, *, start_date: Optional[date] = None, end_date: Optional[date] = None) -> Sequence[Holiday]:
        clauses = ["1=1"]
        params: list[object] = []
        if start_date is not None:
            clauses.append("holiday_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("holiday_date <= %s")
            params.append(end_date)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT holiday_id, holiday_date, name, description
                FROM holidays
                WHERE {" AND ".join(clauses)}
                ORDER BY holiday_date
                """,
                tuple(params),
            )
            return [_to_holiday(r) for r in fetchall(cur)]

    def create(self, *, holiday_date: date, name: str, description: Optional[str] = None) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO holidays(holiday_date, name, description) VALUES(%s,%s,%s)",
                    (holiday_date, name, description),
                )
                return int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError(f"{holiday_date.isoformat()} is already a holiday") from e
            raise

    def delete(self, holiday_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM holidays WHERE holiday_id=%s", (int(holiday_id),))
            return cur.rowcount > 0
