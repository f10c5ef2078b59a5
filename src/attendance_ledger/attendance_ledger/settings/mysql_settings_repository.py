from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import AppSettings
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    """Single-row table keyed by settings_id=1."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self) -> Optional[AppSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT company_name, primary_color FROM app_settings WHERE settings_id=1")
            r = fetchone(cur)
            if not r:
                return None
            return AppSettings(company_name=r["company_name"], primary_color=r["primary_color"])

    def save(self, settings: AppSettings) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO app_settings(settings_id, company_name, primary_color)
                VALUES(1,%s,%s)
                ON DUPLICATE KEY UPDATE company_name=VALUES(company_name), primary_color=VALUES(primary_color)
                """,
                (settings.company_name, settings.primary_color),
            )
