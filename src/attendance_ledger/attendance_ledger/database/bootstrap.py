from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import Iterable

from ..core.constants import DEFAULT_COMPANY_NAME, DEFAULT_PRIMARY_COLOR
from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes, skips -- comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    lines = [line for line in sql.splitlines() if not line.lstrip().startswith("--")]
    for ch in "\n".join(lines):
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    return DatabaseConnection(target).connect(with_database=with_database)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    target = DBConfig.from_dict(db_config)
    ensure_database_exists(db_config)

    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied to %s@%s:%s/%s", target.user, target.host, target.port, target.database)


def seed_demo_data(db_config: dict, *, holidays: Iterable[tuple[date, str, str]] = ()) -> None:
    """Idempotently insert a demo admin, manager, employee and some holidays."""

    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)

        def upsert_employee(full_name: str, email: str, role: str, manager_email: str | None = None) -> None:
            manager_id = None
            if manager_email:
                cur.execute("SELECT employee_id FROM employees WHERE email=%s", (manager_email,))
                row = cur.fetchone()
                manager_id = int(row["employee_id"]) if row else None
            cur.execute(
                """
                INSERT INTO employees(full_name, email, role, manager_id)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE full_name=VALUES(full_name), role=VALUES(role), manager_id=VALUES(manager_id)
                """,
                (full_name, email, role, manager_id),
            )

        upsert_employee("Admin Demo", "admin@example.com", "admin")
        upsert_employee("Manager Demo", "manager@example.com", "manager", "admin@example.com")
        upsert_employee("Employee Demo", "employee@example.com", "employee", "manager@example.com")

        for holiday_date, name, description in holidays:
            cur.execute(
                "INSERT IGNORE INTO holidays(holiday_date, name, description) VALUES(%s,%s,%s)",
                (holiday_date, name, description),
            )

        cur.execute(
            "INSERT IGNORE INTO app_settings(settings_id, company_name, primary_color) VALUES(1,%s,%s)",
            (DEFAULT_COMPANY_NAME, DEFAULT_PRIMARY_COLOR),
        )
        conn.commit()
    finally:
        conn.close()
    logger.info("Demo data seeded into %s", target.database)


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
