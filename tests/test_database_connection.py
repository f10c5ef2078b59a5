from __future__ import annotations

import mysql.connector

from src.attendance_ledger.attendance_ledger.database import bootstrap
from src.attendance_ledger.attendance_ledger.database.connection import DBConfig, DatabaseConnection


def _capture_connect(monkeypatch):
    calls = []

    def fake_connect(**kwargs):
        calls.append(kwargs)
        return object()

    monkeypatch.setattr(mysql.connector, "connect", fake_connect)
    return calls


def test_connect_selects_configured_database(monkeypatch):
    calls = _capture_connect(monkeypatch)
    config = DBConfig.from_dict({"host": "db", "user": "app", "password": "pw"})

    DatabaseConnection(config).connect()

    assert calls == [
        {"host": "db", "port": 3306, "user": "app", "password": "pw", "use_pure": True, "database": "attendance_ledger"}
    ]


def test_bootstrap_can_connect_without_database(monkeypatch):
    calls = _capture_connect(monkeypatch)

    bootstrap._connect(DBConfig.from_dict({"database": "hr"}), with_database=False)

    assert "database" not in calls[0]
