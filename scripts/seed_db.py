from __future__ import annotations

import importlib
import sys
from datetime import date
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_ledger.attendance_ledger.common.logging import setup_logging
from src.attendance_ledger.attendance_ledger.database.bootstrap import seed_demo_data

SAMPLE_HOLIDAYS = (
    (date(date.today().year, 1, 1), "New Year's Day", "Company-wide holiday"),
    (date(date.today().year, 5, 1), "Labour Day", None),
    (date(date.today().year, 12, 25), "Christmas Day", None),
)


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    seed_demo_data(db_config, holidays=SAMPLE_HOLIDAYS)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
