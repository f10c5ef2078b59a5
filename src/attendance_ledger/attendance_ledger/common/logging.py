"""Logging setup shared by the web app and scripts."""

from __future__ import annotations

import logging
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

_handler: Optional[logging.Handler] = None


def setup_logging(level: str = "INFO", *, json: bool = False) -> None:
    global _handler

    root = logging.getLogger()
    if _handler is not None:
        # Repeated app factories (tests, reloader) must not stack handlers.
        root.removeHandler(_handler)

    handler = logging.StreamHandler()
    if json:
        handler.setFormatter(JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))

    root.addHandler(handler)
    root.setLevel(level.upper())
    _handler = handler

    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("mysql.connector").setLevel(logging.WARNING)
