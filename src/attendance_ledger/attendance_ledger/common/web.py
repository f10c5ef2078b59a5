"""Helpers shared by the Flask controllers.

Identity comes from the upstream auth proxy as `X-Actor-Id` / `X-Actor-Role`
headers and is trusted as-is.
"""

from __future__ import annotations

import logging
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from functools import wraps
from typing import Any, Optional

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from ..attendance.model import Coordinates
from ..core.actor import Actor
from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    DomainError,
    InsufficientBalanceError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ACTOR_ID_HEADER = "X-Actor-Id"
ACTOR_ROLE_HEADER = "X-Actor-Role"

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (InsufficientBalanceError, 422),
)


def actor_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            g.actor = Actor(
                employee_id=int(request.headers.get(ACTOR_ID_HEADER, "")),
                role=Role(request.headers.get(ACTOR_ROLE_HEADER, "")),
            )
        except ValueError:
            return jsonify({"success": False, "message": "Missing or invalid identity headers"}), 401
        return view(*args, **kwargs)

    return wrapper


def current_actor() -> Actor:
    return g.actor


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def parse_location(data: dict) -> Optional[Coordinates]:
    lat = data.get("latitude")
    lng = data.get("longitude")
    if lat is None or lng is None:
        return None
    try:
        return Coordinates(latitude=float(lat), longitude=float(lng))
    except (TypeError, ValueError):
        raise ValidationError("latitude/longitude must be numbers")


def to_json(value: Any) -> Any:
    """Entities (via `as_dict` where defined), enums, dates and Decimals into plain JSON values."""

    if callable(getattr(value, "as_dict", None)):
        return to_json(value.as_dict())
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_json(v) for v in value]
    return value


def ok(data: Any = None, *, status: int = 200, message: Optional[str] = None):
    body = {"success": True, "data": to_json(data)}
    if message:
        body["message"] = message
    return jsonify(body), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(e, cls)), 400)
        return jsonify({"success": False, "error": type(e).__name__, "message": str(e)}), status

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"success": False, "message": e.description}), e.code
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"success": False, "message": "Internal server error"}), 500
