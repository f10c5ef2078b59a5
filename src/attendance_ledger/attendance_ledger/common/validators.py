from __future__ import annotations

import re
from typing import Optional

from ..core.enums import DECISIONS, ApprovalStatus, LeaveCategory
from ..core.exceptions import ValidationError

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Optional[str], field_name: str = "Value") -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    v = (value or "").strip()
    return v or None


def require_hex_color(value: Optional[str], field_name: str) -> str:
    v = require_non_empty(value, field_name)
    if not _HEX_COLOR.match(v):
        raise ValidationError(f"{field_name} must look like #RRGGBB")
    return v.upper()


def require_positive_int(value, field_name: str) -> int:
    try:
        v = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if v <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return v


def require_decision(value) -> ApprovalStatus:
    """Coerce an approver's decision; only approved/rejected are decisions."""

    try:
        decision = ApprovalStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown decision {value!r}")
    if decision not in DECISIONS:
        raise ValidationError("Decision must be 'approved' or 'rejected'")
    return decision


def require_category(value) -> LeaveCategory:
    try:
        return LeaveCategory(value)
    except ValueError:
        raise ValidationError(f"Unknown leave category {value!r}")
