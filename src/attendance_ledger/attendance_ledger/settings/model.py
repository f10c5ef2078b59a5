from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_COMPANY_NAME, DEFAULT_PRIMARY_COLOR


@dataclass(frozen=True)
class AppSettings:
    """Display-only branding. Nothing in the engine reads these values."""

    company_name: str = DEFAULT_COMPANY_NAME
    primary_color: str = DEFAULT_PRIMARY_COLOR
