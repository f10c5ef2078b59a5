from __future__ import annotations

from ..common.validators import require_hex_color, require_non_empty
from .model import AppSettings
from .repository import SettingsRepository


class SettingsService:
    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def get(self) -> AppSettings:
        return self._settings.get() or AppSettings()

    def save(self, *, company_name: str, primary_color: str) -> AppSettings:
        settings = AppSettings(
            company_name=require_non_empty(company_name, "Company name"),
            primary_color=require_hex_color(primary_color, "Primary color"),
        )
        self._settings.save(settings)
        return settings
