from __future__ import annotations

import logging
from datetime import MAXYEAR, date
from typing import Optional, Sequence

from ..common.validators import optional_text, require_non_empty, require_positive_int
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import Holiday
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


class HolidayService:
    """Company holiday calendar. Admin permission is checked by the caller."""

    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def list(self, *, year: Optional[int] = None) -> Sequence[Holiday]:
        if year is None:
            return self._holidays.list_between()
        year = require_positive_int(year, "year")
        if year > MAXYEAR:
            raise ValidationError(f"year must be at most {MAXYEAR}")
        return self._holidays.list_between(start_date=date(year, 1, 1), end_date=date(year, 12, 31))

    def is_holiday(self, day: date) -> bool:
        return self._holidays.get_by_date(day) is not None

    def add(self, *, holiday_date: date, name: str, description: Optional[str] = None) -> Holiday:
        name = require_non_empty(name, "Holiday name")
        if self._holidays.get_by_date(holiday_date):
            raise ConflictError(f"{holiday_date.isoformat()} is already a holiday")

        description = optional_text(description, "Description")
        holiday_id = self._holidays.create(holiday_date=holiday_date, name=name, description=description)
        logger.info("Added holiday %s on %s", name, holiday_date.isoformat())
        return Holiday(holiday_id=holiday_id, holiday_date=holiday_date, name=name, description=description)

    def remove(self, holiday_id: int) -> None:
        if not self._holidays.delete(int(holiday_id)):
            raise NotFoundError(f"Holiday {holiday_id} does not exist")
        logger.info("Removed holiday %s", holiday_id)
