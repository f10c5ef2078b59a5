from __future__ import annotations

import logging
from datetime import date

from ..core.constants import COMPENSATORY_DAYS_PER_HOLIDAY
from ..core.enums import LeaveCategory
from ..holidays.repository import HolidayRepository
from .balance_repository import AccrualRepository
from .ledger import LeaveLedger

logger = logging.getLogger(__name__)


class CompensatoryAccrualRule:
    """Credit a compensatory leave day for working on a company holiday.

    Each (employee, date) pair accrues at most once, however many times the
    rule runs for it.
    """

    def __init__(self, holidays: HolidayRepository, ledger: LeaveLedger, accruals: AccrualRepository):
        self._holidays = holidays
        self._ledger = ledger
        self._accruals = accruals

    def apply(self, employee_id: int, work_date: date) -> bool:
        holiday = self._holidays.get_by_date(work_date)
        if holiday is None:
            return False

        if not self._accruals.claim(int(employee_id), work_date):
            logger.info("Compensatory day for employee %s on %s already credited", employee_id, work_date)
            return False

        try:
            self._ledger.credit(employee_id, LeaveCategory.COMPENSATORY, COMPENSATORY_DAYS_PER_HOLIDAY)
        except Exception:
            # Let a later run retry this date.
            self._accruals.release(int(employee_id), work_date)
            raise

        logger.info("Credited compensatory day to employee %s for holiday %s (%s)", employee_id, holiday.name, work_date)
        return True
