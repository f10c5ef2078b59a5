from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..common.validators import require_category, require_positive_int
from ..core.constants import DEFAULT_LEAVE_ALLOTMENT
from ..core.enums import LeaveCategory
from ..core.exceptions import NotFoundError
from .balance_repository import LeaveBalanceRepository
from .model import LeaveBalance

logger = logging.getLogger(__name__)


class LeaveLedger:
    """Per-employee, per-category leave counters.

    Rows are created lazily with the default allotment. Counters never go
    below zero: `debit` refuses instead.
    """

    def __init__(self, balances: LeaveBalanceRepository, *, allotment: Optional[Mapping[str, int]] = None):
        self._balances = balances
        self._allotment = dict(allotment or DEFAULT_LEAVE_ALLOTMENT)

    def get(self, employee_id: int) -> LeaveBalance:
        balance = self._balances.get(int(employee_id))
        if balance is None:
            self._balances.create_if_missing(int(employee_id), self._allotment)
            balance = self._balances.get(int(employee_id))
            if balance is None:
                raise NotFoundError(f"Leave balance for employee {employee_id} could not be created")
        return balance

    def available_for(self, employee_id: int, category: LeaveCategory | str) -> int:
        return self.get(employee_id).available_for(require_category(category))

    def credit(self, employee_id: int, category: LeaveCategory | str, amount: int) -> LeaveBalance:
        category = require_category(category)
        amount = require_positive_int(amount, "Amount")
        self.get(employee_id)
        if not self._balances.adjust(int(employee_id), category, amount):
            raise NotFoundError(f"Leave balance for employee {employee_id} disappeared")
        logger.info("Credited %d %s day(s) to employee %s", amount, category.value, employee_id)
        return self.get(employee_id)

    def debit(self, employee_id: int, category: LeaveCategory | str, amount: int) -> bool:
        category = require_category(category)
        amount = require_positive_int(amount, "Amount")
        self.get(employee_id)
        ok = self._balances.adjust(int(employee_id), category, -amount)
        if ok:
            logger.info("Debited %d %s day(s) from employee %s", amount, category.value, employee_id)
        else:
            logger.info("Refused debit of %d %s day(s) from employee %s", amount, category.value, employee_id)
        return ok
