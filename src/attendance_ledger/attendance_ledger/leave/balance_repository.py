from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Protocol

from ..core.enums import LeaveCategory
from .model import LeaveBalance


class LeaveBalanceRepository(Protocol):
    def get(self, employee_id: int) -> Optional[LeaveBalance]:
        raise NotImplementedError

    def create_if_missing(self, employee_id: int, allotment: Mapping[str, int]) -> None:
        """Insert a row with the given counters unless one already exists."""

        raise NotImplementedError

    def adjust(self, employee_id: int, category: LeaveCategory, delta: int) -> bool:
        """Atomically add `delta` to one counter.

        Returns False (and changes nothing) if the counter would go negative.
        """

        raise NotImplementedError


class AccrualRepository(Protocol):
    """Idempotency keys for compensatory accrual, one per (employee, date)."""

    def claim(self, employee_id: int, work_date: date) -> bool:
        """Returns False if the key already exists."""

        raise NotImplementedError

    def release(self, employee_id: int, work_date: date) -> None:
        raise NotImplementedError
