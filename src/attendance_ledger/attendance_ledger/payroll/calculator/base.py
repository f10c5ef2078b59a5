from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...attendance.model import AttendanceSession
from ..model import SalarySlip


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(self, employee_id: int, year_month: str, sessions: Sequence[AttendanceSession]) -> SalarySlip:
        raise NotImplementedError
