from __future__ import annotations

from typing import Optional

from ..attendance.service import AttendanceService
from ..common.datetime_utils import parse_year_month
from ..core.actor import Actor
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..employees.service import EmployeeService
from .calculator.base import SalaryCalculator
from .calculator.standard_calculator import StandardSalaryCalculator
from .model import SalarySlip


class SalaryService:
    def __init__(
        self,
        attendance: AttendanceService,
        employees: EmployeeService,
        *,
        calculator: Optional[SalaryCalculator] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._calculator = calculator or StandardSalaryCalculator()

    def _check_can_view(self, actor: Actor, employee_id: int) -> None:
        if actor.employee_id == employee_id or actor.role in (Role.ADMIN, Role.HR):
            return
        if actor.role == Role.MANAGER:
            if employee_id not in self._employees.subordinate_ids(actor.employee_id):
                raise AuthorizationError(f"Employee {employee_id} does not report to you")
            return
        raise AuthorizationError("You can only view your own salary slip")

    def monthly_slip(self, actor: Actor, *, employee_id: int, year_month: str) -> SalarySlip:
        """Salary for one calendar month, computed from approved sessions only."""

        self._check_can_view(actor, int(employee_id))

        year, month = parse_year_month(year_month)
        self._employees.get(employee_id)

        sessions = self._attendance.approved_for_month(int(employee_id), year, month)
        return self._calculator.compute(int(employee_id), f"{year:04d}-{month:02d}", sessions)
