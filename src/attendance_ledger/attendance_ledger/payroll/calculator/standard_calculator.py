from __future__ import annotations

from typing import Sequence

from ...attendance.model import AttendanceSession
from ...core.constants import (
    BASIC_PAY,
    CONVEYANCE_ALLOWANCE,
    HRA_RATE,
    MEDICAL_ALLOWANCE,
    PROFESSIONAL_TAX,
    PROVIDENT_FUND_RATE,
)
from ..model import SalarySlip
from .base import SalaryCalculator


class StandardSalaryCalculator(SalaryCalculator):
    """Standard rule: flat earnings and deductions; attendance is reported, not paid pro rata.

    Sessions without a sign-out still count as a day but add no hours.
    """

    def compute(self, employee_id: int, year_month: str, sessions: Sequence[AttendanceSession]) -> SalarySlip:
        basic = BASIC_PAY
        hra = basic * HRA_RATE
        gross = basic + hra + CONVEYANCE_ALLOWANCE + MEDICAL_ALLOWANCE

        provident_fund = basic * PROVIDENT_FUND_RATE
        deductions = PROFESSIONAL_TAX + provident_fund

        return SalarySlip(
            employee_id=int(employee_id),
            year_month=year_month,
            basic_pay=basic,
            hra=hra,
            conveyance=CONVEYANCE_ALLOWANCE,
            medical_allowance=MEDICAL_ALLOWANCE,
            gross_salary=gross,
            professional_tax=PROFESSIONAL_TAX,
            provident_fund=provident_fund,
            total_deductions=deductions,
            net_salary=gross - deductions,
            total_days=len(sessions),
            total_hours=sum((s.worked_hours for s in sessions), 0.0),
        )
