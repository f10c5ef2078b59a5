from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal


@dataclass(frozen=True)
class SalarySlip:
    """Flat salary record for one employee and month, ready for formatting."""

    employee_id: int
    year_month: str

    basic_pay: Decimal
    hra: Decimal
    conveyance: Decimal
    medical_allowance: Decimal
    gross_salary: Decimal

    professional_tax: Decimal
    provident_fund: Decimal
    total_deductions: Decimal
    net_salary: Decimal

    total_days: int
    total_hours: float

    def as_dict(self) -> dict:
        out = asdict(self)
        for key, value in out.items():
            if isinstance(value, Decimal):
                out[key] = str(value)
        return out
