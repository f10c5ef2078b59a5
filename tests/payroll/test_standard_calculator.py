from datetime import datetime
from decimal import Decimal

from src.attendance_ledger.attendance_ledger.attendance.model import AttendanceSession
from src.attendance_ledger.attendance_ledger.core.enums import ApprovalStatus
from src.attendance_ledger.attendance_ledger.payroll.calculator.standard_calculator import StandardSalaryCalculator


def _session(session_id, signin, signout=None):
    return AttendanceSession(
        session_id=session_id,
        employee_id=1,
        signin_time=signin,
        signout_time=signout,
        status=ApprovalStatus.APPROVED,
    )


def test_flat_figures():
    slip = StandardSalaryCalculator().compute(1, "2026-01", [])

    assert slip.basic_pay == Decimal("25000")
    assert slip.hra == Decimal("10000")
    assert slip.gross_salary == Decimal("37850")
    assert slip.provident_fund == Decimal("3000")
    assert slip.total_deductions == Decimal("3200")
    assert slip.net_salary == Decimal("34650")
    assert slip.net_salary == slip.gross_salary - slip.professional_tax - slip.provident_fund
    assert slip.total_days == 0
    assert slip.total_hours == 0.0


def test_open_sessions_count_days_but_no_hours():
    sessions = [
        _session(1, datetime(2026, 1, 5, 9, 0), datetime(2026, 1, 5, 17, 30)),
        _session(2, datetime(2026, 1, 6, 9, 0)),
    ]

    slip = StandardSalaryCalculator().compute(1, "2026-01", sessions)

    assert slip.total_days == 2
    assert slip.total_hours == 8.5
    assert slip.gross_salary == Decimal("37850")


def test_compute_is_deterministic():
    sessions = [_session(1, datetime(2026, 1, 5, 9, 0), datetime(2026, 1, 5, 12, 0))]
    calc = StandardSalaryCalculator()

    assert calc.compute(1, "2026-01", sessions) == calc.compute(1, "2026-01", sessions)
    assert calc.compute(1, "2026-01", sessions).as_dict()["net_salary"] == "34650.00"
