from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from src.attendance_ledger.attendance_ledger.core.actor import Actor
from src.attendance_ledger.attendance_ledger.core.enums import Role
from src.attendance_ledger.attendance_ledger.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def _worked_day(container, staff, signin, hours, *, approve=True):
    svc = container.attendance_service
    session = svc.sign_in(staff.alice, photo_ref="p", now=signin)
    svc.sign_out(staff.alice, now=signin + timedelta(hours=hours))
    if approve:
        svc.decide(staff.manager, session_id=session.session_id, decision="approved")


def test_slip_counts_approved_sessions_of_the_month(container, staff):
    _worked_day(container, staff, datetime(2026, 1, 5, 9, 0), 8)
    _worked_day(container, staff, datetime(2026, 1, 6, 9, 0), 6)
    _worked_day(container, staff, datetime(2026, 1, 7, 9, 0), 4, approve=False)
    _worked_day(container, staff, datetime(2026, 2, 1, 9, 0), 8)

    slip = container.salary_service.monthly_slip(staff.alice, employee_id=staff.alice.employee_id, year_month="2026-01")

    assert slip.year_month == "2026-01"
    assert slip.total_days == 2
    assert slip.total_hours == pytest.approx(14.0)
    assert slip.net_salary == Decimal("34650")


def test_slip_visibility_follows_reporting_lines(container, repos, staff):
    svc = container.salary_service
    hr = repos.employees.add("Hana HR", Role.HR)

    with pytest.raises(AuthorizationError):
        svc.monthly_slip(staff.bob, employee_id=staff.alice.employee_id, year_month="2026-01")

    svc.monthly_slip(staff.manager, employee_id=staff.alice.employee_id, year_month="2026-01")
    with pytest.raises(AuthorizationError):
        svc.monthly_slip(staff.manager, employee_id=staff.carol.employee_id, year_month="2026-01")
    with pytest.raises(AuthorizationError):
        svc.monthly_slip(staff.manager, employee_id=staff.admin.employee_id, year_month="2026-01")

    svc.monthly_slip(staff.admin, employee_id=staff.carol.employee_id, year_month="2026-01")
    svc.monthly_slip(Actor(employee_id=hr.employee_id, role=Role.HR), employee_id=staff.alice.employee_id, year_month="2026-01")


def test_bad_month_or_employee(container, staff):
    svc = container.salary_service
    with pytest.raises(ValidationError):
        svc.monthly_slip(staff.admin, employee_id=staff.alice.employee_id, year_month="2026-13")
    with pytest.raises(NotFoundError):
        svc.monthly_slip(staff.admin, employee_id=999, year_month="2026-01")
