from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from src.attendance_ledger.attendance_ledger.attendance.model import Coordinates
from src.attendance_ledger.attendance_ledger.core.enums import ApprovalStatus, LeaveCategory
from src.attendance_ledger.attendance_ledger.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


def test_sign_in_creates_pending_session(container, staff, fixed_now):
    loc = Coordinates(latitude=10.76, longitude=106.66)
    session = container.attendance_service.sign_in(staff.alice, photo_ref="photos/a.jpg", location=loc, now=fixed_now)

    assert session.status == ApprovalStatus.PENDING
    assert session.employee_id == staff.alice.employee_id
    assert session.signin_time == fixed_now
    assert session.signin_location == loc
    assert session.is_open
    assert session.worked_hours == 0.0


def test_sign_in_requires_photo(container, staff, fixed_now):
    with pytest.raises(ValidationError):
        container.attendance_service.sign_in(staff.alice, photo_ref="  ", now=fixed_now)


def test_second_sign_in_same_day_conflicts(container, repos, staff, fixed_now):
    container.attendance_service.sign_in(staff.alice, photo_ref="p1", now=fixed_now)

    with pytest.raises(ConflictError):
        container.attendance_service.sign_in(staff.alice, photo_ref="p2", now=fixed_now + timedelta(hours=1))

    assert len(repos.attendance.rows) == 1


def test_sign_in_again_after_sign_out(container, repos, staff, fixed_now):
    svc = container.attendance_service
    svc.sign_in(staff.alice, photo_ref="p1", now=fixed_now)
    svc.sign_out(staff.alice, now=fixed_now + timedelta(hours=4))
    svc.sign_in(staff.alice, photo_ref="p2", now=fixed_now + timedelta(hours=5))

    assert len(repos.attendance.rows) == 2
    assert repos.attendance.count_open_on(fixed_now.date()) == 1


def test_sign_out_closes_open_session(container, staff, fixed_now):
    svc = container.attendance_service
    svc.sign_in(staff.alice, photo_ref="p1", now=fixed_now)
    closed = svc.sign_out(staff.alice, now=fixed_now + timedelta(hours=8, minutes=30))

    assert not closed.is_open
    assert closed.worked_hours == pytest.approx(8.5)
    assert svc.today_session(staff.alice.employee_id, fixed_now.date()) is None


def test_sign_out_without_sign_in(container, staff, fixed_now):
    with pytest.raises(NotFoundError):
        container.attendance_service.sign_out(staff.alice, now=fixed_now)


def test_decide_is_idempotent_and_rejects_reversal(container, staff, fixed_now):
    svc = container.attendance_service
    session = svc.sign_in(staff.alice, photo_ref="p1", now=fixed_now)

    approved = svc.decide(staff.manager, session_id=session.session_id, decision="approved", now=fixed_now)
    assert approved.status == ApprovalStatus.APPROVED
    assert approved.approved_by == staff.manager.employee_id
    assert approved.approved_at == fixed_now

    again = svc.decide(staff.admin, session_id=session.session_id, decision="approved")
    assert again.approved_by == staff.manager.employee_id

    with pytest.raises(ConflictError):
        svc.decide(staff.manager, session_id=session.session_id, decision="rejected")


def test_decide_requires_approver_and_real_decision(container, staff, fixed_now):
    svc = container.attendance_service
    session = svc.sign_in(staff.alice, photo_ref="p1", now=fixed_now)

    with pytest.raises(AuthorizationError):
        svc.decide(staff.bob, session_id=session.session_id, decision="approved")
    with pytest.raises(ValidationError):
        svc.decide(staff.manager, session_id=session.session_id, decision="pending")
    with pytest.raises(NotFoundError):
        svc.decide(staff.manager, session_id=999, decision="approved")


def test_on_behalf_sign_in_and_out(container, staff, fixed_now):
    svc = container.attendance_service
    opened = svc.create_on_behalf(staff.manager, employee_id=staff.alice.employee_id, action="signin", now=fixed_now)

    assert opened.status == ApprovalStatus.APPROVED
    assert opened.approved_by == staff.manager.employee_id
    assert opened.signin_photo_ref is None

    closed = svc.create_on_behalf(
        staff.manager,
        employee_id=staff.alice.employee_id,
        action="signout",
        now=fixed_now + timedelta(hours=8),
    )
    assert closed.session_id == opened.session_id
    assert closed.worked_hours == pytest.approx(8.0)


def test_on_behalf_sign_out_ignores_pending_session(container, staff, fixed_now):
    svc = container.attendance_service
    svc.sign_in(staff.alice, photo_ref="p1", now=fixed_now)

    with pytest.raises(NotFoundError):
        svc.create_on_behalf(staff.manager, employee_id=staff.alice.employee_id, action="signout", now=fixed_now)
    with pytest.raises(ConflictError):
        svc.create_on_behalf(staff.manager, employee_id=staff.alice.employee_id, action="signin", now=fixed_now)


def test_on_behalf_unknown_action(container, staff, fixed_now):
    with pytest.raises(ValidationError):
        container.attendance_service.create_on_behalf(
            staff.manager, employee_id=staff.alice.employee_id, action="lunch", now=fixed_now
        )


def test_history_newest_first(container, staff, fixed_now):
    svc = container.attendance_service
    for offset in range(3):
        day = fixed_now + timedelta(days=offset)
        svc.sign_in(staff.alice, photo_ref="p", now=day)
        svc.sign_out(staff.alice, now=day + timedelta(hours=1))

    history = svc.history(staff.alice.employee_id, limit=2)
    assert [s.work_date for s in history] == [date(2026, 1, 7), date(2026, 1, 6)]


def test_sign_in_on_holiday_accrues_compensatory_day(container, repos, staff, fixed_now):
    repos.holidays.create(holiday_date=fixed_now.date(), name="Founders Day")
    before = container.ledger.available_for(staff.alice.employee_id, LeaveCategory.COMPENSATORY)

    session = container.attendance_service.sign_in(staff.alice, photo_ref="p1", now=fixed_now)

    assert session.status == ApprovalStatus.PENDING
    assert container.ledger.available_for(staff.alice.employee_id, LeaveCategory.COMPENSATORY) == before + 1


def test_failed_accrual_does_not_undo_sign_in(container, repos, staff, fixed_now, monkeypatch, caplog):
    repos.holidays.create(holiday_date=fixed_now.date(), name="Founders Day")

    def broken_adjust(employee_id, category, delta):
        raise RuntimeError("ledger unavailable")

    monkeypatch.setattr(repos.balances, "adjust", broken_adjust)

    session = container.attendance_service.sign_in(staff.alice, photo_ref="p1", now=fixed_now)

    assert repos.attendance.get(session.session_id) is not None
    assert "Compensatory accrual failed" in caplog.text
    assert repos.accruals.keys == set()


def test_approved_for_month_filters_status_and_month(container, staff):
    svc = container.attendance_service
    jan = datetime(2026, 1, 30, 9, 0)
    feb = datetime(2026, 2, 2, 9, 0)

    s1 = svc.sign_in(staff.alice, photo_ref="p", now=jan)
    svc.decide(staff.manager, session_id=s1.session_id, decision="approved")
    svc.sign_in(staff.alice, photo_ref="p", now=jan + timedelta(days=1))
    s3 = svc.sign_in(staff.alice, photo_ref="p", now=feb)
    svc.decide(staff.manager, session_id=s3.session_id, decision="approved")

    sessions = svc.approved_for_month(staff.alice.employee_id, 2026, 1)
    assert [s.session_id for s in sessions] == [s1.session_id]
