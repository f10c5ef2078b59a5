from __future__ import annotations

import pytest

from src.attendance_ledger.attendance_ledger.core.enums import Role
from src.attendance_ledger.attendance_ledger.core.exceptions import ConflictError, NotFoundError, ValidationError


def test_enroll_normalises_email(container):
    svc = container.employee_service
    employee = svc.enroll(full_name=" Dana Dev ", email="Dana@Example.com", role="manager")

    assert employee.full_name == "Dana Dev"
    assert employee.email == "dana@example.com"
    assert employee.role == Role.MANAGER

    with pytest.raises(ConflictError):
        svc.enroll(full_name="Dana Again", email="dana@example.com")


def test_enroll_validation(container):
    svc = container.employee_service
    with pytest.raises(ValidationError):
        svc.enroll(full_name="", email="x@example.com")
    with pytest.raises(ValidationError):
        svc.enroll(full_name="X", email="x@example.com", role="ceo")
    with pytest.raises(NotFoundError):
        svc.enroll(full_name="X", email="x@example.com", manager_id=404)


def test_bulk_assign_manager(container, staff):
    svc = container.employee_service

    updated = svc.bulk_assign_manager([staff.carol.employee_id, staff.bob.employee_id], staff.admin.employee_id)

    assert updated == 2
    assert svc.get(staff.carol.employee_id).manager_id == staff.admin.employee_id
    assert svc.subordinate_ids(staff.manager.employee_id) == {staff.alice.employee_id}


def test_assign_manager_rejects_self_and_empty(container, staff):
    svc = container.employee_service
    with pytest.raises(ValidationError):
        svc.assign_manager(staff.bob.employee_id, staff.bob.employee_id)
    with pytest.raises(ValidationError):
        svc.bulk_assign_manager([], staff.manager.employee_id)


def test_unassign_manager(container, staff):
    employee = container.employee_service.assign_manager(staff.alice.employee_id, None)
    assert employee.manager_id is None


def test_subordinates_are_transitive(container, staff):
    svc = container.employee_service
    assert svc.subordinate_ids(staff.admin.employee_id) == {
        staff.manager.employee_id,
        staff.alice.employee_id,
        staff.bob.employee_id,
    }
    assert svc.subordinate_ids(staff.alice.employee_id) == set()


def test_subordinates_survive_cycles(container, repos, staff):
    repos.employees.set_manager([staff.admin.employee_id], staff.alice.employee_id)

    ids = container.employee_service.subordinate_ids(staff.manager.employee_id)

    assert ids == {staff.alice.employee_id, staff.bob.employee_id, staff.admin.employee_id}
