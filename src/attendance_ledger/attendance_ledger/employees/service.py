from __future__ import annotations

import logging
from collections import deque
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: enroll employees and maintain the reporting hierarchy."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError(f"Employee {employee_id} does not exist")
        return employee

    def list_all(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def count(self) -> int:
        return self._employees.count()

    def enroll(
        self,
        *,
        full_name: str,
        email: str,
        role: Role | str = Role.EMPLOYEE,
        manager_id: Optional[int] = None,
    ) -> Employee:
        full_name = require_non_empty(full_name, "Full name")
        email = require_non_empty(email, "Email").lower()
        try:
            role = Role(role)
        except ValueError:
            raise ValidationError(f"Unknown role {role!r}")

        if self._employees.get_by_email(email):
            raise ConflictError(f"An employee with email {email} already exists")
        if manager_id is not None:
            self.get(manager_id)

        employee_id = self._employees.create(
            full_name=full_name,
            email=email,
            role=role,
            manager_id=int(manager_id) if manager_id is not None else None,
        )
        logger.info("Enrolled employee %s (%s) as %s", employee_id, email, role.value)
        return self.get(employee_id)

    def assign_manager(self, employee_id: int, manager_id: Optional[int]) -> Employee:
        self.bulk_assign_manager([employee_id], manager_id)
        return self.get(employee_id)

    def bulk_assign_manager(self, employee_ids: Sequence[int], manager_id: Optional[int]) -> int:
        ids = [int(i) for i in employee_ids]
        if not ids:
            raise ValidationError("Select at least one employee")
        if manager_id is not None:
            manager_id = int(manager_id)
            self.get(manager_id)
            if manager_id in ids:
                raise ValidationError("An employee cannot manage themselves")
        for employee_id in ids:
            self.get(employee_id)

        updated = self._employees.set_manager(ids, manager_id)
        logger.info("Assigned manager %s to %d employee(s)", manager_id, len(ids))
        return updated

    def subordinate_ids(self, manager_id: int) -> set[int]:
        """All direct and indirect reports of a manager.

        The hierarchy is not guaranteed acyclic, so visited ids are skipped.
        """

        seen: set[int] = set()
        queue = deque([int(manager_id)])
        while queue:
            current = queue.popleft()
            for report_id in self._employees.list_direct_reports(current):
                if report_id in seen or report_id == manager_id:
                    continue
                seen.add(report_id)
                queue.append(report_id)
        return seen
