from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.model import AttendanceSession
from ..attendance.service import AttendanceService
from ..common.datetime_utils import now_local
from ..core.actor import Actor
from ..core.constants import DEFAULT_ATTENDANCE_LOG_LIMIT
from ..core.enums import ApprovalStatus, AttendanceAction, Role
from ..core.exceptions import AuthorizationError
from ..employees.model import Employee
from ..employees.service import EmployeeService
from ..holidays.model import Holiday
from ..holidays.service import HolidayService
from ..leave.model import LeaveRequest
from ..leave.service import LeaveService
from ..settings.model import AppSettings
from ..settings.service import SettingsService
from .model import DashboardStats

logger = logging.getLogger(__name__)


class ApprovalAuthority(ABC):
    """Operations available to whoever may decide attendance and leave.

    Subclasses only differ in which employees they can see (`scope`) and in
    whether the administrative operations are allowed.
    """

    def __init__(
        self,
        actor: Actor,
        *,
        attendance: AttendanceService,
        leaves: LeaveService,
        employees: EmployeeService,
        holidays: HolidayService,
        settings: SettingsService,
    ):
        self.actor = actor
        self._attendance = attendance
        self._leaves = leaves
        self._employees = employees
        self._holidays = holidays
        self._settings = settings

    @abstractmethod
    def scope(self) -> Optional[set[int]]:
        """Employee ids this authority may act on; None means everyone."""

        raise NotImplementedError

    def _check_in_scope(self, employee_id: int) -> None:
        scope = self.scope()
        if scope is not None and int(employee_id) not in scope:
            raise AuthorizationError(f"Employee {employee_id} does not report to you")

    def list_pending_attendance(self) -> Sequence[AttendanceSession]:
        return self._attendance.list_pending(employee_ids=self.scope())

    def list_attendance(self, *, limit: int = DEFAULT_ATTENDANCE_LOG_LIMIT) -> Sequence[AttendanceSession]:
        """Most recent sessions of any status within scope."""

        return self._attendance.list_recent(employee_ids=self.scope(), limit=limit)

    def list_pending_leaves(self) -> Sequence[LeaveRequest]:
        return self._leaves.list_pending(employee_ids=self.scope())

    def decide_attendance(self, session_id: int, decision: ApprovalStatus | str, *, now: Optional[datetime] = None) -> AttendanceSession:
        session = self._attendance.get(session_id)
        self._check_in_scope(session.employee_id)
        return self._attendance.decide(self.actor, session_id=session_id, decision=decision, now=now)

    def decide_leave(self, request_id: int, decision: ApprovalStatus | str, *, now: Optional[datetime] = None) -> LeaveRequest:
        req = self._leaves.get(request_id)
        self._check_in_scope(req.employee_id)
        return self._leaves.decide(self.actor, request_id=request_id, decision=decision, now=now)

    def record_on_behalf(
        self,
        employee_id: int,
        action: AttendanceAction | str,
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceSession:
        self._employees.get(employee_id)
        self._check_in_scope(employee_id)
        return self._attendance.create_on_behalf(self.actor, employee_id=employee_id, action=action, now=now)

    # Admin-only operations; managers get AuthorizationError.

    def enroll_employee(self, *, full_name: str, email: str, role: Role | str, manager_id: Optional[int] = None) -> Employee:
        raise AuthorizationError("Only admins can enroll employees")

    def assign_manager(self, employee_id: int, manager_id: Optional[int]) -> Employee:
        raise AuthorizationError("Only admins can assign managers")

    def bulk_assign_manager(self, employee_ids: Sequence[int], manager_id: Optional[int]) -> int:
        raise AuthorizationError("Only admins can assign managers")

    def add_holiday(self, *, holiday_date: date, name: str, description: Optional[str] = None) -> Holiday:
        raise AuthorizationError("Only admins can manage holidays")

    def remove_holiday(self, holiday_id: int) -> None:
        raise AuthorizationError("Only admins can manage holidays")

    def save_settings(self, *, company_name: str, primary_color: str) -> AppSettings:
        raise AuthorizationError("Only admins can change settings")

    def dashboard_stats(self, *, today: Optional[date] = None) -> DashboardStats:
        raise AuthorizationError("Only admins can view company statistics")


class ManagerAuthority(ApprovalAuthority):
    """Sees the manager's direct and indirect reports only."""

    def scope(self) -> Optional[set[int]]:
        return self._employees.subordinate_ids(self.actor.employee_id)


class AdminAuthority(ApprovalAuthority):
    def scope(self) -> Optional[set[int]]:
        return None

    def enroll_employee(self, *, full_name: str, email: str, role: Role | str, manager_id: Optional[int] = None) -> Employee:
        return self._employees.enroll(full_name=full_name, email=email, role=role, manager_id=manager_id)

    def assign_manager(self, employee_id: int, manager_id: Optional[int]) -> Employee:
        return self._employees.assign_manager(employee_id, manager_id)

    def bulk_assign_manager(self, employee_ids: Sequence[int], manager_id: Optional[int]) -> int:
        return self._employees.bulk_assign_manager(employee_ids, manager_id)

    def add_holiday(self, *, holiday_date: date, name: str, description: Optional[str] = None) -> Holiday:
        return self._holidays.add(holiday_date=holiday_date, name=name, description=description)

    def remove_holiday(self, holiday_id: int) -> None:
        self._holidays.remove(holiday_id)

    def save_settings(self, *, company_name: str, primary_color: str) -> AppSettings:
        settings = self._settings.save(company_name=company_name, primary_color=primary_color)
        logger.info("Settings updated by admin %s", self.actor.employee_id)
        return settings

    def dashboard_stats(self, *, today: Optional[date] = None) -> DashboardStats:
        today = today or now_local().date()
        return DashboardStats(
            total_employees=self._employees.count(),
            present_today=self._attendance.count_present(today),
            pending_leaves=self._leaves.count_pending(),
            pending_attendance=self._attendance.count_pending(),
        )
