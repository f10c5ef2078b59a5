from __future__ import annotations

from dataclasses import dataclass

from ..attendance.service import AttendanceService
from ..core.actor import Actor
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..employees.service import EmployeeService
from ..holidays.service import HolidayService
from ..leave.service import LeaveService
from ..settings.service import SettingsService
from .authority import AdminAuthority, ApprovalAuthority, ManagerAuthority


@dataclass
class ApprovalAuthorityFactory:
    """Factory Pattern: choose the authority variant from the actor's role."""

    attendance: AttendanceService
    leaves: LeaveService
    employees: EmployeeService
    holidays: HolidayService
    settings: SettingsService

    def for_actor(self, actor: Actor) -> ApprovalAuthority:
        if actor.role == Role.ADMIN:
            cls = AdminAuthority
        elif actor.role == Role.MANAGER:
            cls = ManagerAuthority
        else:
            raise AuthorizationError("Only managers and admins can approve requests")

        return cls(
            actor,
            attendance=self.attendance,
            leaves=self.leaves,
            employees=self.employees,
            holidays=self.holidays,
            settings=self.settings,
        )
