from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Employee roles used for permission checks."""

    EMPLOYEE = "employee"
    MANAGER = "manager"
    ADMIN = "admin"
    HR = "hr"
    TEMP_VENDOR = "temp_vendor"


APPROVER_ROLES = frozenset({Role.MANAGER, Role.ADMIN})


class ApprovalStatus(str, Enum):
    """Approval state shared by attendance sessions and leave requests."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


DECISIONS = frozenset({ApprovalStatus.APPROVED, ApprovalStatus.REJECTED})


class LeaveCategory(str, Enum):
    CASUAL = "casual"
    SICK = "sick"
    EARNED = "earned"
    COMPENSATORY = "compensatory"


class AttendanceAction(str, Enum):
    """What an approver records on an employee's behalf."""

    SIGNIN = "signin"
    SIGNOUT = "signout"
