from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus
from .model import AttendanceSession, Coordinates


class AttendanceRepository(Protocol):
    def get(self, session_id: int) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def find_open(
        self,
        employee_id: int,
        work_date: date,
        *,
        status: Optional[ApprovalStatus] = None,
    ) -> Optional[AttendanceSession]:
        """Most recent session signed in on `work_date` with no sign-out."""

        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        signin_time: datetime,
        signin_location: Optional[Coordinates],
        signin_photo_ref: Optional[str],
        status: ApprovalStatus,
        approved_by: Optional[int] = None,
        approved_at: Optional[datetime] = None,
    ) -> int:
        """Must raise ConflictError if the employee already has an open session that day."""

        raise NotImplementedError

    def close(
        self,
        *,
        session_id: int,
        signout_time: datetime,
        signout_location: Optional[Coordinates],
        approved_by: Optional[int] = None,
    ) -> bool:
        """Set the sign-out of a still-open session; False if it was already closed."""

        raise NotImplementedError

    def decide(
        self,
        *,
        session_id: int,
        status: ApprovalStatus,
        approved_by: int,
        approved_at: datetime,
    ) -> bool:
        """Move a pending session to `status`; False if it was no longer pending."""

        raise NotImplementedError

    def list_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceSession]:
        raise NotImplementedError

    def list_by_status(
        self,
        status: ApprovalStatus,
        *,
        employee_ids: Optional[Iterable[int]] = None,
        limit: int = 500,
    ) -> Sequence[AttendanceSession]:
        raise NotImplementedError

    def list_recent(
        self,
        *,
        employee_ids: Optional[Iterable[int]] = None,
        limit: int = 100,
    ) -> Sequence[AttendanceSession]:
        """Newest sessions of any status, optionally restricted to some employees."""
        raise NotImplementedError

    def list_for_range(
        self,
        *,
        employee_id: int,
        start_date: date,
        end_date: date,
        status: Optional[ApprovalStatus] = None,
    ) -> Sequence[AttendanceSession]:
        """Sessions whose sign-in date falls in [start_date, end_date]."""

        raise NotImplementedError

    def count_by_status(self, status: ApprovalStatus) -> int:
        raise NotImplementedError

    def count_open_on(self, work_date: date) -> int:
        raise NotImplementedError
