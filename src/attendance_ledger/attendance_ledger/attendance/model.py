from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ApprovalStatus


@dataclass(frozen=True)
class Coordinates:
    """A geolocation fix as reported by the client; stored, never validated."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: one sign-in/sign-out cycle of an employee."""

    session_id: int
    employee_id: int
    signin_time: datetime
    status: ApprovalStatus
    signin_location: Optional[Coordinates] = None
    signin_photo_ref: Optional[str] = None
    signout_time: Optional[datetime] = None
    signout_location: Optional[Coordinates] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None

    @property
    def work_date(self) -> date:
        return self.signin_time.date()

    @property
    def is_open(self) -> bool:
        return self.signout_time is None

    @property
    def worked_hours(self) -> float:
        if self.signout_time is None:
            return 0.0
        return (self.signout_time - self.signin_time).total_seconds() / 3600
