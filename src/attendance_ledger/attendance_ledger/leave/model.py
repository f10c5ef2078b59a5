from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import inclusive_days
from ..core.enums import ApprovalStatus, LeaveCategory


@dataclass(frozen=True)
class LeaveBalance:
    """Remaining leave days per category for one employee."""

    employee_id: int
    casual: int
    sick: int
    earned: int
    compensatory: int
    updated_at: Optional[datetime] = None

    def available_for(self, category: LeaveCategory) -> int:
        return int(getattr(self, LeaveCategory(category).value))

    def as_dict(self) -> dict:
        return {c.value: self.available_for(c) for c in LeaveCategory}


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    employee_id: int
    category: LeaveCategory
    start_date: date
    end_date: date
    reason: str
    status: ApprovalStatus
    applied_at: datetime
    document_ref: Optional[str] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None

    @property
    def day_count(self) -> int:
        return inclusive_days(self.start_date, self.end_date)

    def as_dict(self) -> dict:
        out = asdict(self)
        out["day_count"] = self.day_count
        return out
