from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus, LeaveCategory
from .model import LeaveRequest


class LeaveRequestRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        category: LeaveCategory,
        start_date: date,
        end_date: date,
        reason: str,
        document_ref: Optional[str],
        applied_at: datetime,
    ) -> int:
        raise NotImplementedError

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, limit: int = 200) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_by_status(
        self,
        status: ApprovalStatus,
        *,
        employee_ids: Optional[Iterable[int]] = None,
        limit: int = 500,
    ) -> Sequence[LeaveRequest]:
        """`employee_ids=None` means every employee."""

        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: ApprovalStatus,
        approved_by: int,
        approved_at: datetime,
    ) -> bool:
        """Move a pending request to `status`; False if it was no longer pending."""

        raise NotImplementedError

    def count_by_status(self, status: ApprovalStatus) -> int:
        raise NotImplementedError
