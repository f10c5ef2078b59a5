from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import inclusive_days, now_local
from ..common.validators import optional_text, require_category, require_decision, require_non_empty
from ..core.actor import Actor, require_approver
from ..core.constants import DEFAULT_PENDING_LIMIT
from ..core.enums import ApprovalStatus, LeaveCategory
from ..core.exceptions import ConflictError, InsufficientBalanceError, NotFoundError, ValidationError
from .ledger import LeaveLedger
from .model import LeaveBalance, LeaveRequest
from .request_repository import LeaveRequestRepository

logger = logging.getLogger(__name__)


class LeaveService:
    """Use case: submit leave requests and record approval decisions.

    Two ledger policies are supported:

    - default: a request is admitted while the category balance is above zero
      and decisions never touch the ledger;
    - ``strict_accounting``: a request is admitted only if the balance covers
      every requested day, and approval debits those days.

    Rejection leaves balances untouched under both, since nothing is reserved
    at submission.
    """

    def __init__(
        self,
        requests: LeaveRequestRepository,
        ledger: LeaveLedger,
        *,
        strict_accounting: bool = False,
    ):
        self._requests = requests
        self._ledger = ledger
        self._strict = bool(strict_accounting)

    def balance(self, employee_id: int) -> LeaveBalance:
        return self._ledger.get(employee_id)

    def get(self, request_id: int) -> LeaveRequest:
        req = self._requests.get(int(request_id))
        if not req:
            raise NotFoundError(f"Leave request {request_id} does not exist")
        return req

    def my_requests(self, employee_id: int) -> Sequence[LeaveRequest]:
        return self._requests.list_for_employee(int(employee_id))

    def list_pending(self, *, employee_ids: Optional[Iterable[int]] = None) -> Sequence[LeaveRequest]:
        return self._requests.list_by_status(
            ApprovalStatus.PENDING,
            employee_ids=employee_ids,
            limit=DEFAULT_PENDING_LIMIT,
        )

    def count_pending(self) -> int:
        return self._requests.count_by_status(ApprovalStatus.PENDING)

    def _check_admission(self, employee_id: int, category: LeaveCategory, days: int) -> None:
        available = self._ledger.available_for(employee_id, category)
        needed = days if self._strict else 1
        if available < needed:
            raise InsufficientBalanceError(
                f"Insufficient {category.value} leave balance: {available} day(s) available"
            )

    def submit(
        self,
        actor: Actor,
        *,
        category: LeaveCategory | str,
        start_date: date,
        end_date: date,
        reason: str,
        document_ref: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        category = require_category(category)
        if start_date > end_date:
            raise ValidationError("End date must be on or after the start date")
        reason = require_non_empty(reason, "Reason")

        self._check_admission(actor.employee_id, category, inclusive_days(start_date, end_date))

        request_id = self._requests.create(
            employee_id=actor.employee_id,
            category=category,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            document_ref=optional_text(document_ref, "Document reference"),
            applied_at=now or now_local(),
        )
        logger.info(
            "Employee %s requested %s leave %s..%s (request %s)",
            actor.employee_id,
            category.value,
            start_date.isoformat(),
            end_date.isoformat(),
            request_id,
        )
        return self.get(request_id)

    def decide(
        self,
        actor: Actor,
        *,
        request_id: int,
        decision: ApprovalStatus | str,
        now: Optional[datetime] = None,
    ) -> LeaveRequest:
        require_approver(actor)
        decision = require_decision(decision)
        req = self.get(request_id)

        if req.status == decision:
            return req
        if req.status != ApprovalStatus.PENDING:
            raise ConflictError(f"Leave request {request_id} was already {req.status.value}")

        debited = False
        if self._strict and decision == ApprovalStatus.APPROVED:
            if not self._ledger.debit(req.employee_id, req.category, req.day_count):
                raise InsufficientBalanceError(
                    f"Insufficient {req.category.value} leave balance to approve {req.day_count} day(s)"
                )
            debited = True

        try:
            decided = self._requests.decide(
                request_id=req.request_id,
                status=decision,
                approved_by=actor.employee_id,
                approved_at=now or now_local(),
            )
        except Exception:
            if debited:
                self._ledger.credit(req.employee_id, req.category, req.day_count)
            raise

        if not decided:
            # Another approver got there first.
            if debited:
                self._ledger.credit(req.employee_id, req.category, req.day_count)
            current = self.get(request_id)
            if current.status == decision:
                return current
            raise ConflictError(f"Leave request {request_id} was already {current.status.value}")

        logger.info("Leave request %s %s by %s", req.request_id, decision.value, actor.employee_id)
        return self.get(request_id)
