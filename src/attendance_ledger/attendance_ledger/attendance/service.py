from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import month_bounds, now_local
from ..common.validators import require_decision, require_non_empty, require_positive_int
from ..core.actor import Actor, require_approver
from ..core.constants import DEFAULT_ATTENDANCE_LOG_LIMIT, DEFAULT_HISTORY_LIMIT, DEFAULT_PENDING_LIMIT
from ..core.enums import ApprovalStatus, AttendanceAction
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..leave.accrual import CompensatoryAccrualRule
from .model import AttendanceSession, Coordinates
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        sessions: AttendanceRepository,
        *,
        accrual: Optional[CompensatoryAccrualRule] = None,
    ):
        self._sessions = sessions
        self._accrual = accrual

    def get(self, session_id: int) -> AttendanceSession:
        session = self._sessions.get(int(session_id))
        if not session:
            raise NotFoundError(f"Attendance session {session_id} does not exist")
        return session

    def sign_in(
        self,
        actor: Actor,
        *,
        photo_ref: str,
        location: Optional[Coordinates] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceSession:
        now = now or now_local()
        today = now.date()
        photo_ref = require_non_empty(photo_ref, "Verification photo")

        if self._sessions.find_open(actor.employee_id, today):
            raise ConflictError("You are already signed in today")

        session_id = self._sessions.create(
            employee_id=actor.employee_id,
            signin_time=now,
            signin_location=location,
            signin_photo_ref=photo_ref,
            status=ApprovalStatus.PENDING,
        )
        logger.info("Employee %s signed in (session %s)", actor.employee_id, session_id)

        self._accrue_compensatory(actor.employee_id, today)
        return self.get(session_id)

    def _accrue_compensatory(self, employee_id: int, work_date: date) -> None:
        if self._accrual is None:
            return
        try:
            self._accrual.apply(employee_id, work_date)
        except Exception:
            # Bookkeeping only: the sign-in itself already succeeded.
            logger.exception("Compensatory accrual failed for employee %s on %s", employee_id, work_date)

    def sign_out(
        self,
        actor: Actor,
        *,
        location: Optional[Coordinates] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceSession:
        now = now or now_local()

        session = self._sessions.find_open(actor.employee_id, now.date())
        if not session:
            raise NotFoundError("No active sign-in found for today")

        if not self._sessions.close(session_id=session.session_id, signout_time=now, signout_location=location):
            raise NotFoundError("No active sign-in found for today")

        logger.info("Employee %s signed out (session %s)", actor.employee_id, session.session_id)
        return self.get(session.session_id)

    def decide(
        self,
        actor: Actor,
        *,
        session_id: int,
        decision: ApprovalStatus | str,
        now: Optional[datetime] = None,
    ) -> AttendanceSession:
        require_approver(actor)
        decision = require_decision(decision)
        session = self.get(session_id)

        if session.status == decision:
            return session
        if session.status != ApprovalStatus.PENDING:
            raise ConflictError(f"Attendance session {session_id} was already {session.status.value}")

        decided = self._sessions.decide(
            session_id=session.session_id,
            status=decision,
            approved_by=actor.employee_id,
            approved_at=now or now_local(),
        )
        if not decided:
            current = self.get(session_id)
            if current.status == decision:
                return current
            raise ConflictError(f"Attendance session {session_id} was already {current.status.value}")

        logger.info("Attendance session %s %s by %s", session_id, decision.value, actor.employee_id)
        return self.get(session_id)

    def create_on_behalf(
        self,
        actor: Actor,
        *,
        employee_id: int,
        action: AttendanceAction | str,
        now: Optional[datetime] = None,
    ) -> AttendanceSession:
        """Record a pre-approved sign-in, or close today's approved session, for an employee."""

        require_approver(actor)
        try:
            action = AttendanceAction(action)
        except ValueError:
            raise ValidationError(f"Unknown attendance action {action!r}")
        now = now or now_local()

        if action == AttendanceAction.SIGNIN:
            if self._sessions.find_open(int(employee_id), now.date()):
                raise ConflictError(f"Employee {employee_id} is already signed in today")
            session_id = self._sessions.create(
                employee_id=int(employee_id),
                signin_time=now,
                signin_location=None,
                signin_photo_ref=None,
                status=ApprovalStatus.APPROVED,
                approved_by=actor.employee_id,
                approved_at=now,
            )
            logger.info("Sign-in for employee %s recorded by %s (session %s)", employee_id, actor.employee_id, session_id)
            return self.get(session_id)

        session = self._sessions.find_open(int(employee_id), now.date(), status=ApprovalStatus.APPROVED)
        if not session:
            raise NotFoundError(f"No active sign-in found for employee {employee_id} today")
        if not self._sessions.close(
            session_id=session.session_id,
            signout_time=now,
            signout_location=None,
            approved_by=actor.employee_id,
        ):
            raise NotFoundError(f"No active sign-in found for employee {employee_id} today")

        logger.info("Sign-out for employee %s recorded by %s (session %s)", employee_id, actor.employee_id, session.session_id)
        return self.get(session.session_id)

    def today_session(self, employee_id: int, today: date) -> Optional[AttendanceSession]:
        return self._sessions.find_open(int(employee_id), today)

    def history(self, employee_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceSession]:
        return self._sessions.list_recent_for_employee(int(employee_id), require_positive_int(limit, "limit"))

    def list_pending(self, *, employee_ids: Optional[Iterable[int]] = None) -> Sequence[AttendanceSession]:
        return self._sessions.list_by_status(
            ApprovalStatus.PENDING,
            employee_ids=employee_ids,
            limit=DEFAULT_PENDING_LIMIT,
        )

    def list_recent(
        self,
        *,
        employee_ids: Optional[Iterable[int]] = None,
        limit: int = DEFAULT_ATTENDANCE_LOG_LIMIT,
    ) -> Sequence[AttendanceSession]:
        return self._sessions.list_recent(employee_ids=employee_ids, limit=require_positive_int(limit, "limit"))

    def count_pending(self) -> int:
        return self._sessions.count_by_status(ApprovalStatus.PENDING)

    def count_present(self, today: date) -> int:
        return self._sessions.count_open_on(today)

    def approved_for_month(self, employee_id: int, year: int, month: int) -> Sequence[AttendanceSession]:
        start, end = month_bounds(year, month)
        return self._sessions.list_for_range(
            employee_id=int(employee_id),
            start_date=start,
            end_date=end,
            status=ApprovalStatus.APPROVED,
        )
