from __future__ import annotations

from flask import Flask, request

from ..common.validators import require_positive_int
from ..common.web import actor_required, current_actor, json_body, ok, parse_location
from ..container import Container
from ..core.constants import DEFAULT_ATTENDANCE_LOG_LIMIT, DEFAULT_HISTORY_LIMIT


def register(app: Flask, container: Container) -> None:
    @app.route("/attendance/signin", methods=["POST"], endpoint="attendance_signin")
    @actor_required
    def signin():
        data = json_body()
        session = container.attendance_service.sign_in(
            current_actor(),
            photo_ref=data.get("photo_ref", ""),
            location=parse_location(data),
        )
        return ok(session, status=201, message="Signed in. Waiting for manager approval.")

    @app.route("/attendance/signout", methods=["POST"], endpoint="attendance_signout")
    @actor_required
    def signout():
        data = json_body()
        session = container.attendance_service.sign_out(current_actor(), location=parse_location(data))
        return ok(session, message="Signed out.")

    @app.route("/attendance/me", methods=["GET"], endpoint="attendance_history")
    @actor_required
    def history():
        limit = require_positive_int(request.args.get("limit", DEFAULT_HISTORY_LIMIT), "limit")
        return ok(container.attendance_service.history(current_actor().employee_id, limit=limit))

    @app.route("/approvals/attendance", methods=["GET"], endpoint="pending_attendance")
    @actor_required
    def pending_attendance():
        authority = container.authorities.for_actor(current_actor())
        return ok(authority.list_pending_attendance())

    @app.route("/approvals/attendance/history", methods=["GET"], endpoint="attendance_log")
    @actor_required
    def attendance_log():
        authority = container.authorities.for_actor(current_actor())
        limit = require_positive_int(request.args.get("limit", DEFAULT_ATTENDANCE_LOG_LIMIT), "limit")
        return ok(authority.list_attendance(limit=limit))

    @app.route("/approvals/attendance/<int:session_id>", methods=["POST"], endpoint="decide_attendance")
    @actor_required
    def decide_attendance(session_id: int):
        authority = container.authorities.for_actor(current_actor())
        session = authority.decide_attendance(session_id, json_body().get("decision", ""))
        return ok(session, message=f"Attendance {session.status.value}.")

    @app.route("/approvals/attendance/on-behalf", methods=["POST"], endpoint="attendance_on_behalf")
    @actor_required
    def on_behalf():
        data = json_body()
        authority = container.authorities.for_actor(current_actor())
        employee_id = require_positive_int(data.get("employee_id"), "employee_id")
        session = authority.record_on_behalf(employee_id, data.get("action", ""))
        return ok(session, message="Attendance recorded.")
