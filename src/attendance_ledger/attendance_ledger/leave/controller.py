from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_iso_date
from ..common.web import actor_required, current_actor, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/leaves", methods=["POST"], endpoint="submit_leave")
    @actor_required
    def submit_leave():
        data = json_body()
        req = container.leave_service.submit(
            current_actor(),
            category=data.get("category", ""),
            start_date=parse_iso_date(data.get("start_date", "")),
            end_date=parse_iso_date(data.get("end_date", "")),
            reason=data.get("reason", ""),
            document_ref=data.get("document_ref"),
        )
        return ok(req, status=201, message="Leave application submitted.")

    @app.route("/leaves/me", methods=["GET"], endpoint="my_leaves")
    @actor_required
    def my_leaves():
        return ok(container.leave_service.my_requests(current_actor().employee_id))

    @app.route("/leaves/balance", methods=["GET"], endpoint="leave_balance")
    @actor_required
    def leave_balance():
        balance = container.leave_service.balance(current_actor().employee_id)
        return ok(balance.as_dict())

    @app.route("/approvals/leaves", methods=["GET"], endpoint="pending_leaves")
    @actor_required
    def pending_leaves():
        authority = container.authorities.for_actor(current_actor())
        return ok(authority.list_pending_leaves())

    @app.route("/approvals/leaves/<int:request_id>", methods=["POST"], endpoint="decide_leave")
    @actor_required
    def decide_leave(request_id: int):
        authority = container.authorities.for_actor(current_actor())
        req = authority.decide_leave(request_id, json_body().get("decision", ""))
        return ok(req, message=f"Leave {req.status.value}.")
