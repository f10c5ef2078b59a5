from __future__ import annotations

from flask import Flask

from ..common.web import actor_required, current_actor, json_body, ok
from ..container import Container
from ..core.actor import require_admin
from ..core.exceptions import ValidationError


def _optional_id(value):
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid employee id {value!r}")


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/employees", methods=["GET"], endpoint="list_employees")
    @actor_required
    def list_employees():
        require_admin(current_actor())
        return ok(container.employee_service.list_all())

    @app.route("/admin/employees", methods=["POST"], endpoint="enroll_employee")
    @actor_required
    def enroll_employee():
        data = json_body()
        authority = container.authorities.for_actor(current_actor())
        employee = authority.enroll_employee(
            full_name=data.get("full_name", ""),
            email=data.get("email", ""),
            role=data.get("role", "employee"),
            manager_id=_optional_id(data.get("manager_id")),
        )
        return ok(employee, status=201, message="Employee enrolled.")

    @app.route("/admin/employees/<int:employee_id>/manager", methods=["PUT"], endpoint="assign_manager")
    @actor_required
    def assign_manager(employee_id: int):
        authority = container.authorities.for_actor(current_actor())
        employee = authority.assign_manager(employee_id, _optional_id(json_body().get("manager_id")))
        return ok(employee, message="Manager assigned.")

    @app.route("/admin/employees/manager", methods=["PUT"], endpoint="bulk_assign_manager")
    @actor_required
    def bulk_assign_manager():
        data = json_body()
        raw_ids = data.get("employee_ids") or []
        if not isinstance(raw_ids, list):
            raise ValidationError("employee_ids must be a list")
        ids = [i for i in (_optional_id(v) for v in raw_ids) if i is not None]
        authority = container.authorities.for_actor(current_actor())
        updated = authority.bulk_assign_manager(ids, _optional_id(data.get("manager_id")))
        return ok({"updated": updated}, message=f"Manager assigned to {updated} employee(s).")

    @app.route("/admin/stats", methods=["GET"], endpoint="dashboard_stats")
    @actor_required
    def dashboard_stats():
        authority = container.authorities.for_actor(current_actor())
        return ok(authority.dashboard_stats())
