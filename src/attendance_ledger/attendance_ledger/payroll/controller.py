from __future__ import annotations

from flask import Flask

from ..common.web import actor_required, current_actor, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/payroll/<int:employee_id>/<year_month>", methods=["GET"], endpoint="salary_slip")
    @actor_required
    def salary_slip(employee_id: int, year_month: str):
        slip = container.salary_service.monthly_slip(current_actor(), employee_id=employee_id, year_month=year_month)
        return ok(slip)
