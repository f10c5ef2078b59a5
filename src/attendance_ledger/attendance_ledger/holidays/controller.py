from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_positive_int
from ..common.web import actor_required, current_actor, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/holidays", methods=["GET"], endpoint="list_holidays")
    @actor_required
    def list_holidays():
        year = request.args.get("year")
        year = require_positive_int(year, "year") if year is not None else None
        return ok(container.holiday_service.list(year=year))

    @app.route("/holidays", methods=["POST"], endpoint="add_holiday")
    @actor_required
    def add_holiday():
        data = json_body()
        authority = container.authorities.for_actor(current_actor())
        holiday = authority.add_holiday(
            holiday_date=parse_iso_date(data.get("date", "")),
            name=data.get("name", ""),
            description=data.get("description"),
        )
        return ok(holiday, status=201, message="Holiday added.")

    @app.route("/holidays/<int:holiday_id>", methods=["DELETE"], endpoint="remove_holiday")
    @actor_required
    def remove_holiday(holiday_id: int):
        container.authorities.for_actor(current_actor()).remove_holiday(holiday_id)
        return ok(message="Holiday removed.")
