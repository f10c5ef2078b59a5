from __future__ import annotations

from flask import Flask

from ..common.web import actor_required, current_actor, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/settings", methods=["GET"], endpoint="get_settings")
    def get_settings():
        return ok(container.settings_service.get())

    @app.route("/settings", methods=["PUT"], endpoint="save_settings")
    @actor_required
    def save_settings():
        data = json_body()
        authority = container.authorities.for_actor(current_actor())
        settings = authority.save_settings(
            company_name=data.get("company_name", ""),
            primary_color=data.get("primary_color", ""),
        )
        return ok(settings, message="Settings saved.")
