from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, domain_error_response, internal_error_response, json_body
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings", methods=["GET"], endpoint="settings_get")
    def settings_get():
        try:
            return jsonify({"success": True, "settings": container.settings_service.current().to_dict()})
        except Exception as e:
            return internal_error_response("/api/settings", e)

    @app.route("/api/settings", methods=["PUT"], endpoint="settings_update")
    @admin_required
    def settings_update():
        try:
            settings = container.settings_service.update(json_body())
            return jsonify({"success": True, "message": "Settings updated successfully", "settings": settings.to_dict()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return internal_error_response("/api/settings", e)
