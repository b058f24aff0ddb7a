from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/health-check", methods=["GET"], endpoint="health_check")
    def health_check():
        status = container.health_service.check()
        return jsonify(status.to_dict()), (200 if status.connected else 503)
