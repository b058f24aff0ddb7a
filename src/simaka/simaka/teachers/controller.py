from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import (
    admin_required,
    domain_error_response,
    internal_error_response,
    json_body,
    json_payload,
    login_required,
)
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    teachers = container.teacher_service

    @app.route("/api/teachers", methods=["GET"], endpoint="teachers_list")
    def teachers_list():
        try:
            rows = teachers.list_teachers()
            return jsonify({"success": True, "teachers": [t.to_dict() for t in rows]})
        except Exception as e:
            return internal_error_response("/api/teachers", e)

    @app.route("/api/teachers", methods=["POST"], endpoint="teachers_create")
    @admin_required
    def teachers_create():
        try:
            body = json_body()
            teacher = teachers.create(name=body.get("name"), subject=body.get("subject"), schedule=body.get("schedule"))
            return jsonify({"success": True, "teacher": teacher.to_dict()}), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return internal_error_response("/api/teachers", e)

    @app.route("/api/teachers/<teacher_id>", methods=["GET"], endpoint="teachers_get")
    def teachers_get(teacher_id: str):
        try:
            return jsonify({"success": True, "teacher": teachers.get(teacher_id).to_dict()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return internal_error_response(f"/api/teachers/{teacher_id}", e)

    @app.route("/api/teachers/<teacher_id>", methods=["DELETE"], endpoint="teachers_delete")
    @admin_required
    def teachers_delete(teacher_id: str):
        try:
            teachers.remove(teacher_id)
            return jsonify({"success": True, "message": f"Teacher with ID {teacher_id} successfully removed"})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return internal_error_response(f"/api/teachers/{teacher_id}", e)

    @app.route("/api/teachers/<teacher_id>/schedule", methods=["GET"], endpoint="teachers_schedule_get")
    def teachers_schedule_get(teacher_id: str):
        try:
            items = teachers.get_schedule(teacher_id)
            return jsonify({"success": True, "schedule": [i.to_dict() for i in items]})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return internal_error_response(f"/api/teachers/{teacher_id}/schedule", e)

    @app.route("/api/teachers/<teacher_id>/schedule", methods=["PUT"], endpoint="teachers_schedule_put")
    @login_required
    def teachers_schedule_put(teacher_id: str):
        try:
            body = json_payload()
            # Both {"schedule": [...]} and a bare list are accepted.
            raw = body.get("schedule") if isinstance(body, dict) else body
            teacher = teachers.replace_schedule(teacher_id, raw)
            return jsonify({"success": True, "teacher": teacher.to_dict()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return internal_error_response(f"/api/teachers/{teacher_id}/schedule", e)
