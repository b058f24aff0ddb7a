from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import (
    admin_required,
    domain_error_response,
    internal_error_response,
    json_body,
    login_required,
)
from ..core.exceptions import DomainError
from ..container import Container
from .service import build_filter


def register(app: Flask, container: Container) -> None:
    students = container.student_service

    @app.route("/api/students", methods=["GET"], endpoint="students_list")
    def students_list():
        try:
            flt = build_filter(
                class_name=request.args.get("class"),
                search=request.args.get("search"),
                student_type=request.args.get("type"),
                promotion_status=request.args.get("promotionStatus"),
            )
            rows = students.list_students(flt)
            return jsonify({"success": True, "count": len(rows), "students": [s.to_dict() for s in rows]})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return internal_error_response("/api/students", e)

    @app.route("/api/students", methods=["POST"], endpoint="students_create")
    @login_required
    def students_create():
        try:
            body = json_body()
            student = students.enroll(
                nis=body.get("nis"),
                name=body.get("name"),
                class_name=body.get("class"),
                student_type=body.get("type"),
            )
            return (
                jsonify({"success": True, "message": "Student created successfully", "student": student.to_dict()}),
                201,
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return internal_error_response("/api/students", e)

    @app.route("/api/students/details", methods=["GET"], endpoint="students_details")
    def students_details():
        try:
            rows = students.list_details()
            return jsonify({"success": True, "students": [d.to_dict() for d in rows]})
        except Exception as e:
            return internal_error_response("/api/students/details", e)

    @app.route("/api/students/violations", methods=["GET"], endpoint="students_violations")
    def students_violations():
        try:
            rows = students.list_violations()
            return jsonify(
                {
                    "success": True,
                    "students": [
                        {
                            "id": s.student_id,
                            "nis": s.nis,
                            "name": s.name,
                            "class": s.class_name,
                            "violations": s.violations,
                            "achievements": s.achievements,
                        }
                        for s in rows
                    ],
                }
            )
        except Exception as e:
            return internal_error_response("/api/students/violations", e)

    @app.route("/api/students/class", methods=["PUT"], endpoint="students_change_class")
    @login_required
    def students_change_class():
        try:
            body = json_body()
            student = students.change_class(body.get("studentId"), body.get("class"))
            return jsonify({"success": True, "message": "Class updated successfully", "student": student.to_dict()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return internal_error_response("/api/students/class", e)

    @app.route("/api/students/promotion", methods=["PUT"], endpoint="students_promotion")
    @login_required
    def students_promotion():
        try:
            body = json_body()
            student = students.set_promotion(
                body.get("studentId"),
                body.get("promotionStatus"),
                body.get("nextClass"),
            )
            return jsonify(
                {"success": True, "message": "Promotion status updated successfully", "student": student.to_dict()}
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return internal_error_response("/api/students/promotion", e)

    @app.route("/api/students/<student_id>", methods=["GET"], endpoint="students_get")
    def students_get(student_id: str):
        try:
            details = students.get_details(student_id)
            return jsonify({"success": True, "student": details.to_dict()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return internal_error_response(f"/api/students/{student_id}", e)

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="students_delete")
    @admin_required
    def students_delete(student_id: str):
        try:
            students.remove(student_id)
            return jsonify({"success": True, "message": "Student deleted successfully"})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return internal_error_response(f"/api/students/{student_id}", e)
