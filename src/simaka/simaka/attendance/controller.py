from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, domain_error_response, internal_error_response, json_body, login_required
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    def attendance_list():
        try:
            date_s = request.args.get("date")
            day = parse_iso_date(date_s) if date_s else date.today()
            listing = container.attendance_service.list_records(
                class_name=request.args.get("class"),
                search=request.args.get("search"),
            )
            return jsonify(
                {
                    "success": True,
                    "date": day.strftime("%Y-%m-%d"),
                    "records": [s.to_dict() for s in listing.records],
                    "stats": listing.stats.to_dict(),
                }
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return internal_error_response("/api/attendance", e)

    @app.route("/api/attendance", methods=["PUT"], endpoint="attendance_update")
    @login_required
    def attendance_update():
        try:
            body = json_body()
            result = container.attendance_service.update_status(body.get("studentId"), body.get("newStatus"))
            return jsonify(
                {
                    "success": True,
                    "message": f"Attendance status for {result.student.name} updated successfully",
                    "student": result.student.to_dict(),
                    "stats": result.stats.to_dict(),
                    "categories": result.categories.to_dict(),
                }
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return internal_error_response("/api/attendance", e)

    @app.route("/api/attendance/reset", methods=["POST"], endpoint="attendance_reset")
    @admin_required
    def attendance_reset():
        """Start a new school day: clear today's status, keep the counters."""

        try:
            count = container.attendance_service.start_new_day()
            return jsonify(
                {
                    "success": True,
                    "message": f"Attendance status reset for {count} students",
                    "updated": count,
                    "stats": container.attendance_service.system_stats().to_dict(),
                }
            )
        except Exception as e:
            return internal_error_response("/api/attendance/reset", e)
