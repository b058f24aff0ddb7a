from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import domain_error_response, internal_error_response, json_body, login_required
from ..core.exceptions import DomainError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports", methods=["GET"], endpoint="reports_get")
    def reports_get():
        try:
            report = container.report_service.build(request.args.get("type"))
            return jsonify(report.to_dict())
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return internal_error_response("/api/reports", e)

    @app.route("/api/reports/export", methods=["POST"], endpoint="reports_export")
    @login_required
    def reports_export():
        try:
            body = json_body()
            if not body.get("reportType"):
                raise ValidationError("Report type is required")
            report = container.report_service.build(body.get("reportType"))
            exported = container.report_exporter.export(report, body.get("format"))
            return app.response_class(
                exported.content,
                mimetype=exported.mimetype,
                headers={
                    "Content-Disposition": f"attachment; filename={exported.filename}",
                    "Cache-Control": "no-cache, no-store, must-revalidate",
                },
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return internal_error_response("/api/reports/export", e)
