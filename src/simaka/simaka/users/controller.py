from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import domain_error_response, fail, internal_error_response, json_body
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        try:
            body = json_body()
            s_user = container.auth_service.authenticate(body.get("email"), body.get("password"))

            session.clear()
            session["user_id"] = s_user.user_id
            session["email"] = s_user.email
            session["name"] = s_user.name
            session["role"] = s_user.role.value
            session["teacher_id"] = s_user.teacher_id

            return jsonify({"success": True, "user": s_user.to_dict()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return internal_error_response("/api/auth/login", e)

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    def auth_me():
        if "user_id" not in session:
            return fail("Authentication required", 401)
        return jsonify(
            {
                "success": True,
                "user": {
                    "id": session["user_id"],
                    "email": session.get("email"),
                    "name": session.get("name"),
                    "role": session.get("role"),
                    "teacherId": session.get("teacher_id"),
                },
            }
        )

    @app.route("/api/init-users", methods=["POST"], endpoint="init_users")
    def init_users():
        try:
            created = container.user_service.init_default_users()
            if not created:
                return jsonify({"success": True, "message": "Users already initialized", "users": []})
            return jsonify(
                {
                    "success": True,
                    "message": "Users initialized successfully",
                    "users": [{"email": u.email, "role": u.role.value} for u in created],
                }
            )
        except DomainError as e:
            return domain_error_response(e)
        except Exception as e:
            return internal_error_response("/api/init-users", e)
