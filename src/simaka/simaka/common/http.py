"""Shared helpers for the JSON controllers: guards and error responses."""
from __future__ import annotations

import logging
from functools import wraps

from flask import current_app, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (ConflictError, 409),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (ValidationError, 400),
)


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def domain_error_response(err: DomainError):
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(err, cls):
            return fail(str(err), status)
    return fail(str(err), 400)


def internal_error_response(where: str, err: Exception):
    logger.exception("Error in %s %s", request.method, where)
    return fail(f"Internal server error: {err}", 500)


def json_body() -> dict:
    """Request body as a dict; malformed or non-object JSON is a 400."""

    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Invalid JSON in request body")
    return body


def json_payload():
    """Request body as a dict or a list; anything else is a 400."""

    body = request.get_json(silent=True)
    if not isinstance(body, (dict, list)):
        raise ValidationError("Invalid JSON in request body")
    return body


def _guards_enabled() -> bool:
    return bool(current_app.config.get("REQUIRE_LOGIN", True))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if _guards_enabled() and "user_id" not in session:
            return fail("Authentication required", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if _guards_enabled():
            if "user_id" not in session:
                return fail("Authentication required", 401)
            if session.get("role") != Role.ADMIN.value:
                return fail("You do not have permission", 403)
        return view(*args, **kwargs)

    return wrapper
