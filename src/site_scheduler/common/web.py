"""Flask glue shared by the controllers: session actor, guards, error mapping."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any

from flask import Flask, g, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFound,
    OverlapConflict,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFound, 404),
    (OverlapConflict, 409),
)


def error_response(message: str, status: int, **extra: Any):
    payload = {"error": message}
    payload.update(extra)
    return jsonify(payload), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(e, error_type):
                extra = {}
                if isinstance(e, OverlapConflict) and e.conflicting is not None:
                    extra["conflictingShiftId"] = getattr(e.conflicting, "shift_id", None)
                return error_response(str(e), status, **extra)
        logger.error("Unmapped domain error: %s", e)
        return error_response(str(e), 400)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        # Let Flask render its own HTTP errors (404 routes, 405, ...).
        code = getattr(e, "code", None)
        if isinstance(code, int):
            return error_response(getattr(e, "description", str(e)), code)
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if app.config.get("DEBUG"):
            return error_response(f"Internal error: {e}", 500)
        return error_response("Internal error", 500)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("JSON object expected")
    return data


def login_required(container):
    """Require a session user; resolves ``g.actor`` once per request."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return error_response("Unauthorized", 401)
            # Role and active flag come from the stored user, not the session.
            user = container.users_repo.get_by_id(int(session["user_id"]))
            if not user or not user.is_active:
                session.clear()
                return error_response("Unauthorized", 401)
            g.actor = container.scope_resolver.resolve(user.user_id, user.role)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def roles_required(*roles: Role):
    allowed = {Role(r) for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if g.actor.role not in allowed:
                return error_response("Forbidden", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator
