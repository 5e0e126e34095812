from __future__ import annotations

from datetime import timedelta

from flask import Flask, g, jsonify, session

from ..common.web import json_body, login_required, roles_required
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    auth = login_required(container)

    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(str(data.get("email") or ""), str(data.get("password") or ""))

        session.clear()
        session.permanent = bool(data.get("remember", True))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
        session["user_id"] = s_user.user_id
        session["role"] = s_user.role

        return jsonify(
            {
                "user": {
                    "id": s_user.user_id,
                    "name": s_user.name,
                    "email": s_user.email,
                    "role": s_user.role,
                    "active": s_user.active,
                }
            }
        )

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"ok": True})

    @app.route("/users", methods=["GET"], endpoint="list_users")
    @auth
    @roles_required(Role.ADMIN, Role.SUPERVISOR)
    def list_users():
        users = container.user_service.list_users(actor=g.actor)
        return jsonify([u.public_dict() for u in users])
