from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.validators import require_int
from ..common.web import json_body, login_required, roles_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    auth = login_required(container)

    def _pair() -> tuple[int, int]:
        data = json_body()
        return require_int(data.get("userId"), "userId"), require_int(data.get("siteId"), "siteId")

    @app.route("/access", methods=["GET"], endpoint="list_access")
    @auth
    @roles_required(Role.ADMIN)
    def list_access():
        rows = container.access_service.list_all(actor=g.actor)
        return jsonify(
            [
                {
                    "id": a.access_id,
                    "userId": a.user_id,
                    "siteId": a.site_id,
                    "user": {"id": a.user_id, "name": a.user_name, "email": a.user_email},
                    "site": {"id": a.site_id, "name": a.site_name},
                }
                for a in rows
            ]
        )

    @app.route("/access", methods=["POST"], endpoint="grant_access")
    @auth
    @roles_required(Role.ADMIN)
    def grant_access():
        user_id, site_id = _pair()
        access = container.access_service.grant(actor=g.actor, user_id=user_id, site_id=site_id)
        return jsonify({"id": access.access_id, "userId": access.user_id, "siteId": access.site_id}), 201

    @app.route("/access", methods=["DELETE"], endpoint="revoke_access")
    @auth
    @roles_required(Role.ADMIN)
    def revoke_access():
        user_id, site_id = _pair()
        container.access_service.revoke(actor=g.actor, user_id=user_id, site_id=site_id)
        return jsonify({"ok": True})
