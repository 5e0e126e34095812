from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/sites", methods=["GET"], endpoint="list_sites")
    @login_required(container)
    def list_sites():
        return jsonify([s.to_dict() for s in container.sites_repo.list_all()])
