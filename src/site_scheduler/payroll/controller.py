from __future__ import annotations

import csv
import io

from flask import Flask, Response, g, jsonify

from ..common.web import login_required, roles_required
from ..container import Container
from ..core.constants import HOURS_EXPORT_FILENAME, HOURS_EXPORT_HEADERS
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    auth = login_required(container)
    managers_only = roles_required(Role.ADMIN, Role.SUPERVISOR)

    @app.route("/payroll/summary", methods=["GET"], endpoint="payroll_summary")
    @auth
    @managers_only
    def payroll_summary():
        rows = container.payroll_report_service.summary(actor=g.actor)
        return jsonify([r.to_dict() for r in rows])

    @app.route("/export/hours.csv", methods=["GET"], endpoint="export_hours")
    @auth
    @managers_only
    def export_hours():
        rows = container.payroll_report_service.hours_export(actor=g.actor)

        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=list(HOURS_EXPORT_HEADERS), quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writeheader()
        writer.writerows(rows)

        return Response(
            buf.getvalue(),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={HOURS_EXPORT_FILENAME}"},
        )
