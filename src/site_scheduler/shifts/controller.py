from __future__ import annotations

from typing import Any, Optional

from flask import Flask, g, jsonify

from ..common.time_utils import parse_hhmm
from ..common.validators import optional_text, require_int, require_status
from ..common.web import json_body, login_required, roles_required
from ..container import Container
from ..core.enums import Role, ShiftStatus
from ..core.exceptions import ValidationError
from .model import NewShift, Shift, ShiftPatch, ShiftView


def shift_to_dict(shift: Shift) -> dict:
    return {
        "id": shift.shift_id,
        "userId": shift.employee_id,
        "siteId": shift.site_id,
        "dayOfWeek": shift.day_of_week,
        "startMin": shift.start_min,
        "endMin": shift.end_min,
        "status": shift.status.value,
        "checklist": shift.note,
    }


def view_to_dict(view: ShiftView) -> dict:
    out = shift_to_dict(view.shift)
    out["user"] = {
        "id": view.shift.employee_id,
        "name": view.employee_name,
        "email": view.employee_email,
        "hourlyRate": view.hourly_rate_cents,
    }
    out["site"] = {"id": view.shift.site_id, "name": view.site_name, "city": view.site_city}
    return out


def _minutes(data: dict, key: str, hhmm_key: str) -> Optional[int]:
    # Accept either minutes (startMin) or a clock string (start: "08:30").
    if data.get(key) is not None:
        return require_int(data[key], key)
    if data.get(hhmm_key) is not None:
        return parse_hhmm(str(data[hhmm_key]))
    return None


def _optional_int(data: dict, key: str) -> Optional[int]:
    value: Any = data.get(key)
    return require_int(value, key) if value is not None else None


def parse_new_shift(data: dict) -> NewShift:
    start_min = _minutes(data, "startMin", "start")
    end_min = _minutes(data, "endMin", "end")
    for name, value in (("userId", data.get("userId")), ("siteId", data.get("siteId")), ("dayOfWeek", data.get("dayOfWeek"))):
        if value is None:
            raise ValidationError(f"{name} is required")
    if start_min is None or end_min is None:
        raise ValidationError("startMin and endMin are required")

    return NewShift(
        employee_id=require_int(data["userId"], "userId"),
        site_id=require_int(data["siteId"], "siteId"),
        day_of_week=require_int(data["dayOfWeek"], "dayOfWeek"),
        start_min=start_min,
        end_min=end_min,
        status=require_status(data.get("status") or ShiftStatus.PLANNED.value),
        note=optional_text(data.get("checklist")),
    )


def parse_patch(data: dict) -> ShiftPatch:
    status = data.get("status")
    return ShiftPatch(
        employee_id=_optional_int(data, "userId"),
        site_id=_optional_int(data, "siteId"),
        day_of_week=_optional_int(data, "dayOfWeek"),
        start_min=_minutes(data, "startMin", "start"),
        end_min=_minutes(data, "endMin", "end"),
        status=require_status(status) if status is not None else None,
        note=optional_text(data.get("checklist")),
    )


def register(app: Flask, container: Container) -> None:
    auth = login_required(container)
    managers_only = roles_required(Role.ADMIN, Role.SUPERVISOR)

    @app.route("/shifts", methods=["GET"], endpoint="list_shifts")
    @auth
    def list_shifts():
        views = container.scheduling_service.list_visible(g.actor)
        return jsonify([view_to_dict(v) for v in views])

    @app.route("/shifts", methods=["POST"], endpoint="create_shift")
    @auth
    @managers_only
    def create_shift():
        candidate = parse_new_shift(json_body())
        shift = container.scheduling_service.create_shift(candidate, g.actor)
        return jsonify(shift_to_dict(shift)), 201

    @app.route("/shifts/<int:shift_id>", methods=["PATCH"], endpoint="update_shift")
    @auth
    @managers_only
    def update_shift(shift_id: int):
        patch = parse_patch(json_body())
        shift = container.scheduling_service.update_shift(shift_id, patch, g.actor)
        return jsonify(shift_to_dict(shift))

    @app.route("/shifts/<int:shift_id>", methods=["DELETE"], endpoint="delete_shift")
    @auth
    @managers_only
    def delete_shift(shift_id: int):
        container.scheduling_service.delete_shift(shift_id, g.actor)
        return jsonify({"ok": True})

    @app.route("/shifts/<int:shift_id>/confirm", methods=["PATCH"], endpoint="confirm_shift")
    @auth
    def confirm_shift(shift_id: int):
        shift = container.scheduling_service.confirm_own_shift(shift_id, g.actor)
        return jsonify(shift_to_dict(shift))
