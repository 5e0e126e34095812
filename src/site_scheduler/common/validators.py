from __future__ import annotations

from typing import Any

from ..core.constants import FIRST_DAY_OF_WEEK, LAST_DAY_OF_WEEK
from ..core.enums import ShiftStatus
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_int(value: Any, field_name: str) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def require_day_of_week(value: Any) -> int:
    day = require_int(value, "dayOfWeek")
    if not FIRST_DAY_OF_WEEK <= day <= LAST_DAY_OF_WEEK:
        raise ValidationError(f"dayOfWeek must be between {FIRST_DAY_OF_WEEK} and {LAST_DAY_OF_WEEK}")
    return day


def require_status(value: Any) -> ShiftStatus:
    try:
        return ShiftStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown shift status: {value!r}")


def optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
