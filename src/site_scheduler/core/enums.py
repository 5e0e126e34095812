from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "ADMIN"
    SUPERVISOR = "SUPERVISOR"
    EMPLOYEE = "EMPLOYEE"


class ShiftStatus(str, Enum):
    """Shift lifecycle: PLANNED -> CONFIRMED -> DONE."""

    PLANNED = "PLANNED"
    CONFIRMED = "CONFIRMED"
    DONE = "DONE"
