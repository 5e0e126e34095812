from __future__ import annotations

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import ValidationError


def format_minutes(minutes: int) -> str:
    """Format a minute-of-day as HH:MM (1440 renders as 24:00)."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_hhmm(value: str) -> int:
    """Parse HH:MM into a minute-of-day."""
    parts = (value or "").strip().split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValidationError("Time must be HH:MM")
    hours, minutes = int(parts[0]), int(parts[1])
    total = hours * 60 + minutes
    if minutes >= 60 or total > MINUTES_PER_DAY:
        raise ValidationError("Time must be HH:MM")
    return total
