from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ShiftStatus
from .interval import TimeInterval


@dataclass(frozen=True)
class Shift:
    """Domain entity: a recurring weekly work slot for one employee at one site."""

    shift_id: int
    employee_id: int
    site_id: int
    day_of_week: int
    start_min: int
    end_min: int
    status: ShiftStatus = ShiftStatus.PLANNED
    note: Optional[str] = None

    @property
    def interval(self) -> TimeInterval:
        return TimeInterval(self.start_min, self.end_min)

    @property
    def duration_minutes(self) -> int:
        return self.end_min - self.start_min


@dataclass(frozen=True)
class NewShift:
    """Candidate shift submitted for creation (no id yet)."""

    employee_id: int
    site_id: int
    day_of_week: int
    start_min: int
    end_min: int
    status: ShiftStatus = ShiftStatus.PLANNED
    note: Optional[str] = None

    @property
    def interval(self) -> TimeInterval:
        return TimeInterval(self.start_min, self.end_min)


@dataclass(frozen=True)
class ShiftPatch:
    """Partial update; ``None`` means "keep the current value"."""

    employee_id: Optional[int] = None
    site_id: Optional[int] = None
    day_of_week: Optional[int] = None
    start_min: Optional[int] = None
    end_min: Optional[int] = None
    status: Optional[ShiftStatus] = None
    note: Optional[str] = None

    def fields(self) -> dict:
        return {k: v for k, v in self.__dict__.items() if v is not None}


@dataclass(frozen=True)
class ShiftView:
    """Shift joined with employee and site details for listings and exports."""

    shift: Shift
    employee_name: str
    employee_email: str
    hourly_rate_cents: Optional[int]
    site_name: str
    site_city: Optional[str]
