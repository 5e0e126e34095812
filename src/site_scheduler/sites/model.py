from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Site:
    """Domain entity: a cleaning site (client location)."""

    site_id: int
    name: str
    city: Optional[str] = None
    frequency: Optional[str] = None
    default_duration_min: Optional[int] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.site_id,
            "name": self.name,
            "city": self.city,
            "frequency": self.frequency,
            "defaultDurationMin": self.default_duration_min,
            "notes": self.notes,
        }
