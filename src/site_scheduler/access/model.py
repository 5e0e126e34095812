from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class SiteAccess:
    """Grant allowing a supervisor to manage shifts at one site."""

    access_id: int
    user_id: int
    site_id: int
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class SiteAccessView:
    """Grant joined with user and site names (admin listing)."""

    access_id: int
    user_id: int
    user_name: str
    user_email: str
    site_id: int
    site_name: str
