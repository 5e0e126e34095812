from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object, no DB access code.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    is_active: bool = True
    hourly_rate_cents: Optional[int] = None
    employment_type: Optional[str] = None
    phone: Optional[str] = None

    def public_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "role": self.role.value,
            "active": self.is_active,
            "employmentType": self.employment_type,
            "hourlyRate": self.hourly_rate_cents,
        }
