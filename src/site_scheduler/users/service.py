from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from werkzeug.security import check_password_hash

from ..access.scope import Actor
from ..common.validators import require_non_empty
from ..core.exceptions import AuthenticationError, AuthorizationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    name: str
    email: str
    role: str
    active: bool


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = require_non_empty(email, "Email").lower()
        user = self._users.get_by_email(email)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Rejected login for %s", email)
            raise AuthenticationError("Invalid credentials")

        return SessionUser(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            role=user.role.value,
            active=user.is_active,
        )


class UserService:
    """Use case: read user reference data (admin/supervisor)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self, *, actor: Actor) -> Sequence[User]:
        if not actor.is_manager:
            raise AuthorizationError("Only admins and supervisors can list users")
        return self._users.list_all()
