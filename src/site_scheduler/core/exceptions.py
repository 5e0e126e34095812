from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidInterval(ValidationError):
    """Raised when a start/end minute pair is malformed or inverted."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class Forbidden(AuthorizationError):
    """Raised when a capability check fails for a specific record or site."""


class NotFound(DomainError):
    """Raised when a referenced shift, site, user or access grant is absent."""


class OverlapConflict(DomainError):
    """Raised when a candidate shift collides with an existing one."""

    def __init__(self, message: str, *, conflicting: Any = None):
        super().__init__(message)
        self.conflicting = conflicting


class DeliveryFailed(DomainError):
    """Raised by a notification sink when a message could not be delivered."""
