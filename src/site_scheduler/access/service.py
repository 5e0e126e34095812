from __future__ import annotations

import logging
from typing import Sequence

from ..core.enums import Role
from ..core.exceptions import Forbidden, NotFound, ValidationError
from ..sites.repository import SiteRepository
from ..users.repository import UserRepository
from .model import SiteAccess, SiteAccessView
from .repository import AccessGrantRepository
from .scope import Actor

logger = logging.getLogger(__name__)


class AccessService:
    """Use case: admins grant and revoke supervisor access to sites."""

    def __init__(self, grants: AccessGrantRepository, users: UserRepository, sites: SiteRepository):
        self._grants = grants
        self._users = users
        self._sites = sites

    @staticmethod
    def _require_admin(actor: Actor) -> None:
        if actor.role != Role.ADMIN:
            raise Forbidden("Only admins can manage site access")

    def list_all(self, *, actor: Actor) -> Sequence[SiteAccessView]:
        self._require_admin(actor)
        return self._grants.list_all()

    def grant(self, *, actor: Actor, user_id: int, site_id: int) -> SiteAccess:
        self._require_admin(actor)

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFound(f"User #{user_id} not found")
        if user.role != Role.SUPERVISOR:
            raise ValidationError("Site access can only be granted to supervisors")
        if not self._sites.get_by_id(int(site_id)):
            raise NotFound(f"Site #{site_id} not found")

        access = self._grants.grant(user_id=int(user_id), site_id=int(site_id))
        logger.info("Admin #%s granted user #%s access to site #%s", actor.user_id, user_id, site_id)
        return access

    def revoke(self, *, actor: Actor, user_id: int, site_id: int) -> None:
        self._require_admin(actor)

        if not self._grants.revoke(user_id=int(user_id), site_id=int(site_id)):
            raise NotFound(f"No access grant for user #{user_id} on site #{site_id}")
        logger.info("Admin #%s revoked user #%s access to site #%s", actor.user_id, user_id, site_id)
