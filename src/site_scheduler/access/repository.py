from __future__ import annotations

from typing import Protocol, Sequence

from .model import SiteAccess, SiteAccessView


class AccessGrantRepository(Protocol):
    """Site access grants (supervisor -> site)."""

    def list_granted_sites(self, user_id: int) -> set[int]:
        raise NotImplementedError

    def is_granted(self, user_id: int, site_id: int) -> bool:
        raise NotImplementedError

    def grant(self, *, user_id: int, site_id: int) -> SiteAccess:
        """Create the grant, or return the existing one (idempotent)."""

        raise NotImplementedError

    def revoke(self, *, user_id: int, site_id: int) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[SiteAccessView]:
        raise NotImplementedError
