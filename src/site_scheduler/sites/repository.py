from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Site


class SiteRepository(Protocol):
    def get_by_id(self, site_id: int) -> Optional[Site]:
        raise NotImplementedError

    def get_many(self, site_ids: Iterable[int]) -> dict[int, Site]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Site]:
        """All sites, newest first."""

        raise NotImplementedError
