from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Site
from .repository import SiteRepository

_COLUMNS = "site_id, name, city, frequency, default_duration_min, notes, created_at"


def _to_site(r: dict) -> Site:
    duration = r.get("default_duration_min")
    return Site(
        site_id=int(r["site_id"]),
        name=r["name"],
        city=r.get("city"),
        frequency=r.get("frequency"),
        default_duration_min=int(duration) if duration is not None else None,
        notes=r.get("notes"),
        created_at=r.get("created_at"),
    )


class MySQLSiteRepository(SiteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, site_id: int) -> Optional[Site]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sites WHERE site_id=%s", (int(site_id),))
            r = fetchone(cur)
            return _to_site(r) if r else None

    def get_many(self, site_ids: Iterable[int]) -> dict[int, Site]:
        ids = sorted({int(s) for s in site_ids})
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sites WHERE site_id IN ({in_clause(ids)})", tuple(ids))
            return {int(r["site_id"]): _to_site(r) for r in fetchall(cur)}

    def list_all(self) -> Sequence[Site]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sites ORDER BY created_at DESC, site_id DESC")
            return [_to_site(r) for r in fetchall(cur)]
