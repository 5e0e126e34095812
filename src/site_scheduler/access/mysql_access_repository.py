from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SiteAccess, SiteAccessView
from .repository import AccessGrantRepository


class MySQLAccessGrantRepository(AccessGrantRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_granted_sites(self, user_id: int) -> set[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT site_id FROM site_access WHERE user_id=%s", (int(user_id),))
            return {int(r["site_id"]) for r in fetchall(cur)}

    def is_granted(self, user_id: int, site_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS ok FROM site_access WHERE user_id=%s AND site_id=%s",
                (int(user_id), int(site_id)),
            )
            return fetchone(cur) is not None

    def grant(self, *, user_id: int, site_id: int) -> SiteAccess:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO site_access(user_id, site_id)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE user_id=VALUES(user_id)
                """,
                (int(user_id), int(site_id)),
            )
            cur.execute(
                "SELECT access_id, user_id, site_id, created_at FROM site_access WHERE user_id=%s AND site_id=%s",
                (int(user_id), int(site_id)),
            )
            r = fetchone(cur)
            return SiteAccess(
                access_id=int(r["access_id"]),
                user_id=int(r["user_id"]),
                site_id=int(r["site_id"]),
                created_at=r.get("created_at"),
            )

    def revoke(self, *, user_id: int, site_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM site_access WHERE user_id=%s AND site_id=%s",
                (int(user_id), int(site_id)),
            )
            return cur.rowcount > 0

    def list_all(self) -> Sequence[SiteAccessView]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.access_id, u.user_id, u.name AS user_name, u.email AS user_email,
                       s.site_id, s.name AS site_name
                FROM site_access a
                JOIN users u ON u.user_id = a.user_id
                JOIN sites s ON s.site_id = a.site_id
                ORDER BY a.access_id DESC
                """
            )
            return [
                SiteAccessView(
                    access_id=int(r["access_id"]),
                    user_id=int(r["user_id"]),
                    user_name=r["user_name"],
                    user_email=r["user_email"],
                    site_id=int(r["site_id"]),
                    site_name=r["site_name"],
                )
                for r in fetchall(cur)
            ]
