from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def transaction(conn_factory: DatabaseConnection) -> Iterator[None]:
    """Run the enclosed repository calls on one connection and commit once.

    Nested use joins the outer transaction.
    """

    if conn_factory.current is not None:
        yield
        return

    conn = conn_factory.connect()
    conn_factory.bind(conn)
    try:
        conn.start_transaction()
        yield
        conn.commit()
    except Exception:
        logger.debug("Rolling back transaction on %s", conn_factory.describe())
        conn.rollback()
        raise
    finally:
        conn_factory.unbind()
        conn.close()


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    shared = conn_factory.current
    if shared is not None:
        cur = shared.cursor(dictionary=dictionary)
        try:
            yield shared, cur
        finally:
            cur.close()
        return

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def in_transaction(conn_factory: DatabaseConnection) -> bool:
    return conn_factory.current is not None


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values) -> str:
    """Placeholder list for ``IN (...)``; callers must not pass an empty list."""
    return ", ".join(["%s"] * len(values))
