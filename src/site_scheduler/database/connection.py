from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

import mysql.connector


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "site_scheduler")),
        )


class DatabaseConnection:
    """DB connection factory.

    Note: connections are short-lived (one per operation) unless a
    transaction is open on the current thread, in which case every repository
    call on that thread shares its connection.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._local = threading.local()

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )

    @property
    def current(self):
        """Connection of the transaction open on this thread, if any."""
        return getattr(self._local, "conn", None)

    def bind(self, conn) -> None:
        self._local.conn = conn

    def unbind(self) -> None:
        self._local.conn = None

    def describe(self) -> str:
        c = self._config
        return f"{c.user}@{c.host}:{c.port}/{c.database}"
