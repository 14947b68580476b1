from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_mapping(cls, db_config: Mapping) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "registration_db")),
        )


class DatabaseConnection:
    """DB connection factory owned by the application container.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    One instance is built in ``create_app`` and handed to every repository.
    """

    def __init__(self, config: DBConfig, *, connect_timeout: int = 30):
        self._config = config
        self._connect_timeout = int(connect_timeout)

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=self._connect_timeout,
        )

    def ping(self) -> bool:
        conn = self.connect()
        try:
            cur = conn.cursor()
            try:
                cur.execute("SELECT 1")
                cur.fetchall()
            finally:
                cur.close()
            return True
        finally:
            conn.close()
