from __future__ import annotations

from dataclasses import dataclass

import mysql.connector

from ..tenancy.model import TenantContext


@dataclass(frozen=True)
class DBConfig:
    """Server credentials shared by all tenant databases."""

    host: str
    port: int
    user: str
    password: str


class TenantDatabases:
    """DB connection factory, one database per tenant.

    Note: We create short-lived connections per operation; the tenant decides
    which schema the connection points at.
    """

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def from_dict(cls, db_config: dict) -> "TenantDatabases":
        return cls(
            DBConfig(
                host=str(db_config["host"]),
                port=int(db_config.get("port", 3306)),
                user=str(db_config["user"]),
                password=str(db_config["password"]),
            )
        )

    def connect(self, tenant: TenantContext):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=tenant.database,
        )
