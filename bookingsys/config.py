"""Database connection settings read from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import quote


@dataclass(frozen=True)
class DBConfig:
    """Connection parameters for the PostgreSQL database."""

    host: str = ""
    port: str = ""
    user: str = ""
    password: str = ""
    name: str = ""

    def url(self) -> str:
        """Return the connection URL for these settings."""
        user = quote(self.user, safe="")
        secret = quote(self.password, safe="")
        return (
            f"postgresql://{user}:{secret}@{self.host}:{self.port}/{self.name}"
            "?sslmode=disable"
        )


def load_db_config(environ: Mapping[str, str] | None = None) -> DBConfig:
    """Build a DBConfig from DB_* variables; missing ones become empty strings."""
    env = os.environ if environ is None else environ
    return DBConfig(
        host=env.get("DB_HOST", ""),
        port=env.get("DB_PORT", ""),
        user=env.get("DB_USER", ""),
        password=env.get("DB_PASSWORD", ""),
        name=env.get("DB_NAME", ""),
    )