"""Creation of a checked database engine."""

from __future__ import annotations

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from bookingsys.config import DBConfig


class DatabaseError(RuntimeError):
    """Raised when the database cannot be reached."""


def connect(url: str) -> Engine:
    """Create an engine for url and check that it answers a query."""
    try:
        engine = create_engine(url)
    except (SQLAlchemyError, ImportError, ValueError) as exc:
        raise DatabaseError(f"failed to create connection pool: {exc}") from exc

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, ImportError, OSError) as exc:
        engine.dispose()
        raise DatabaseError(f"failed to connect to database: {exc}") from exc
    return engine


def create_engine_from_config(cfg: DBConfig) -> Engine:
    """Create a checked engine for the PostgreSQL settings in cfg."""
    return connect(cfg.url())