"""PostgreSQL backend strategy."""

from __future__ import annotations

from sqlalchemy.engine import URL

from mae_forex.config import DatabaseSettings
from mae_forex.db import FOREX_TABLE
from mae_forex.db.relational_backend import RelationalBackend


def build_url(settings: DatabaseSettings) -> URL:
    return URL.create(
        "postgresql+psycopg2",
        username=settings.user,
        password=settings.password or None,
        host=settings.host,
        port=settings.port,
        database=settings.name,
    )


class PostgresBackend(RelationalBackend):
    """Concrete relational backend for PostgreSQL engines."""

    @classmethod
    def from_settings(
        cls, settings: DatabaseSettings, table_name: str = FOREX_TABLE
    ) -> "PostgresBackend":
        return cls(build_url(settings), table_name, label=settings.label)


__all__ = ["PostgresBackend", "build_url"]
