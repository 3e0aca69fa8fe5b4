"""SQLAlchemy powered access to the forex tables."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Mapping

from sqlalchemy import create_engine, func, select, text
from sqlalchemy.engine import URL

from mae_forex.db import FOREX_TABLE
from mae_forex.db.base_backend import BackendStrategy
from mae_forex.db.schema import get_table
from mae_forex.utils.logger import get_logger

if TYPE_CHECKING:  # pragma: no cover - type checker helper
    from sqlalchemy.engine import Engine

LOGGER = get_logger(__name__)


class RelationalBackend(BackendStrategy):
    """Reads the cutoff date and appends rows to one forex table.

    Every insert commits on its own, so a failing row never undoes the rows
    written before it.
    """

    def __init__(
        self, url: str | URL, table_name: str = FOREX_TABLE, *, label: str = "database"
    ) -> None:
        self.url = url
        self.table = get_table(table_name)
        self.label = label
        self._engine_instance: Engine | None = None

    def _get_engine(self) -> Engine:
        if self._engine_instance is None:
            self._engine_instance = create_engine(self.url, future=True)
        return self._engine_instance

    def ensure_connection(self) -> None:
        with self._get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
        LOGGER.info("Connected to %s database", self.label)

    def ensure_schema(self) -> None:
        LOGGER.info("Ensuring %s table exists", self.table.name)
        self.table.create(self._get_engine(), checkfirst=True)

    def latest_date(self) -> date | None:
        with self._get_engine().connect() as connection:
            value = connection.execute(select(func.max(self.table.c.date))).scalar()
        if value is None:
            return None
        return _normalise_date(value)

    def insert_row(self, row: Mapping[str, Any]) -> None:
        values = {column.name: row.get(column.name) for column in self.table.columns}
        with self._get_engine().begin() as connection:
            connection.execute(self.table.insert(), values)

    def fetch_after(self, cutoff: date) -> list[dict[str, Any]]:
        stmt = select(self.table).where(self.table.c.date > cutoff).order_by(self.table.c.date)
        with self._get_engine().connect() as connection:
            return [dict(row._mapping) for row in connection.execute(stmt)]

    def close(self) -> None:
        if self._engine_instance is not None:
            self._engine_instance.dispose()
            self._engine_instance = None


def _normalise_date(value: object) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


__all__ = ["RelationalBackend"]
