"""Backend strategy interface shared by the forex jobs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Mapping


class BackendStrategy(ABC):
    """Common interface implemented by every database backend."""

    @abstractmethod
    def ensure_connection(self) -> None:
        """Verify the database is reachable; raise if it is not."""

    @abstractmethod
    def ensure_schema(self) -> None:
        """Create the managed table when it does not exist yet."""

    @abstractmethod
    def latest_date(self) -> date | None:
        """Return ``MAX(date)`` of the managed table, ``None`` when empty."""

    @abstractmethod
    def insert_row(self, row: Mapping[str, Any]) -> None:
        """Insert and commit a single row."""

    @abstractmethod
    def fetch_after(self, cutoff: date) -> list[dict[str, Any]]:
        """Return every row strictly after ``cutoff`` ordered by date."""

    def close(self) -> None:  # pragma: no cover - optional cleanup hook
        """Backends may override to release connections/resources."""

    def __enter__(self) -> "BackendStrategy":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["BackendStrategy"]
