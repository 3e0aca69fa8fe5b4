"""SQLite-backed forex tables shared by the persistence and job tests."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from mae_forex.db import FOREX_TABLE, SNAPSHOT_TABLE
from mae_forex.db.relational_backend import RelationalBackend


def make_backend(path: Path, table_name: str = FOREX_TABLE) -> RelationalBackend:
    backend = RelationalBackend(f"sqlite:///{path}", table_name)
    backend.ensure_schema()
    return backend


@pytest.fixture
def forex_backend(tmp_path: Path) -> Iterator[RelationalBackend]:
    backend = make_backend(tmp_path / "forex.db")
    try:
        yield backend
    finally:
        backend.close()


@pytest.fixture
def snapshot_backend(tmp_path: Path) -> Iterator[RelationalBackend]:
    backend = make_backend(tmp_path / "snapshot.db", SNAPSHOT_TABLE)
    try:
        yield backend
    finally:
        backend.close()
