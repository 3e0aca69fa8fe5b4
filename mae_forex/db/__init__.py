"""Persistence layer for the forex tables."""

from __future__ import annotations

from datetime import date
from typing import Final

__all__ = ["FOREX_TABLE", "SNAPSHOT_TABLE", "EPOCH_SENTINEL"]

FOREX_TABLE: Final[str] = "forex"
SNAPSHOT_TABLE: Final[str] = "forex_snapshot"

# Cutoff used by the sync job when the destination table is still empty.
EPOCH_SENTINEL: Final[date] = date(1900, 1, 1)
