"""Batch jobs that load MAE forex market data into PostgreSQL."""

from __future__ import annotations

from importlib import metadata as importlib_metadata

from mae_forex.ingestion.derivation import (
    build_instrumento,
    derive_currency_in,
    derive_currency_out,
    derive_rueda,
)
from mae_forex.ingestion.models import ForexQuote, TitleFields

__all__ = [
    "__version__",
    "ForexQuote",
    "TitleFields",
    "build_instrumento",
    "derive_currency_in",
    "derive_currency_out",
    "derive_rueda",
]

try:
    __version__ = importlib_metadata.version("mae-forex")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"
