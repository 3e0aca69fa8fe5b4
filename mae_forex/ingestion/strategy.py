"""Abstractions for pluggable normalisation strategies."""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from mae_forex.ingestion.models import ForexQuote, TitleFields


class TitleParser(Protocol):
    """Contract for splitting a legacy instrument title into its parts.

    Implementations never raise: a title they cannot read yields an empty
    :class:`TitleFields`.
    """

    def parse(self, title: str) -> TitleFields:
        ...  # pragma: no cover - protocol definition


class QuoteNormalizer(Protocol):
    """Contract for turning one raw API record into a :class:`ForexQuote`.

    Implementations raise ``InvalidRecordError`` only when the quote date
    cannot be parsed; optional fields fall back to ``None``.
    """

    def normalize(self, raw: Mapping[str, Any]) -> ForexQuote:
        ...  # pragma: no cover - protocol definition

    def describe(self, raw: Mapping[str, Any]) -> str:
        ...  # pragma: no cover - protocol definition


__all__ = ["QuoteNormalizer", "TitleParser"]
