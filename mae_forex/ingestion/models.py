"""Data models shared across ingestion modules."""

from __future__ import annotations

import datetime as dt
from dataclasses import asdict, dataclass
from typing import Any

SNAPSHOT_COLUMNS: tuple[str, ...] = (
    "date",
    "rueda",
    "instrumento",
    "currency_out",
    "currency_in",
    "settle",
    "settle_date",
    "monto",
    "cotizacion",
    "hora",
)

FOREX_COLUMNS: tuple[str, ...] = SNAPSHOT_COLUMNS + (
    "descripcion",
    "tipo_emision",
    "codigo_segmento",
    "codigo_plazo",
    "moneda",
    "monto_acumulado",
    "precio_ultimo",
    "ultima_tasa",
    "precio_cierre_anterior",
    "precio_minimo",
    "precio_maximo",
    "open_interest",
    "variacion",
)


@dataclass(slots=True)
class TitleFields:
    """Currency pair and settlement extracted from a legacy instrument title."""

    currency_out: str = ""
    currency_in: str = ""
    settle: int | None = None
    settle_date: dt.date | None = None


@dataclass(slots=True)
class ForexQuote:
    """A single normalised forex quote, one row of the ``forex`` table."""

    date: dt.date
    rueda: str
    instrumento: str
    currency_out: str
    currency_in: str
    settle: int | None = None
    settle_date: dt.date | None = None
    monto: float | None = None
    cotizacion: float | None = None
    hora: dt.time | None = None
    descripcion: str | None = None
    tipo_emision: str | None = None
    codigo_segmento: str | None = None
    codigo_plazo: str | None = None
    moneda: str | None = None
    monto_acumulado: float | None = None
    precio_ultimo: float | None = None
    ultima_tasa: float | None = None
    precio_cierre_anterior: float | None = None
    precio_minimo: float | None = None
    precio_maximo: float | None = None
    open_interest: int | None = None
    variacion: float | None = None

    def as_row(self) -> dict[str, Any]:
        """Return the column mapping for the ``forex`` table."""

        row = asdict(self)
        row["hora"] = _format_hora(self.hora)
        return row

    def as_snapshot_row(self) -> dict[str, Any]:
        """Return the column mapping for the legacy ``forex_snapshot`` table."""

        row = self.as_row()
        return {column: row[column] for column in SNAPSHOT_COLUMNS}


def _format_hora(value: dt.time | None) -> str | None:
    if value is None:
        return None
    return value.strftime("%H:%M:%S")


__all__ = ["ForexQuote", "TitleFields", "FOREX_COLUMNS", "SNAPSHOT_COLUMNS"]
