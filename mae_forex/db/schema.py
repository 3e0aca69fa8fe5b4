"""Table definitions for the forex tables.

Neither table declares a primary key: the jobs only ever append rows and rely
on the date cutoff rather than a uniqueness constraint.
"""

from __future__ import annotations

from sqlalchemy import Column, Date, Float, Integer, MetaData, String, Table

from mae_forex.db import FOREX_TABLE, SNAPSHOT_TABLE

metadata = MetaData()


def _snapshot_columns() -> list[Column]:
    return [
        Column("date", Date, nullable=False, index=True),
        Column("rueda", String),
        Column("instrumento", String),
        Column("currency_out", String),
        Column("currency_in", String),
        Column("settle", Integer),
        Column("settle_date", Date),
        Column("monto", Float),
        Column("cotizacion", Float),
        Column("hora", String),
    ]


forex_table = Table(
    FOREX_TABLE,
    metadata,
    *_snapshot_columns(),
    Column("descripcion", String),
    Column("tipo_emision", String),
    Column("codigo_segmento", String),
    Column("codigo_plazo", String),
    Column("moneda", String),
    Column("monto_acumulado", Float),
    Column("precio_ultimo", Float),
    Column("ultima_tasa", Float),
    Column("precio_cierre_anterior", Float),
    Column("precio_minimo", Float),
    Column("precio_maximo", Float),
    Column("open_interest", Integer),
    Column("variacion", Float),
)

snapshot_table = Table(SNAPSHOT_TABLE, metadata, *_snapshot_columns())

TABLES: dict[str, Table] = {
    FOREX_TABLE: forex_table,
    SNAPSHOT_TABLE: snapshot_table,
}


def get_table(name: str) -> Table:
    try:
        return TABLES[name]
    except KeyError:
        raise ValueError(f"Unsupported forex table: {name}") from None


__all__ = ["forex_table", "get_table", "metadata", "snapshot_table"]
