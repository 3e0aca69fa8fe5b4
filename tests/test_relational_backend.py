"""Relational backend tests using SQLite."""

from datetime import date, datetime
from pathlib import Path

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from mae_forex.config import DatabaseSettings
from mae_forex.db import FOREX_TABLE, SNAPSHOT_TABLE
from mae_forex.db.postgres_backend import PostgresBackend, build_url
from mae_forex.db.relational_backend import RelationalBackend, _normalise_date
from mae_forex.db.schema import get_table
from mae_forex.ingestion.normalizers import CotizacionesNormalizer
from payloads import cotizacion_record


def test_latest_date_is_none_for_empty_table(forex_backend: RelationalBackend) -> None:
    forex_backend.ensure_connection()
    assert forex_backend.latest_date() is None


def test_insert_and_fetch_after(forex_backend: RelationalBackend) -> None:
    normalizer = CotizacionesNormalizer()
    for fecha in ("2024-11-13T00:00:00", "2024-11-15T00:00:00", "2024-11-14T00:00:00"):
        forex_backend.insert_row(normalizer.normalize(cotizacion_record(fecha=fecha)).as_row())

    assert forex_backend.latest_date() == date(2024, 11, 15)
    rows = forex_backend.fetch_after(date(2024, 11, 13))
    assert [row["date"] for row in rows] == [date(2024, 11, 14), date(2024, 11, 15)]
    assert rows[0]["instrumento"] == "USB / ART 000"
    assert rows[0]["settle_date"] == date(2024, 11, 15)
    assert rows[0]["hora"] is None


def test_snapshot_table_ignores_extended_columns(snapshot_backend: RelationalBackend) -> None:
    quote = CotizacionesNormalizer().normalize(cotizacion_record())
    snapshot_backend.insert_row(quote.as_row())
    (row,) = snapshot_backend.fetch_after(date(2024, 1, 1))
    assert set(row) == {column.name for column in get_table(SNAPSHOT_TABLE).columns}
    assert row["cotizacion"] == 1043.5


def test_failed_insert_does_not_roll_back_earlier_rows(forex_backend: RelationalBackend) -> None:
    quote = CotizacionesNormalizer().normalize(cotizacion_record())
    forex_backend.insert_row(quote.as_row())
    with pytest.raises(IntegrityError):
        forex_backend.insert_row({**quote.as_row(), "date": None})
    assert len(forex_backend.fetch_after(date(2024, 1, 1))) == 1


def test_unreachable_database_raises_operational_error(tmp_path: Path) -> None:
    backend = RelationalBackend(f"sqlite:///{tmp_path / 'missing' / 'forex.db'}")
    try:
        with pytest.raises(OperationalError):
            backend.ensure_connection()
    finally:
        backend.close()


def test_unknown_table_is_rejected() -> None:
    with pytest.raises(ValueError):
        RelationalBackend("sqlite://", "forex_rates")


def test_postgres_backend_builds_url_from_settings() -> None:
    settings = DatabaseSettings(
        user="mae", password="s3cret", host="db.local", port=15432, name="mercado", label="gcloud"
    )
    url = build_url(settings)
    assert url.drivername == "postgresql+psycopg2"
    assert (url.username, url.password, url.host, url.port, url.database) == (
        "mae",
        "s3cret",
        "db.local",
        15432,
        "mercado",
    )
    backend = PostgresBackend.from_settings(settings, FOREX_TABLE)
    assert backend.label == "gcloud"
    assert backend.table.name == FOREX_TABLE


def test_normalise_date_handles_multiple_input_types() -> None:
    assert _normalise_date(date(2024, 5, 1)) == date(2024, 5, 1)
    assert _normalise_date(datetime(2024, 5, 2, 15, 0)) == date(2024, 5, 2)
    assert _normalise_date("2024-05-03") == date(2024, 5, 3)
