"""Tests covering the incremental load rules."""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping

from sqlalchemy.exc import SQLAlchemyError

from mae_forex.db.relational_backend import RelationalBackend
from mae_forex.ingestion.models import ForexQuote
from mae_forex.ingestion.normalizers import CotizacionesNormalizer, LegacyNormalizer
from mae_forex.jobs.incremental import LoadResult, load_incremental
from payloads import cotizacion_record, legacy_record


class FlakyBackend(RelationalBackend):
    """Fails every insert dated ``failing_date``."""

    def __init__(self, url: str, failing_date: date) -> None:
        super().__init__(url)
        self.failing_date = failing_date

    def insert_row(self, row: Mapping[str, Any]) -> None:
        if row["date"] == self.failing_date:
            raise SQLAlchemyError("duplicate key value violates unique constraint")
        super().insert_row(row)


def test_cutoff_skips_same_day_and_inserts_next_day(forex_backend: RelationalBackend) -> None:
    records = [
        cotizacion_record(fecha="2024-11-14T00:00:00"),
        cotizacion_record(fecha="2024-11-15T00:00:00"),
    ]
    result = load_incremental(
        records, CotizacionesNormalizer(), forex_backend, cutoff=date(2024, 11, 14)
    )
    assert result == LoadResult(inserted=1, skipped=1)
    rows = forex_backend.fetch_after(date(2024, 1, 1))
    assert [row["date"] for row in rows] == [date(2024, 11, 15)]


def test_rerun_against_unchanged_cutoff_inserts_nothing(forex_backend: RelationalBackend) -> None:
    records = [cotizacion_record(fecha="2024-11-15T00:00:00")]
    first = load_incremental(records, CotizacionesNormalizer(), forex_backend, cutoff=None)
    cutoff = forex_backend.latest_date()
    second = load_incremental(records, CotizacionesNormalizer(), forex_backend, cutoff=cutoff)
    assert first.inserted == 1
    assert second == LoadResult(skipped=1)
    assert len(forex_backend.fetch_after(date(2024, 1, 1))) == 1


def test_empty_table_accepts_every_record(forex_backend: RelationalBackend) -> None:
    records = [cotizacion_record(ticker=ticker) for ticker in ("USB$T", "MB$T", "USMEP")]
    result = load_incremental(records, CotizacionesNormalizer(), forex_backend, cutoff=None)
    assert result.inserted == 3
    assert result.total == 3


def test_invalid_fecha_is_dropped_and_batch_continues(forex_backend: RelationalBackend) -> None:
    records = [
        cotizacion_record(fecha="garbage"),
        cotizacion_record(fecha="2024-11-15T00:00:00"),
    ]
    result = load_incremental(records, CotizacionesNormalizer(), forex_backend, cutoff=None)
    assert result.dropped == 1
    assert result.inserted == 1


def test_sentinel_settlement_date_is_stored_as_null(forex_backend: RelationalBackend) -> None:
    records = [cotizacion_record(fechaLiquidacion="0001-01-01T00:00:00")]
    result = load_incremental(records, CotizacionesNormalizer(), forex_backend, cutoff=None)
    assert result.inserted == 1
    (row,) = forex_backend.fetch_after(date(2024, 1, 1))
    assert row["settle_date"] is None


def test_insert_failure_is_counted_and_does_not_abort(tmp_path) -> None:
    backend = FlakyBackend(f"sqlite:///{tmp_path / 'flaky.db'}", failing_date=date(2024, 11, 15))
    backend.ensure_schema()
    try:
        records = [
            cotizacion_record(fecha="2024-11-14T00:00:00"),
            cotizacion_record(fecha="2024-11-15T00:00:00"),
            cotizacion_record(fecha="2024-11-16T00:00:00"),
        ]
        result = load_incremental(records, CotizacionesNormalizer(), backend, cutoff=None)
        assert result == LoadResult(inserted=2, failed=1)
        dates = [row["date"] for row in backend.fetch_after(date(2024, 1, 1))]
        assert dates == [date(2024, 11, 14), date(2024, 11, 16)]
    finally:
        backend.close()


def test_dry_run_counts_without_writing(forex_backend: RelationalBackend) -> None:
    result = load_incremental(
        [cotizacion_record()], CotizacionesNormalizer(), forex_backend, cutoff=None, dry_run=True
    )
    assert result.inserted == 1
    assert forex_backend.latest_date() is None


def test_snapshot_row_builder(snapshot_backend: RelationalBackend) -> None:
    result = load_incremental(
        [legacy_record(), legacy_record(fecha="2024-11-14")],
        LegacyNormalizer(),
        snapshot_backend,
        cutoff=date(2024, 11, 14),
        row_builder=ForexQuote.as_snapshot_row,
    )
    assert result == LoadResult(inserted=1, skipped=1)
    (row,) = snapshot_backend.fetch_after(date(2024, 1, 1))
    assert row["hora"] == "15:04:05"
    assert row["currency_out"] == "USD"
