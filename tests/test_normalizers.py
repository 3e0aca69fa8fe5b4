from __future__ import annotations

from datetime import date, time

import pytest

from payloads import cotizacion_record, historico_detail, legacy_record
from mae_forex.ingestion.models import FOREX_COLUMNS, SNAPSHOT_COLUMNS, TitleFields
from mae_forex.ingestion.normalizers import (
    CotizacionesNormalizer,
    HistoricoNormalizer,
    InvalidRecordError,
    LegacyNormalizer,
)


def test_cotizaciones_normalizer_derives_legacy_codes() -> None:
    quote = CotizacionesNormalizer().normalize(cotizacion_record())

    assert quote.date == date(2024, 11, 15)
    assert quote.rueda == "CAM1"
    assert quote.instrumento == "USB / ART 000"
    assert quote.currency_out == "USB"
    assert quote.currency_in == "ART"
    assert quote.settle == 0
    assert quote.settle_date == date(2024, 11, 15)
    assert quote.monto == 150.0
    assert quote.cotizacion == 1043.5
    assert quote.hora is None
    assert quote.monto_acumulado == 156525.0
    assert quote.precio_cierre_anterior == 1040.25
    assert quote.moneda == "T"
    assert quote.open_interest == 0


def test_cotizaciones_normalizer_keeps_unknown_values() -> None:
    quote = CotizacionesNormalizer().normalize(
        cotizacion_record(ticker="USMEP", moneda="D", segmento="Otro", plazo="24hs")
    )
    assert quote.instrumento == "USMEP / D 24hs"
    assert quote.rueda == "Otro"
    assert quote.settle is None


def test_optional_fields_fall_back_to_none() -> None:
    raw = cotizacion_record(fechaLiquidacion="0001-01-01T00:00:00", precioMinimo="n/a")
    del raw["openInterest"]
    quote = CotizacionesNormalizer().normalize(raw)
    assert quote.settle_date is None
    assert quote.precio_minimo is None
    assert quote.open_interest is None


def test_invalid_fecha_raises_invalid_record() -> None:
    with pytest.raises(InvalidRecordError):
        CotizacionesNormalizer().normalize(cotizacion_record(fecha="15-11-2024"))
    with pytest.raises(InvalidRecordError):
        HistoricoNormalizer().normalize(historico_detail(fecha=None))


def test_historico_normalizer_maps_history_field_names() -> None:
    quote = HistoricoNormalizer().normalize(historico_detail())

    assert quote.date == date(2024, 11, 11)
    assert quote.rueda == "CAM2"
    assert quote.instrumento == "USB / ART 001"
    assert quote.settle == 1
    assert quote.settle_date is None
    assert quote.monto == 42.0
    assert quote.monto_acumulado == 43827.0
    assert quote.precio_ultimo == 1044.0
    assert quote.precio_minimo == 1041.0
    assert quote.precio_maximo == 1046.0
    assert quote.precio_cierre_anterior == 1044.5
    assert quote.cotizacion == 1043.5
    assert quote.open_interest == 3


def test_legacy_normalizer_reads_title() -> None:
    quote = LegacyNormalizer().normalize(legacy_record())

    assert quote.date == date(2024, 11, 15)
    assert quote.rueda == "CAM1"
    assert quote.instrumento == "USD / ARS 000 241115"
    assert (quote.currency_out, quote.currency_in) == ("USD", "ARS")
    assert quote.settle == 0
    assert quote.settle_date == date(2024, 11, 15)
    assert quote.monto == 1250000.0
    assert quote.cotizacion == 1043.5
    assert quote.hora == time(15, 4, 5)


def test_legacy_normalizer_reads_dotted_volumes() -> None:
    quote = LegacyNormalizer().normalize(legacy_record(monto="1.234", cotizacion="1043.500"))
    assert quote.monto == 1234.0
    assert quote.cotizacion == 1043.5


def test_legacy_normalizer_unmatched_title_leaves_fields_empty() -> None:
    quote = LegacyNormalizer().normalize(legacy_record(titulo="DOLAR MEP", rueda="Minorista"))
    assert quote.instrumento == "DOLAR MEP"
    assert quote.currency_out == ""
    assert quote.currency_in == ""
    assert quote.settle is None
    assert quote.settle_date is None
    assert quote.rueda == "CAM2"


def test_legacy_normalizer_uses_injected_title_parser() -> None:
    class FixedParser:
        def parse(self, title: str) -> TitleFields:
            return TitleFields(currency_out="EUR", currency_in="USD", settle=2)

    quote = LegacyNormalizer(FixedParser()).normalize(legacy_record())
    assert (quote.currency_out, quote.currency_in, quote.settle) == ("EUR", "USD", 2)


def test_rows_match_table_columns() -> None:
    quote = LegacyNormalizer().normalize(legacy_record())
    assert tuple(quote.as_row()) == FOREX_COLUMNS
    snapshot = quote.as_snapshot_row()
    assert tuple(snapshot) == SNAPSHOT_COLUMNS
    assert snapshot["hora"] == "15:04:05"
