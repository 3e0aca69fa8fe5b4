"""Normalisers for the three MAE API record shapes."""

from __future__ import annotations

from typing import Any, Mapping

from mae_forex.ingestion.derivation import (
    build_instrumento,
    coerce_float,
    coerce_int,
    coerce_str,
    derive_currency_in,
    derive_currency_out,
    derive_rueda,
    parse_api_date,
    parse_hora,
    parse_settle,
    parse_settle_date,
)
from mae_forex.ingestion.models import ForexQuote
from mae_forex.ingestion.strategy import TitleParser
from mae_forex.ingestion.title_parser import RegexTitleParser


class InvalidRecordError(ValueError):
    """Raised when a raw record lacks a usable quote date."""


def _text(raw: Mapping[str, Any], key: str) -> str:
    value = raw.get(key)
    return "" if value is None else str(value)


def _quote_date(raw: Mapping[str, Any]):
    try:
        return parse_api_date(raw.get("fecha"))
    except ValueError as exc:
        raise InvalidRecordError(str(exc)) from exc


class CotizacionesNormalizer:
    """Records from the current ``cotizaciones/forex`` snapshot endpoint."""

    def normalize(self, raw: Mapping[str, Any]) -> ForexQuote:
        quote_date = _quote_date(raw)
        plazo = _text(raw, "plazo")
        currency_out = derive_currency_out(_text(raw, "ticker"))
        currency_in = derive_currency_in(_text(raw, "moneda"))
        return ForexQuote(
            date=quote_date,
            rueda=derive_rueda(_text(raw, "segmento")),
            instrumento=build_instrumento(currency_out, currency_in, plazo),
            currency_out=currency_out,
            currency_in=currency_in,
            settle=parse_settle(plazo),
            settle_date=parse_settle_date(raw.get("fechaLiquidacion")),
            monto=coerce_float(raw.get("volumenAcumulado")),
            cotizacion=coerce_float(raw.get("precioCierre")),
            descripcion=coerce_str(raw.get("descripcion")),
            tipo_emision=coerce_str(raw.get("tipoEmision")),
            codigo_segmento=coerce_str(raw.get("codigoSegmento")),
            codigo_plazo=coerce_str(raw.get("codigoPlazo")),
            moneda=coerce_str(raw.get("moneda")),
            monto_acumulado=coerce_float(raw.get("montoAcumulado")),
            precio_ultimo=coerce_float(raw.get("precioUltimo")),
            ultima_tasa=coerce_float(raw.get("ultimaTasa")),
            precio_cierre_anterior=coerce_float(raw.get("precioCierreAnterior")),
            precio_minimo=coerce_float(raw.get("precioMinimo")),
            precio_maximo=coerce_float(raw.get("precioMaximo")),
            open_interest=coerce_int(raw.get("openInterest")),
            variacion=coerce_float(raw.get("variacion")),
        )

    def describe(self, raw: Mapping[str, Any]) -> str:
        return f"ticker={raw.get('ticker')}, fecha={raw.get('fecha')}"


class HistoricoNormalizer:
    """Detail records nested under each day of the ``historicoforex`` endpoint.

    The history API names its volume ``volumen`` and its accumulated amount
    ``monto``; they land in ``monto`` and ``monto_acumulado`` respectively.
    """

    def normalize(self, raw: Mapping[str, Any]) -> ForexQuote:
        quote_date = _quote_date(raw)
        plazo = _text(raw, "plazo")
        currency_out = derive_currency_out(_text(raw, "ticker"))
        currency_in = derive_currency_in(_text(raw, "moneda"))
        return ForexQuote(
            date=quote_date,
            rueda=derive_rueda(_text(raw, "segmento")),
            instrumento=build_instrumento(currency_out, currency_in, plazo),
            currency_out=currency_out,
            currency_in=currency_in,
            settle=parse_settle(plazo),
            settle_date=parse_settle_date(raw.get("fechaLiquidacion")),
            monto=coerce_float(raw.get("volumen")),
            cotizacion=coerce_float(raw.get("precioCierre")),
            descripcion=coerce_str(raw.get("descripcion")),
            tipo_emision=coerce_str(raw.get("tipoEmision")),
            codigo_segmento=coerce_str(raw.get("codigoSegmento")),
            codigo_plazo=coerce_str(raw.get("codigoPlazo")),
            moneda=coerce_str(raw.get("moneda")),
            monto_acumulado=coerce_float(raw.get("monto")),
            precio_ultimo=coerce_float(raw.get("ultimo")),
            ultima_tasa=coerce_float(raw.get("ultimaTasa")),
            precio_cierre_anterior=coerce_float(raw.get("cierreAnterior")),
            precio_minimo=coerce_float(raw.get("minimo")),
            precio_maximo=coerce_float(raw.get("maximo")),
            open_interest=coerce_int(raw.get("openInterest")),
            variacion=coerce_float(raw.get("variacion")),
        )

    def describe(self, raw: Mapping[str, Any]) -> str:
        return f"ticker={raw.get('ticker')}, fecha={raw.get('fecha')}"


class LegacyNormalizer:
    """Records from the legacy ``{"data": [...]}`` payload.

    Currency codes and settlement come from the instrument title through a
    :class:`TitleParser`; an unreadable title leaves them empty.
    """

    def __init__(self, title_parser: TitleParser | None = None) -> None:
        self.title_parser = title_parser or RegexTitleParser()

    def normalize(self, raw: Mapping[str, Any]) -> ForexQuote:
        quote_date = _quote_date(raw)
        title = _text(raw, "titulo").strip()
        fields = self.title_parser.parse(title)
        return ForexQuote(
            date=quote_date,
            rueda=derive_rueda(_text(raw, "rueda")),
            instrumento=title,
            currency_out=fields.currency_out,
            currency_in=fields.currency_in,
            settle=fields.settle,
            settle_date=fields.settle_date,
            monto=coerce_float(raw.get("monto"), grouped_thousands=True),
            cotizacion=coerce_float(raw.get("cotizacion")),
            hora=parse_hora(raw.get("hora")),
        )

    def describe(self, raw: Mapping[str, Any]) -> str:
        return f"titulo={raw.get('titulo')}, fecha={raw.get('fecha')}"


__all__ = [
    "CotizacionesNormalizer",
    "HistoricoNormalizer",
    "InvalidRecordError",
    "LegacyNormalizer",
]
