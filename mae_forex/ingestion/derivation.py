"""Field derivation rules that map MAE API values onto the stored columns.

The rules translate the newer API vocabulary back into the codes the
``forex`` table has always used: ``USB$T`` tickers become ``USB``, the ``T``
(pesos transferencia) currency becomes ``ART`` and the retail/wholesale
segments become the ``CAM2``/``CAM1`` rueda codes.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time

TICKER_SUFFIX = "$T"
NO_SETTLEMENT_SENTINEL = "0001-01-01T00:00:00"

_CURRENCY_IN_CODES = {"T": "ART"}
_RUEDA_CODES = {"Minorista": "CAM2", "Mayorista": "CAM1"}
_DATE_FORMATS = ("%Y-%m-%dT%H:%M:%S", "%Y-%m-%d", "%d/%m/%Y")
_TIME_FORMATS = ("%H:%M:%S", "%H:%M")
_GROUPED_THOUSANDS = re.compile(r"^-?\d{1,3}(\.\d{3})+$")


def derive_currency_out(ticker: str) -> str:
    """Strip the ``$T`` suffix: ``"USB$T"`` -> ``"USB"``, ``"USMEP"`` unchanged."""

    if ticker.endswith(TICKER_SUFFIX):
        return ticker[: -len(TICKER_SUFFIX)]
    return ticker


def derive_currency_in(moneda: str) -> str:
    return _CURRENCY_IN_CODES.get(moneda, moneda)


def derive_rueda(segmento: str) -> str:
    return _RUEDA_CODES.get(segmento, segmento)


def build_instrumento(currency_out: str, currency_in: str, plazo: str) -> str:
    """Build the display label, e.g. ``"USB / ART 000"``.

    ``plazo`` is the raw term string, so ``"000"`` keeps its zero padding even
    though :func:`parse_settle` turns it into ``0``.
    """

    return f"{currency_out} / {currency_in} {plazo}"


def parse_api_date(value: object) -> date:
    """Parse the required quote date; raises :class:`ValueError` when invalid."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value or "").strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Invalid fecha {value!r}")


def parse_settle(plazo: object) -> int | None:
    text = str(plazo or "").strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def parse_settle_date(value: object) -> date | None:
    """Return the settlement date, treating the ``0001-01-01`` sentinel as absent."""

    text = str(value or "").strip()
    if not text or text == NO_SETTLEMENT_SENTINEL:
        return None
    try:
        parsed = parse_api_date(text)
    except ValueError:
        return None
    if parsed == date.min:
        return None
    return parsed


def parse_hora(value: object) -> time | None:
    if isinstance(value, time):
        return value
    text = str(value or "").strip()
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    return None


def coerce_float(value: object | None, *, grouped_thousands: bool = False) -> float | None:
    """Coerce JSON numbers and numeric strings (``"1.234,56"`` included).

    Without a comma, several dots in a ``1.500.000`` shape are thousands
    separators. ``grouped_thousands`` also reads a single ``1.234`` that way,
    for sources that never send dotted decimals.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    cleaned = re.sub(r"[^0-9,.-]", "", str(value))
    if not cleaned:
        return None
    if "," in cleaned:
        # Spanish notation: dots group thousands, the comma is the decimal mark.
        cleaned = cleaned.replace(".", "").replace(",", ".")
    elif _GROUPED_THOUSANDS.match(cleaned) and (grouped_thousands or cleaned.count(".") > 1):
        cleaned = cleaned.replace(".", "")
    try:
        return float(cleaned)
    except ValueError:
        return None


def coerce_int(value: object | None) -> int | None:
    number = coerce_float(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def coerce_str(value: object | None) -> str | None:
    if value is None:
        return None
    return str(value)


__all__ = [
    "NO_SETTLEMENT_SENTINEL",
    "build_instrumento",
    "coerce_float",
    "coerce_int",
    "coerce_str",
    "derive_currency_in",
    "derive_currency_out",
    "derive_rueda",
    "parse_api_date",
    "parse_hora",
    "parse_settle",
    "parse_settle_date",
]
