"""HTTP client for the MAE forex market-data endpoints."""

from __future__ import annotations

import json
from typing import Any

import requests

from mae_forex.config import ConfigurationError
from mae_forex.utils.date_range import DateRange
from mae_forex.utils.logger import get_logger

LOGGER = get_logger(__name__)

COTIZACIONES_URL = "https://api.mae.com.ar/MarketData/v1/mercado/cotizaciones/forex"
HISTORICO_URL = "https://api.marketdata.mae.com.ar/api/mercado/titulo/historicoforex"

USER_AGENT = "Mozilla/5.0 (compatible; MAEScraper/1.0)"
_BODY_PREVIEW = 500


class FetchError(RuntimeError):
    """Raised when an endpoint cannot be reached or returns unusable data."""


class MaeApiClient:
    """Thin wrapper around ``requests`` for the three MAE forex endpoints."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        session: requests.Session | None = None,
        legacy_url: str | None = None,
        timeout: int = 30,
        historico_timeout: int = 60,
    ) -> None:
        self.api_key = api_key
        self.session = session or requests.Session()
        self.legacy_url = legacy_url
        self.timeout = timeout
        self.historico_timeout = historico_timeout

    def fetch_cotizaciones(self) -> list[dict[str, Any]]:
        """Return the flat list of current forex quotes."""

        if not self.api_key:
            raise ConfigurationError("MAE_API_KEY environment variable not set")
        payload = self._get_json(
            COTIZACIONES_URL,
            headers={"x-api-key": self.api_key},
            timeout=self.timeout,
        )
        records = _expect_list(payload, COTIZACIONES_URL)
        LOGGER.info("Received %s records from API", len(records))
        return records

    def fetch_historico(self, date_range: DateRange) -> list[dict[str, Any]]:
        """Return the day groups (each with a ``details`` list) for ``date_range``."""

        o_titulo = json.dumps(
            {
                "fechaDesde": date_range.start.isoformat(),
                "fechaHasta": date_range.end.isoformat(),
            },
            separators=(",", ":"),
        )
        LOGGER.info(
            "Fetching data from %s to %s (%s days)",
            date_range.start,
            date_range.end,
            date_range.days,
        )
        payload = self._get_json(
            HISTORICO_URL,
            params={"oTitulo": o_titulo},
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
            timeout=self.historico_timeout,
        )
        days = _expect_list(payload, HISTORICO_URL)
        for day in days:
            details = day.get("details")
            if details is None:
                day["details"] = []
            elif not isinstance(details, list) or not all(
                isinstance(detail, dict) for detail in details
            ):
                raise FetchError(f"Unexpected details payload for day {day.get('fecha')!r}")
        return days

    def fetch_legacy(self) -> list[dict[str, Any]]:
        """Return the ``data`` list of the legacy quotes payload."""

        if not self.legacy_url:
            raise ConfigurationError("MAE_LEGACY_URL environment variable not set")
        payload = self._get_json(
            self.legacy_url,
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
            timeout=self.timeout,
        )
        if not isinstance(payload, dict) or "data" not in payload:
            raise FetchError(f"Legacy payload from {self.legacy_url} has no 'data' field")
        records = _expect_list(payload["data"], self.legacy_url)
        LOGGER.info("Received %s legacy records from API", len(records))
        return records

    def _get_json(
        self,
        url: str,
        *,
        headers: dict[str, str],
        timeout: int,
        params: dict[str, str] | None = None,
    ) -> Any:
        try:
            response = self.session.get(url, params=params, headers=headers, timeout=timeout)
        except requests.RequestException as exc:
            raise FetchError(f"Failed to fetch data from {url}: {exc}") from exc
        if response.status_code != 200:
            body = (response.text or "")[:_BODY_PREVIEW]
            raise FetchError(f"API returned status {response.status_code} for {url}: {body}")
        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(f"Failed to decode JSON from {url}: {exc}") from exc

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "MaeApiClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def _expect_list(payload: Any, url: str) -> list[dict[str, Any]]:
    if not isinstance(payload, list):
        raise FetchError(f"Expected a JSON array from {url}, got {type(payload).__name__}")
    if not all(isinstance(item, dict) for item in payload):
        raise FetchError(f"Expected JSON objects in the array from {url}")
    return payload


__all__ = ["COTIZACIONES_URL", "FetchError", "HISTORICO_URL", "MaeApiClient"]
