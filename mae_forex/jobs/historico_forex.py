"""Backfill ``forex`` with every day missing between the last stored date and today."""

from __future__ import annotations

import argparse
from datetime import date
from typing import Any, Optional

from mae_forex.config import load_environment, local_database
from mae_forex.db import FOREX_TABLE
from mae_forex.db.base_backend import BackendStrategy
from mae_forex.db.postgres_backend import PostgresBackend
from mae_forex.ingestion.mae_api import FetchError, MaeApiClient
from mae_forex.ingestion.normalizers import HistoricoNormalizer
from mae_forex.jobs.incremental import LoadResult, load_incremental
from mae_forex.jobs.runner import run_job
from mae_forex.utils.date_range import parse_date, plan_backfill_range
from mae_forex.utils.logger import get_logger, set_debug

LOGGER = get_logger(__name__)

JOB_NAME = "historicoForex"

__all__ = ["flatten_details", "run_historico_forex", "parse_args", "main"]


def flatten_details(days: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Collapse the per-day groups into one list of detail records."""

    return [detail for day in days for detail in day.get("details") or []]


def run_historico_forex(
    client: MaeApiClient,
    backend: BackendStrategy,
    *,
    today: date | None = None,
    dry_run: bool = False,
) -> LoadResult | None:
    """Plan the missing window, fetch it in one request and load every day.

    Returns ``None`` when the table is already up to date or the fetch failed.
    """

    today = today or date.today()
    backend.ensure_connection()
    last_date = backend.latest_date()
    LOGGER.info("Last date in DB: %s", last_date)
    LOGGER.info("Today: %s", today)

    date_range = plan_backfill_range(last_date, today)
    if date_range is None:
        LOGGER.info("Database is up to date. Nothing to do.")
        return None

    try:
        days = client.fetch_historico(date_range)
    except FetchError as exc:
        LOGGER.error("Data fetching failed: %s", exc)
        return None

    details = flatten_details(days)
    LOGGER.info("Received %s days with %s total records", len(days), len(details))
    if not details:
        LOGGER.info("No new data to insert")
        return LoadResult()

    result = load_incremental(
        details, HistoricoNormalizer(), backend, cutoff=last_date, dry_run=dry_run
    )
    LOGGER.info("Inserted %s rows into %s table", result.inserted, FOREX_TABLE)
    return result


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--today", type=parse_date, help="Override today's date (YYYY-MM-DD)")
    parser.add_argument(
        "--dry-run", action="store_true", help="Fetch and normalise without inserting"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def _run(args: argparse.Namespace) -> None:
    environ = load_environment()
    db_settings = local_database(environ)
    with MaeApiClient() as client:
        with PostgresBackend.from_settings(db_settings, FOREX_TABLE) as backend:
            run_historico_forex(client, backend, today=args.today, dry_run=args.dry_run)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    set_debug(args.debug)
    return run_job(JOB_NAME, lambda: _run(args))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
