"""Fetch quotes from the legacy MAE endpoint into ``forex_snapshot``."""

from __future__ import annotations

import argparse
from typing import Optional

from mae_forex.config import ApiSettings, load_environment, local_database
from mae_forex.db import SNAPSHOT_TABLE
from mae_forex.db.base_backend import BackendStrategy
from mae_forex.db.postgres_backend import PostgresBackend
from mae_forex.ingestion.mae_api import FetchError, MaeApiClient
from mae_forex.ingestion.models import ForexQuote
from mae_forex.ingestion.normalizers import LegacyNormalizer
from mae_forex.ingestion.strategy import TitleParser
from mae_forex.jobs.incremental import LoadResult, load_incremental
from mae_forex.jobs.runner import run_job
from mae_forex.utils.logger import get_logger, set_debug

LOGGER = get_logger(__name__)

JOB_NAME = "maeScraperLegacy"

__all__ = ["run_scrape_legacy", "parse_args", "main"]


def run_scrape_legacy(
    client: MaeApiClient,
    backend: BackendStrategy,
    *,
    title_parser: TitleParser | None = None,
    dry_run: bool = False,
) -> LoadResult | None:
    try:
        records = client.fetch_legacy()
    except FetchError as exc:
        LOGGER.error("Data fetching failed: %s", exc)
        return None
    if not records:
        LOGGER.info("No data received from API")
        return None

    backend.ensure_connection()
    cutoff = backend.latest_date()
    LOGGER.info("Last date in %s: %s", SNAPSHOT_TABLE, cutoff)
    result = load_incremental(
        records,
        LegacyNormalizer(title_parser),
        backend,
        cutoff=cutoff,
        row_builder=ForexQuote.as_snapshot_row,
        dry_run=dry_run,
    )
    LOGGER.info("Inserted %s rows into %s table", result.inserted, SNAPSHOT_TABLE)
    return result


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--dry-run", action="store_true", help="Fetch and normalise without inserting"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def _run(args: argparse.Namespace) -> None:
    environ = load_environment()
    api_settings = ApiSettings.from_env(environ)
    db_settings = local_database(environ)
    with MaeApiClient(legacy_url=api_settings.require_legacy_url()) as client:
        with PostgresBackend.from_settings(db_settings, SNAPSHOT_TABLE) as backend:
            run_scrape_legacy(client, backend, dry_run=args.dry_run)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    set_debug(args.debug)
    return run_job(JOB_NAME, lambda: _run(args))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
