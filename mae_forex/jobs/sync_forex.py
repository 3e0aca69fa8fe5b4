"""Copy the ``forex`` rows the remote database is missing from the local one."""

from __future__ import annotations

import argparse
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from mae_forex.config import load_environment, local_database, remote_database
from mae_forex.db import EPOCH_SENTINEL, FOREX_TABLE
from mae_forex.db.base_backend import BackendStrategy
from mae_forex.db.postgres_backend import PostgresBackend
from mae_forex.jobs.incremental import LoadResult
from mae_forex.jobs.runner import run_job
from mae_forex.utils.logger import get_logger, set_debug

LOGGER = get_logger(__name__)

JOB_NAME = "syncForex"

__all__ = ["run_sync_forex", "parse_args", "main"]


def run_sync_forex(
    source: BackendStrategy, destination: BackendStrategy, *, dry_run: bool = False
) -> LoadResult:
    """Insert every source row newer than the destination's last date, unchanged.

    An empty destination uses :data:`EPOCH_SENTINEL` as its cutoff and so
    receives a full copy.
    """

    source.ensure_connection()
    destination.ensure_connection()
    cutoff = destination.latest_date() or EPOCH_SENTINEL
    LOGGER.info("Last date in destination %s: %s", FOREX_TABLE, cutoff)

    rows = source.fetch_after(cutoff)
    LOGGER.info("Found %s source rows after %s", len(rows), cutoff)
    result = LoadResult()
    for row in rows:
        if dry_run:
            result.inserted += 1
            continue
        try:
            destination.insert_row(row)
        except SQLAlchemyError as exc:
            LOGGER.error("Failed to insert row (date=%s): %s", row.get("date"), exc)
            result.failed += 1
        else:
            result.inserted += 1

    LOGGER.info("Synced %s rows from local to cloud %s", result.inserted, FOREX_TABLE)
    return result


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--dry-run", action="store_true", help="Read the diff without inserting"
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def _run(args: argparse.Namespace) -> None:
    environ = load_environment()
    source_settings = local_database(environ)
    destination_settings = remote_database(environ)
    with PostgresBackend.from_settings(source_settings, FOREX_TABLE) as source:
        with PostgresBackend.from_settings(destination_settings, FOREX_TABLE) as destination:
            run_sync_forex(source, destination, dry_run=args.dry_run)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    set_debug(args.debug)
    return run_job(JOB_NAME, lambda: _run(args))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
