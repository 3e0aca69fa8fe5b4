"""Incremental load: insert the quotes newer than the table's last stored date."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Iterable, Mapping

from sqlalchemy.exc import SQLAlchemyError

from mae_forex.db.base_backend import BackendStrategy
from mae_forex.ingestion.models import ForexQuote
from mae_forex.ingestion.normalizers import InvalidRecordError
from mae_forex.ingestion.strategy import QuoteNormalizer
from mae_forex.utils.logger import get_logger

LOGGER = get_logger(__name__)

RowBuilder = Callable[[ForexQuote], Mapping[str, Any]]


@dataclass(slots=True)
class LoadResult:
    """Outcome counters for one batch."""

    inserted: int = 0
    skipped: int = 0
    dropped: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        """Return the number of records the batch looked at."""

        return self.inserted + self.skipped + self.dropped + self.failed


def load_incremental(
    records: Iterable[Mapping[str, Any]],
    normalizer: QuoteNormalizer,
    backend: BackendStrategy,
    *,
    cutoff: date | None,
    row_builder: RowBuilder = ForexQuote.as_row,
    dry_run: bool = False,
) -> LoadResult:
    """Normalise ``records`` and insert those dated strictly after ``cutoff``.

    ``cutoff`` is read by the caller once, before the batch starts; it is not
    refreshed as rows go in. ``None`` means the table is empty and every
    record qualifies. Unparseable dates drop the record, insert errors are
    logged and counted, and neither stops the batch.
    """

    result = LoadResult()
    for raw in records:
        try:
            quote = normalizer.normalize(raw)
        except InvalidRecordError as exc:
            LOGGER.warning("Dropping record (%s): %s", normalizer.describe(raw), exc)
            result.dropped += 1
            continue

        if cutoff is not None and quote.date <= cutoff:
            result.skipped += 1
            continue

        if dry_run:
            LOGGER.debug("Dry-run; would insert %s", quote)
            result.inserted += 1
            continue

        try:
            backend.insert_row(row_builder(quote))
        except SQLAlchemyError as exc:
            LOGGER.error("Failed to insert row (%s): %s", normalizer.describe(raw), exc)
            result.failed += 1
        else:
            result.inserted += 1

    if result.skipped:
        LOGGER.info("Skipped %s records already in database", result.skipped)
    if result.dropped:
        LOGGER.info("Dropped %s records with an invalid fecha", result.dropped)
    if result.failed:
        LOGGER.warning("%s rows failed to insert", result.failed)
    return result


__all__ = ["LoadResult", "load_incremental"]
