"""Date helpers used to plan historical backfills."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta


@dataclass(frozen=True)
class DateRange:
    """Container representing a closed date range."""

    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


def parse_date(value: str | date) -> date:
    """Parse a date string in ISO format to :class:`date`."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, "%Y-%m-%d").date()


def plan_backfill_range(last_stored: date | None, today: date) -> DateRange | None:
    """Return the window of days missing from the table, or ``None`` if up to date.

    The window runs from the day after ``last_stored`` through ``today``. An
    empty table only backfills ``today``.
    """

    today = parse_date(today)
    if last_stored is None:
        return DateRange(start=today, end=today)
    last_stored = parse_date(last_stored)
    if last_stored >= today:
        return None
    return DateRange(start=last_stored + timedelta(days=1), end=today)


__all__ = ["DateRange", "parse_date", "plan_backfill_range"]
