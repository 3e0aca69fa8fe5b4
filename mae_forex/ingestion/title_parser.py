"""Regular-expression parser for legacy ``CCC / CCC NNN YYMMDD`` titles."""

from __future__ import annotations

import re
from datetime import datetime

from mae_forex.ingestion.models import TitleFields

TITLE_PATTERN = re.compile(
    r"^\s*(?P<out>\w{3})\s*/\s*(?P<in>\w{3})\s+(?P<settle>\d{3})\s+(?P<settle_date>\d{6})\s*$"
)


class RegexTitleParser:
    """Extract the currency pair, term and settlement date from a title.

    ``"USD / ARS 000 241115"`` gives ``USD``, ``ARS``, ``0`` and 2024-11-15.
    """

    def __init__(self, pattern: re.Pattern[str] = TITLE_PATTERN) -> None:
        self.pattern = pattern

    def parse(self, title: str) -> TitleFields:
        match = self.pattern.match(title or "")
        if match is None:
            return TitleFields()
        try:
            settle_date = datetime.strptime(match.group("settle_date"), "%y%m%d").date()
        except ValueError:
            return TitleFields()
        return TitleFields(
            currency_out=match.group("out"),
            currency_in=match.group("in"),
            settle=int(match.group("settle")),
            settle_date=settle_date,
        )


__all__ = ["RegexTitleParser", "TITLE_PATTERN"]
