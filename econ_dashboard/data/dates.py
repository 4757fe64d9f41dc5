"""Date normalization for CSV observation dates."""

import logging
from dataclasses import dataclass

import pandas as pd

from econ_dashboard.config import CENTURY_PIVOT_YEAR


logger = logging.getLogger(__name__)

# Words pandas resolves against the clock rather than the text
RELATIVE_DATE_WORDS = frozenset({"now", "today", "tomorrow", "yesterday"})


@dataclass(frozen=True)
class NormalizedDate:
    """Canonical form of a CSV date field."""

    date: str  # YYYY-MM-DD, or the original string when unparsable
    timestamp: int | None  # Epoch milliseconds (UTC midnight for plain dates)
    year: int | None

    @property
    def is_parsed(self) -> bool:
        return self.timestamp is not None


def normalize_date(raw: str) -> NormalizedDate:
    """
    Canonicalize a date string such as "2020-01-01" or "1/1/2020".

    Unparsable input, including relative words like "today", is returned
    unchanged with no timestamp; callers sort such rows after all dated
    rows. Any parsed year before CENTURY_PIVOT_YEAR is moved forward 100
    years so that two-digit years like "1/1/00" land in 2000.
    """
    text = raw.strip()
    if not text or text.lower() in RELATIVE_DATE_WORDS:
        return NormalizedDate(date=raw, timestamp=None, year=None)

    try:
        parsed = pd.to_datetime(text)
        if pd.isna(parsed):
            raise ValueError("not a time")
        if parsed.tzinfo is not None:
            parsed = parsed.tz_convert("UTC").tz_localize(None)
        if parsed.year < CENTURY_PIVOT_YEAR:
            parsed = parsed.replace(year=parsed.year + 100)
        timestamp = int(parsed.value // 1_000_000)
    except (ValueError, OverflowError, TypeError) as e:
        logger.debug(f"Unparsable date {raw!r}: {e}")
        return NormalizedDate(date=raw, timestamp=None, year=None)

    return NormalizedDate(
        date=parsed.strftime("%Y-%m-%d"),
        timestamp=timestamp,
        year=int(parsed.year),
    )
