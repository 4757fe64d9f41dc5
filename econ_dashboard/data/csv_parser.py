"""Parse indicator CSV text into sorted observations."""

import csv
import logging
import math
from dataclasses import dataclass

from econ_dashboard.config import DEFAULT_COLUMNS, ZERO_AS_MISSING_COLUMNS
from econ_dashboard.data.dates import normalize_date
from econ_dashboard.models import Observation


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseResult:
    """Observations plus ingestion diagnostics."""

    observations: tuple[Observation, ...]
    headers: tuple[str, ...]
    rejected_rows: int = 0
    duplicate_dates: int = 0


def split_naive(line: str) -> list[str]:
    """
    Plain comma split.

    Known limitation: a quoted field containing a comma is split in two,
    so the row ends up with the wrong field count and is rejected.
    """
    return [field.strip() for field in line.split(",")]


def split_quoted(line: str) -> list[str]:
    """Comma split that keeps commas inside double-quoted fields."""
    fields = next(csv.reader([line]), [])
    return [field.strip() for field in fields]


def parse_number(
    text: str, column: str, zero_as_missing: frozenset[str] = ZERO_AS_MISSING_COLUMNS
) -> float | None:
    """
    Parse one numeric field.

    Returns None for blanks, non-numeric text and non-finite values, and
    for a literal zero in columns that are never zero in practice.
    """
    text = text.strip().replace(",", "")
    if not text or "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    if value == 0 and column in zero_as_missing:
        return None
    return value


def _merge(earlier: Observation, later: Observation) -> Observation:
    """Later row wins for every column it has a value for."""
    values = dict(earlier.values)
    for key, value in later.values.items():
        if value is not None or key not in values:
            values[key] = value
    return Observation(
        date=earlier.date,
        timestamp=earlier.timestamp,
        year=earlier.year,
        values=values,
    )


def _sort_key(observation: Observation) -> tuple[bool, int]:
    # Undated rows go last, keeping their input order
    return (observation.timestamp is None, observation.timestamp or 0)


def parse_csv(
    text: str,
    *,
    date_column: str = DEFAULT_COLUMNS.date,
    quote_aware: bool = False,
    zero_as_missing: frozenset[str] = ZERO_AS_MISSING_COLUMNS,
) -> ParseResult:
    """
    Parse CSV text into observations sorted by timestamp.

    Args:
        text: Raw CSV; the first non-blank line is the header row
        date_column: Header of the date column
        quote_aware: Honour double-quoted fields (and strip thousands
            separators inside them) instead of a plain comma split
        zero_as_missing: Columns where a literal 0 means no data

    Returns:
        ParseResult. Rows whose field count differs from the header, or
        whose date is blank, are skipped and counted in rejected_rows.
        Rows sharing a date are merged (later row wins per column) and
        counted in duplicate_dates.

    Raises:
        ValueError: If the header row has no date_column
    """
    split = split_quoted if quote_aware else split_naive
    # Byte order mark left by spreadsheet exports
    text = text.removeprefix("\ufeff")
    lines = [line.rstrip("\r") for line in text.split("\n")]

    header_index = next((i for i, line in enumerate(lines) if line.strip()), None)
    if header_index is None:
        return ParseResult(observations=(), headers=())

    headers = tuple(split(lines[header_index]))
    if date_column not in headers:
        raise ValueError(
            f"Date column {date_column!r} not found in header: {', '.join(headers)}"
        )

    by_date: dict[str, Observation] = {}
    rejected = 0
    duplicates = 0

    for line_number, line in enumerate(lines[header_index + 1:], start=header_index + 2):
        if not line.strip():
            continue

        fields = split(line)
        if len(fields) != len(headers):
            logger.warning(
                f"Skipping line {line_number}: column count mismatch "
                f"({len(fields)} vs {len(headers)})"
            )
            rejected += 1
            continue

        row = dict(zip(headers, fields))
        raw_date = row.pop(date_column)
        if not raw_date:
            logger.warning(f"Skipping line {line_number}: no {date_column}")
            rejected += 1
            continue

        normalized = normalize_date(raw_date)
        observation = Observation(
            date=normalized.date,
            timestamp=normalized.timestamp,
            year=normalized.year,
            values={
                column: parse_number(value, column, zero_as_missing)
                for column, value in row.items()
            },
        )

        if observation.date in by_date:
            logger.warning(
                f"Line {line_number}: duplicate date {observation.date}, "
                "merging with earlier row"
            )
            duplicates += 1
            observation = _merge(by_date[observation.date], observation)
        by_date[observation.date] = observation

    observations = tuple(sorted(by_date.values(), key=_sort_key))
    logger.info(
        f"Parsed {len(observations)} observations "
        f"({rejected} rejected, {duplicates} duplicate dates)"
    )

    return ParseResult(
        observations=observations,
        headers=headers,
        rejected_rows=rejected,
        duplicate_dates=duplicates,
    )
