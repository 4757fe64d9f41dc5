"""Derived economic analyses computed from the observation sequence."""

from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from econ_dashboard.config import DEFAULT_COLUMNS, ColumnMap
from econ_dashboard.data.store import has_column
from econ_dashboard.models import (
    BuffettPoint,
    MiseryPoint,
    Observation,
    PhilipsPoint,
    SahmPoint,
)


SAHM_THRESHOLD = 0.50  # Percentage points above the trailing low
SAHM_LOOKBACK = 12  # Prior 3-month averages compared against
SAHM_MIN_INDEX = 14  # Lookback plus the two extra months of the oldest average
YOY_LAG = 12  # Monthly observations in a year

# Analysis metadata for dashboard descriptions
ANALYSIS_INFO = {
    "sahm": {
        "name": "Sahm Rule Indicator",
        "description": "Signals recession when the 3-month moving average of unemployment rises 0.50% above the previous 12-month low.",
        "interpretation": "At or above 0.50 = recession signal.",
    },
    "misery": {
        "name": "Misery Index",
        "description": "Sum of Inflation Rate + Unemployment Rate.",
        "interpretation": "Higher = more economic discomfort for households.",
    },
    "philips": {
        "name": "Philips Curve",
        "description": "Relationship between Unemployment (X) and Inflation (Y).",
        "interpretation": "A downward slope is the classic trade-off; a flat cloud means it has broken down.",
    },
    "buffett": {
        "name": "Buffett Indicator",
        "description": "Market Cap / GDP Ratio.",
        "interpretation": "Above 100% is historically rich valuation.",
        "missing": "Missing GDP Data for Buffett Indicator",
    },
}


def _value(observations: Sequence[Observation], index: int, key: str) -> float | None:
    """Bounds-checked lookup: out-of-range positions have no data."""
    if index < 0 or index >= len(observations):
        return None
    return observations[index].get(key)


def three_month_average(
    observations: Sequence[Observation], index: int, key: str
) -> float | None:
    """Mean of a column at index, index-1 and index-2; None if any is missing."""
    values = [_value(observations, index - offset, key) for offset in range(3)]
    if any(v is None for v in values):
        return None
    return sum(values) / 3


def year_over_year(
    observations: Sequence[Observation], index: int, key: str, lag: int = YOY_LAG
) -> float | None:
    """Percent change versus `lag` positions earlier."""
    if index < lag:
        return None
    current = _value(observations, index, key)
    previous = _value(observations, index - lag, key)
    if current is None or previous is None or previous == 0:
        return None
    return (current - previous) / previous * 100


def calculate_sahm_rule(
    observations: Sequence[Observation], columns: ColumnMap = DEFAULT_COLUMNS
) -> list[SahmPoint]:
    """
    Sahm Rule recession signal.

    Compares the current 3-month average unemployment rate with the lowest
    3-month average over the previous 12 positions. Positions without
    enough history, or with a missing rate in the current average, are
    skipped; prior averages with a gap are left out of the minimum.
    """
    key = columns.unemployment
    points = []

    for index in range(SAHM_MIN_INDEX, len(observations)):
        current = three_month_average(observations, index, key)
        if current is None:
            continue

        lowest = current
        for offset in range(1, SAHM_LOOKBACK + 1):
            prior = three_month_average(observations, index - offset, key)
            if prior is not None and prior < lowest:
                lowest = prior

        sahm_value = current - lowest
        points.append(
            SahmPoint(
                date=observations[index].date,
                three_month_avg=current,
                lowest_avg=lowest,
                sahm_value=sahm_value,
                threshold=SAHM_THRESHOLD,
                is_recession=sahm_value >= SAHM_THRESHOLD,
            )
        )

    return points


def calculate_misery_index(
    observations: Sequence[Observation], columns: ColumnMap = DEFAULT_COLUMNS
) -> list[MiseryPoint]:
    """Unemployment rate plus year-over-year CPI inflation."""
    points = []

    for index, obs in enumerate(observations):
        inflation = year_over_year(observations, index, columns.cpi)
        unemployment = obs.get(columns.unemployment)
        if inflation is None or unemployment is None:
            continue
        points.append(
            MiseryPoint(
                date=obs.date,
                misery_index=unemployment + inflation,
                inflation=inflation,
                unemployment=unemployment,
            )
        )

    return points


def calculate_philips_curve(
    observations: Sequence[Observation], columns: ColumnMap = DEFAULT_COLUMNS
) -> list[PhilipsPoint]:
    """(unemployment, year-over-year inflation) pairs for a scatter plot."""
    points = []

    for index, obs in enumerate(observations):
        inflation = year_over_year(observations, index, columns.cpi)
        unemployment = obs.get(columns.unemployment)
        if inflation is None or unemployment is None:
            continue
        points.append(PhilipsPoint(date=obs.date, x=unemployment, y=inflation))

    return points


def calculate_buffett_indicator(
    observations: Sequence[Observation], columns: ColumnMap = DEFAULT_COLUMNS
) -> list[BuffettPoint]:
    """
    Market value as a percentage of GDP.

    Returns an empty list when the dataset has no GDP column at all; use
    has_column() to tell that apart from a dataset with GDP but no overlap.
    """
    if not has_column(observations, columns.gdp):
        return []

    points = []
    for obs in observations:
        gdp = obs.get(columns.gdp)
        market = obs.get(columns.market_cap)
        if gdp is None or market is None or gdp == 0:
            continue
        points.append(BuffettPoint(date=obs.date, ratio=market / gdp * 100))

    return points


def series_frame(points: Sequence) -> pd.DataFrame:
    """Derived points as a DataFrame indexed by date, for charting."""
    if not points:
        return pd.DataFrame()
    df = pd.DataFrame([point.to_dict() for point in points])
    df.set_index("date", inplace=True)
    return df


@dataclass(frozen=True)
class DerivedSeries:
    """All derived analyses for one dataset."""

    sahm: list[SahmPoint]
    misery: list[MiseryPoint]
    philips: list[PhilipsPoint]
    buffett: list[BuffettPoint]
    has_buffett_data: bool

    @property
    def latest_sahm(self) -> SahmPoint | None:
        return self.sahm[-1] if self.sahm else None

    @property
    def latest_misery(self) -> MiseryPoint | None:
        return self.misery[-1] if self.misery else None

    def to_dict(self) -> dict:
        return {
            "sahm": [p.to_dict() for p in self.sahm],
            "misery": [p.to_dict() for p in self.misery],
            "philips": [p.to_dict() for p in self.philips],
            "buffett": [p.to_dict() for p in self.buffett],
            "has_buffett_data": self.has_buffett_data,
        }


class IndicatorCalculator:
    """Runs every derived analysis with one CSV variant's column names."""

    def __init__(self, columns: ColumnMap = DEFAULT_COLUMNS) -> None:
        self.columns = columns

    def calculate(self, observations: Sequence[Observation]) -> DerivedSeries:
        return DerivedSeries(
            sahm=calculate_sahm_rule(observations, self.columns),
            misery=calculate_misery_index(observations, self.columns),
            philips=calculate_philips_curve(observations, self.columns),
            buffett=calculate_buffett_indicator(observations, self.columns),
            has_buffett_data=has_column(observations, self.columns.gdp),
        )
