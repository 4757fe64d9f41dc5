"""Data models for indicator observations and derived series."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Observation:
    """One dated row of indicator values."""

    date: str  # YYYY-MM-DD, or the raw string when unparsable
    timestamp: int | None  # Epoch milliseconds
    year: int | None
    values: dict[str, float | None] = field(default_factory=dict)

    def get(self, key: str) -> float | None:
        """Value for a column, None when absent."""
        return self.values.get(key)


@dataclass(frozen=True)
class SahmPoint:
    """Sahm Rule reading at one date."""

    date: str
    three_month_avg: float
    lowest_avg: float
    sahm_value: float
    threshold: float
    is_recession: bool

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "threeMonthAvg": self.three_month_avg,
            "lowestAvg": self.lowest_avg,
            "sahmValue": self.sahm_value,
            "threshold": self.threshold,
            "isRecession": self.is_recession,
        }


@dataclass(frozen=True)
class MiseryPoint:
    """Misery Index reading at one date."""

    date: str
    misery_index: float
    inflation: float
    unemployment: float

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "miseryIndex": self.misery_index,
            "inflation": self.inflation,
            "unemployment": self.unemployment,
        }


@dataclass(frozen=True)
class PhilipsPoint:
    """Unemployment (x) vs year-over-year inflation (y)."""

    date: str
    x: float
    y: float

    def to_dict(self) -> dict:
        return {"date": self.date, "x": self.x, "y": self.y}


@dataclass(frozen=True)
class BuffettPoint:
    """Market value as a percentage of GDP."""

    date: str
    ratio: float

    def to_dict(self) -> dict:
        return {"date": self.date, "ratio": self.ratio}


@dataclass(frozen=True)
class IndexedPoint:
    """Chart row for the selected indicators, raw or rebased to 100."""

    date: str
    timestamp: int | None
    values: dict[str, float | None]
    originals: dict[str, float | None]
    spread: float | None = None

    def to_dict(self) -> dict:
        record: dict = {"date": self.date, "timestamp": self.timestamp}
        record.update(self.values)
        for key, value in self.originals.items():
            record[f"original_{key}"] = value
        if self.spread is not None:
            record["spread"] = self.spread
        return record


@dataclass(frozen=True)
class LatestChange:
    """Most recent value of one indicator and its move from the prior value."""

    date: str
    value: float
    previous: float
    change: float | None  # None when a percent change has a zero base
    is_percentage_point: bool

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "value": self.value,
            "previous": self.previous,
            "change": self.change,
            "isPercentagePoint": self.is_percentage_point,
        }
