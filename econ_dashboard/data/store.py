"""Immutable, chronologically ordered observation store."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

import pandas as pd

from econ_dashboard.data.csv_parser import ParseResult
from econ_dashboard.models import Observation


def has_column(observations: Sequence[Observation], key: str) -> bool:
    """Check whether any observation carries a value for a column."""
    return any(obs.get(key) is not None for obs in observations)


@dataclass(frozen=True)
class ObservationStore(Sequence):
    """Sorted observations for one loaded dataset."""

    observations: tuple[Observation, ...] = ()
    headers: tuple[str, ...] = ()
    rejected_rows: int = 0
    duplicate_dates: int = 0
    source: str = field(default="", compare=False)

    @classmethod
    def from_parse_result(cls, result: ParseResult, source: str = "") -> "ObservationStore":
        return cls(
            observations=result.observations,
            headers=result.headers,
            rejected_rows=result.rejected_rows,
            duplicate_dates=result.duplicate_dates,
            source=source,
        )

    def __len__(self) -> int:
        return len(self.observations)

    def __iter__(self) -> Iterator[Observation]:
        return iter(self.observations)

    def __getitem__(self, index):
        return self.observations[index]

    def columns(self) -> list[str]:
        """Indicator columns seen in the data, in first-seen order."""
        seen: dict[str, None] = {}
        for obs in self.observations:
            for key in obs.values:
                seen.setdefault(key, None)
        return list(seen)

    def has_column(self, key: str) -> bool:
        return has_column(self.observations, key)

    def series(self, key: str) -> list[float | None]:
        """Values for one column, aligned with the observations."""
        return [obs.get(key) for obs in self.observations]

    def dates(self) -> list[str]:
        return [obs.date for obs in self.observations]

    def to_frame(self) -> pd.DataFrame:
        """
        Observations as a DataFrame for chart consumers.

        Returns:
            DataFrame indexed by date string with a 'timestamp' column and
            one float column per indicator (NaN where absent)
        """
        if not self.observations:
            return pd.DataFrame(columns=["timestamp"])

        rows = [
            {"date": obs.date, "timestamp": obs.timestamp, **obs.values}
            for obs in self.observations
        ]
        df = pd.DataFrame(rows)
        df.set_index("date", inplace=True)
        return df
