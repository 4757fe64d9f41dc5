"""Shared fixtures for the indicator pipeline tests."""

import pytest

from econ_dashboard.models import Observation


SAMPLE_CSV = """observation_date,unemployment_rate,S&P 500,CPI,gdp
2020-03-01,4.4,2584,258.48,21000
2020-01-01,3.5,3225,258.68,21500
2020-02-01,3.5,3250,259.05,21400
"""


def _month(index: int) -> str:
    return f"{2000 + index // 12}-{index % 12 + 1:02d}-01"


@pytest.fixture
def make_observations():
    """Build monthly observations from column -> list of values."""

    def factory(**columns: list) -> list[Observation]:
        length = max(len(values) for values in columns.values())
        observations = []
        for i in range(length):
            values = {
                key: (series[i] if i < len(series) else None)
                for key, series in columns.items()
            }
            observations.append(
                Observation(date=_month(i), timestamp=i, year=2000 + i // 12, values=values)
            )
        return observations

    return factory


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV
