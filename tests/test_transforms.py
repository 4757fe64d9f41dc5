"""Tests for baseline indexing, spread and R²."""

import math

import pytest

from econ_dashboard.config import INDICATOR_SETS
from econ_dashboard.indicators.transforms import (
    filter_range,
    find_baselines,
    index_to_baseline,
    latest_change,
    r_squared,
    r_squared_pairs,
    raw_points,
)


def test_two_point_series_indexes_to_100_and_200(make_observations):
    observations = make_observations(CPI=[50.0, 100.0])

    points = index_to_baseline(observations, ["CPI"])

    assert [p.values["CPI"] for p in points] == [100.0, 200.0]
    assert [p.originals["CPI"] for p in points] == [50.0, 100.0]


def test_baseline_is_first_non_null(make_observations):
    observations = make_observations(CPI=[None, 20.0, 40.0])

    points = index_to_baseline(observations, ["CPI"])

    assert [p.values["CPI"] for p in points] == [None, 100.0, 200.0]


def test_key_without_values_has_no_baseline(make_observations):
    observations = make_observations(CPI=[10.0, 20.0], gdp=[None, None])

    assert find_baselines(observations, ["CPI", "gdp"]) == {"CPI": 10.0}
    points = index_to_baseline(observations, ["gdp"])
    assert [p.values["gdp"] for p in points] == [None, None]


def test_zero_baseline_left_unscaled(make_observations):
    observations = make_observations(fed_rate=[0.0, 0.25])

    points = index_to_baseline(observations, ["fed_rate"])

    assert [p.values["fed_rate"] for p in points] == [0.0, 0.25]


def test_baselines_follow_the_data_passed_in(make_observations):
    observations = make_observations(CPI=[50.0, 100.0, 200.0])

    full = index_to_baseline(observations, ["CPI"])
    later = index_to_baseline(observations[1:], ["CPI"])

    assert full[-1].values["CPI"] == 400.0
    assert later[-1].values["CPI"] == 200.0


def test_spread_for_exactly_two_keys(make_observations):
    observations = make_observations(a=[50.0, 100.0, None], b=[10.0, 30.0, 5.0])

    points = index_to_baseline(observations, ["a", "b"])

    assert points[0].spread == 0.0
    assert points[1].spread == 100.0
    assert points[2].spread is None
    assert "spread" not in points[2].to_dict()


def test_no_spread_for_other_selections(make_observations):
    observations = make_observations(a=[1.0, 2.0], b=[1.0, 3.0], c=[1.0, 4.0])

    assert all(p.spread is None for p in index_to_baseline(observations, ["a"]))
    assert all(p.spread is None for p in index_to_baseline(observations, ["a", "b", "c"]))
    assert all(
        p.spread is None
        for p in index_to_baseline(observations, ["a", "b"], show_spread=False)
    )


def test_indexed_point_to_dict(make_observations):
    observations = make_observations(a=[2.0, 4.0], b=[1.0, 1.0])

    record = index_to_baseline(observations, ["a", "b"])[1].to_dict()

    assert record["a"] == 200.0
    assert record["original_a"] == 4.0
    assert record["b"] == 100.0
    assert record["spread"] == 100.0
    assert record["date"] == observations[1].date


def test_raw_points_unscaled(make_observations):
    observations = make_observations(a=[2.0, 4.0])

    points = raw_points(observations, ["a"])

    assert [p.values["a"] for p in points] == [2.0, 4.0]
    assert all(p.spread is None for p in points)


def test_indexing_does_not_mutate_input(make_observations):
    observations = make_observations(a=[2.0, 4.0])

    index_to_baseline(observations, ["a"])

    assert [obs.get("a") for obs in observations] == [2.0, 4.0]


def test_r_squared_perfect_correlation():
    xs = [1.0, 2.0, 3.0, 4.0, 5.0]
    ys = [2 * x for x in xs]

    assert r_squared_pairs(xs, ys) == 1.00


def test_r_squared_partial_correlation():
    assert r_squared_pairs([1.0, 2.0, 3.0, 4.0], [1.0, 3.0, 2.0, 4.0]) == 0.64


def test_r_squared_negative_correlation_is_positive():
    assert r_squared_pairs([1.0, 2.0, 3.0], [3.0, 2.0, 1.0]) == 1.00


def test_r_squared_insufficient_pairs():
    assert r_squared_pairs([], []) is None
    assert r_squared_pairs([1.0], [2.0]) is None
    assert r_squared_pairs([1.0, None, 3.0], [None, 2.0, 4.0]) is None


def test_r_squared_zero_variance_is_zero():
    assert r_squared_pairs([1.0, 1.0], [2.0, 5.0]) == 0.0
    assert r_squared_pairs([3.3, 3.3, 3.3], [0.1, 0.7, 0.2]) == 0.0


def test_r_squared_ignores_non_finite():
    xs = [1.0, 2.0, math.nan, 3.0, math.inf]
    ys = [2.0, 4.0, 5.0, 6.0, 1.0]

    assert r_squared_pairs(xs, ys) == 1.00


def test_r_squared_by_column(make_observations):
    observations = make_observations(a=[1.0, 2.0, 3.0, None], b=[2.0, 4.0, 6.0, 8.0])

    assert r_squared(observations, "a", "b") == 1.00


def test_filter_range(make_observations):
    observations = make_observations(a=[1.0, 2.0, 3.0, 4.0])

    assert filter_range(observations, None) == observations
    assert [o.get("a") for o in filter_range(observations, (1, 2))] == [2.0, 3.0]
    assert [o.get("a") for o in filter_range(observations, (-5, 99))] == [1.0, 2.0, 3.0, 4.0]
    assert filter_range(observations, (3, 1)) == []
    assert filter_range([], (0, 0)) == []


# --- Latest change ---

LEGACY = INDICATOR_SETS["legacy"]
EXTENDED = INDICATOR_SETS["extended"]


def test_latest_change_in_percentage_points(make_observations):
    observations = make_observations(unemployment_rate=[3.4, 3.5, 3.7])

    latest = latest_change(observations, LEGACY["unemployment_rate"])

    assert latest.date == "2000-03-01"
    assert latest.value == 3.7
    assert latest.previous == 3.5
    assert latest.change == pytest.approx(0.2)
    assert latest.is_percentage_point


def test_latest_change_in_percent(make_observations):
    observations = make_observations(**{"S&P 500": [4000.0, 4400.0]})

    latest = latest_change(observations, LEGACY["S&P 500"])

    assert latest.change == pytest.approx(10.0)
    assert not latest.is_percentage_point


def test_latest_change_skips_missing_values(make_observations):
    observations = make_observations(
        GDP=[20000.0, None, None, 21000.0, None, None],
        CPI=[1.0, 2.0, 3.0, 4.0, 5.0, 6.0],
    )

    latest = latest_change(observations, EXTENDED["GDP"])

    assert latest.date == "2000-04-01"
    assert latest.value == 21000.0
    assert latest.previous == 20000.0
    assert latest.change == pytest.approx(5.0)


def test_latest_change_needs_two_values(make_observations):
    observations = make_observations(CPI=[None, 250.0, None])

    assert latest_change(observations, LEGACY["CPI"]) is None
    assert latest_change([], LEGACY["CPI"]) is None


def test_latest_change_from_zero_has_no_percent(make_observations):
    observations = make_observations(job_openings=[0.0, 7000.0])

    latest = latest_change(observations, LEGACY["job_openings"])

    assert latest.value == 7000.0
    assert latest.change is None
    assert latest.to_dict()["change"] is None
