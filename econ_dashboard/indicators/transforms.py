"""Baseline indexing, spread and correlation transforms for chart series."""

import math
from collections.abc import Sequence

from econ_dashboard.config import IndicatorDefinition
from econ_dashboard.models import IndexedPoint, LatestChange, Observation


BASELINE = 100.0
R_SQUARED_DIGITS = 2


def find_baselines(
    observations: Sequence[Observation], keys: Sequence[str]
) -> dict[str, float]:
    """
    First non-null value of each key in chronological order.

    Keys with no value anywhere, or whose first value is zero, have no
    baseline and are absent from the result.
    """
    baselines = {}
    for key in keys:
        first = next(
            (obs.get(key) for obs in observations if obs.get(key) is not None), None
        )
        if first:
            baselines[key] = first
    return baselines


def _spread(values: dict[str, float | None], keys: Sequence[str]) -> float | None:
    if len(keys) != 2:
        return None
    first, second = (values.get(key) for key in keys)
    if first is None or second is None:
        return None
    return abs(first - second)


def raw_points(
    observations: Sequence[Observation], keys: Sequence[str]
) -> list[IndexedPoint]:
    """Chart rows carrying the selected keys unscaled."""
    keys = list(dict.fromkeys(keys))
    points = []
    for obs in observations:
        values = {key: obs.get(key) for key in keys}
        points.append(
            IndexedPoint(
                date=obs.date,
                timestamp=obs.timestamp,
                values=values,
                originals=dict(values),
            )
        )
    return points


def index_to_baseline(
    observations: Sequence[Observation],
    keys: Sequence[str],
    show_spread: bool = True,
) -> list[IndexedPoint]:
    """
    Rebase each selected series so its first valid value equals 100.

    Every value becomes value / baseline * 100. A key without a baseline is
    left unscaled. With exactly two keys (and show_spread), each row also
    carries the absolute gap between the two rebased values where both
    exist.

    Baselines are found afresh on every call, so the result always reflects
    the current selection and data.
    """
    keys = list(dict.fromkeys(keys))
    baselines = find_baselines(observations, keys)
    points = []

    for obs in observations:
        originals = {key: obs.get(key) for key in keys}
        values = {}
        for key, value in originals.items():
            base = baselines.get(key)
            if value is not None and base is not None:
                values[key] = value / base * BASELINE
            else:
                values[key] = value
        points.append(
            IndexedPoint(
                date=obs.date,
                timestamp=obs.timestamp,
                values=values,
                originals=originals,
                spread=_spread(values, keys) if show_spread else None,
            )
        )

    return points


def r_squared_pairs(
    xs: Sequence[float | None], ys: Sequence[float | None]
) -> float | None:
    """
    Squared Pearson correlation of two aligned series.

    Only pairs where both values are finite count. Returns None with fewer
    than two such pairs, and 0.0 when either series has no variance.
    """
    n = 0
    sum_x = sum_y = sum_xy = sum_x2 = sum_y2 = 0.0

    for x, y in zip(xs, ys):
        if x is None or y is None or not (math.isfinite(x) and math.isfinite(y)):
            continue
        n += 1
        sum_x += x
        sum_y += y
        sum_xy += x * y
        sum_x2 += x * x
        sum_y2 += y * y

    if n < 2:
        return None

    if _no_variance(n, sum_x, sum_x2) or _no_variance(n, sum_y, sum_y2):
        return 0.0

    numerator = n * sum_xy - sum_x * sum_y
    denominator = math.sqrt((n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y))
    r = max(-1.0, min(1.0, numerator / denominator))
    return round(r * r, R_SQUARED_DIGITS)


def _no_variance(n: int, total: float, total_sq: float) -> bool:
    # A constant series can leave float noise instead of an exact zero
    spread = n * total_sq - total * total
    return spread <= 0 or math.isclose(n * total_sq, total * total, rel_tol=1e-12)


def r_squared(
    observations: Sequence[Observation], key_x: str, key_y: str
) -> float | None:
    """R² between two columns, paired by observation."""
    xs = [obs.get(key_x) for obs in observations]
    ys = [obs.get(key_y) for obs in observations]
    return r_squared_pairs(xs, ys)


def filter_range(
    observations: Sequence[Observation], date_range: tuple[int, int] | None
) -> list[Observation]:
    """Inclusive positional slice; bounds are clamped to the sequence."""
    if date_range is None:
        return list(observations)
    if not observations:
        return []
    start, end = date_range
    start = max(start, 0)
    end = min(end, len(observations) - 1)
    if start > end:
        return []
    return list(observations[start:end + 1])


def latest_change(
    observations: Sequence[Observation], definition: IndicatorDefinition
) -> LatestChange | None:
    """
    Last value of an indicator and its change from the value before it.

    Observations without a value for the indicator are skipped, so a
    quarterly column still reports its last quarter. Percentage indicators
    move in percentage points; everything else moves in percent of the
    previous value.

    Returns:
        LatestChange, or None when fewer than two values exist.
    """
    valid = [obs for obs in observations if obs.get(definition.column) is not None]
    if len(valid) < 2:
        return None

    last, prior = valid[-1], valid[-2]
    value = last.get(definition.column)
    previous = prior.get(definition.column)

    if definition.is_percentage:
        change = value - previous
    elif previous == 0:
        change = None
    else:
        change = (value - previous) / previous * 100

    return LatestChange(
        date=last.date,
        value=value,
        previous=previous,
        change=change,
        is_percentage_point=definition.is_percentage,
    )
