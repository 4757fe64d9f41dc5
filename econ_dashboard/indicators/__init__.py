"""Economic indicator calculations."""

from econ_dashboard.indicators.calculator import (
    DerivedSeries,
    IndicatorCalculator,
    calculate_buffett_indicator,
    calculate_misery_index,
    calculate_philips_curve,
    calculate_sahm_rule,
)
from econ_dashboard.indicators.dashboard import DashboardView, recompute, toggle_indicator
from econ_dashboard.indicators.transforms import (
    index_to_baseline,
    latest_change,
    r_squared,
    r_squared_pairs,
)

__all__ = [
    "DashboardView",
    "DerivedSeries",
    "IndicatorCalculator",
    "calculate_buffett_indicator",
    "calculate_misery_index",
    "calculate_philips_curve",
    "calculate_sahm_rule",
    "index_to_baseline",
    "latest_change",
    "r_squared",
    "r_squared_pairs",
    "recompute",
    "toggle_indicator",
]
