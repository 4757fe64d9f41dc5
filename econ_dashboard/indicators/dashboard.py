"""Pure recompute of everything the dashboard renders from data + state."""

from dataclasses import dataclass, field, replace

from econ_dashboard.config import (
    DEFAULT_COLUMNS,
    DEFAULT_SELECTIONS,
    ColumnMap,
    IndicatorDefinition,
)
from econ_dashboard.data.store import ObservationStore
from econ_dashboard.indicators.calculator import DerivedSeries, IndicatorCalculator
from econ_dashboard.indicators.transforms import (
    filter_range,
    index_to_baseline,
    latest_change,
    r_squared,
    raw_points,
)
from econ_dashboard.models import (
    DashboardState,
    IndexedPoint,
    LatestChange,
    MAX_SELECTED_INDICATORS,
)


@dataclass(frozen=True)
class DashboardView:
    """Output of one recompute."""

    state: DashboardState
    chart: list[IndexedPoint]
    r_squared: float | None
    derived: DerivedSeries
    observation_count: int
    rejected_rows: int
    latest: dict[str, LatestChange | None] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "state": self.state.to_dict(),
            "chart": [p.to_dict() for p in self.chart],
            "r_squared": self.r_squared,
            "observation_count": self.observation_count,
            "rejected_rows": self.rejected_rows,
            "latest": {
                key: None if change is None else change.to_dict()
                for key, change in self.latest.items()
            },
            **self.derived.to_dict(),
        }


def default_state(variant: str = "legacy") -> DashboardState:
    """The variant's default selection, raw mode, full date range."""
    return DashboardState(selected=DEFAULT_SELECTIONS[variant])


def toggle_indicator(
    state: DashboardState,
    indicator_id: str,
    indicators: dict[str, IndicatorDefinition],
) -> DashboardState:
    """
    Add or remove one indicator from the selection.

    The last selected indicator cannot be removed, and no more than
    MAX_SELECTED_INDICATORS can be selected; either request returns the
    state unchanged.
    """
    if indicator_id not in indicators:
        raise KeyError(f"Unknown indicator: {indicator_id}")

    if indicator_id in state.selected:
        if len(state.selected) <= 1:
            return state
        selected = tuple(i for i in state.selected if i != indicator_id)
    else:
        if len(state.selected) >= MAX_SELECTED_INDICATORS:
            return state
        selected = state.selected + (indicator_id,)

    return replace(state, selected=selected)


def recompute(
    store: ObservationStore,
    state: DashboardState,
    indicators: dict[str, IndicatorDefinition],
    columns: ColumnMap = DEFAULT_COLUMNS,
) -> DashboardView:
    """
    Build the chart rows and analyses for the current state.

    Chart rows and R² cover the selected date range; the derived analyses
    always use the full history since their lookbacks reach before it.
    The latest value and change of each selected indicator also use the
    full history. Unknown indicator ids in the selection are ignored.
    """
    selected = [indicators[i] for i in state.selected if i in indicators]
    keys = [definition.column for definition in selected]
    visible = filter_range(store.observations, state.date_range)

    if state.is_indexed:
        chart = index_to_baseline(visible, keys, show_spread=state.show_spread)
    else:
        chart = raw_points(visible, keys)

    correlation = r_squared(visible, keys[0], keys[1]) if len(keys) >= 2 else None

    return DashboardView(
        state=state,
        chart=chart,
        r_squared=correlation,
        derived=IndicatorCalculator(columns).calculate(store.observations),
        observation_count=len(store),
        rejected_rows=store.rejected_rows,
        latest={
            definition.id: latest_change(store.observations, definition)
            for definition in selected
        },
    )
