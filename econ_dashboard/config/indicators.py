"""Static indicator metadata consumed by chart legends and tooltips."""

from dataclasses import dataclass


FORMAT_RULES = ("plain", "millions", "trillions", "dollars")


@dataclass(frozen=True)
class IndicatorDefinition:
    """Display metadata for one indicator column."""

    id: str
    label: str
    color: str
    unit: str
    column: str  # Key read from each Observation
    category: str
    description: str = ""
    fmt: str = "plain"  # One of FORMAT_RULES

    def __post_init__(self):
        if self.fmt not in FORMAT_RULES:
            raise ValueError(f"Unknown format rule for {self.id}: {self.fmt}")

    @property
    def is_percentage(self) -> bool:
        return self.unit == "%"


def _number(value: float) -> str:
    """Render like a chart tooltip: no trailing .0 on whole numbers."""
    if float(value).is_integer():
        return str(int(value))
    return str(round(value, 4))


def format_value(definition: IndicatorDefinition, value: float | None) -> str:
    """Format a raw value using the indicator's formatting rule."""
    if value is None:
        return "N/A"
    if definition.fmt == "millions":
        return f"{value / 1000:.1f}M"
    if definition.fmt == "trillions":
        return f"${value / 1000:.1f}T"
    if definition.fmt == "dollars":
        return f"${value:,.0f}"
    return f"{_number(value)}{definition.unit}"


def _table(*definitions: IndicatorDefinition) -> dict[str, IndicatorDefinition]:
    return {d.id: d for d in definitions}


# FRED-style export (observation_date, unemployment_rate, ...)
LEGACY_INDICATORS = _table(
    IndicatorDefinition(
        id="unemployment_rate",
        label="Unemployment Rate",
        color="#8884d8",
        unit="%",
        column="unemployment_rate",
        category="Labor Market",
        description="Unemployed as % of labor force.",
    ),
    IndicatorDefinition(
        id="S&P 500",
        label="S&P 500",
        color="#10b981",
        unit="",
        column="S&P 500",
        category="Macro & Markets",
        description="Market cap index of 500 leading US companies.",
        fmt="dollars",
    ),
    IndicatorDefinition(
        id="job_openings",
        label="Job Openings",
        color="#f59e0b",
        unit="",
        column="job_openings",
        category="Labor Market",
        description="Unfilled jobs on last business day of month.",
        fmt="millions",
    ),
    IndicatorDefinition(
        id="fed_rate",
        label="Fed Rate",
        color="#ef4444",
        unit="%",
        column="fed_rate",
        category="Monetary Policy",
        description="Overnight federal funds interest rate.",
    ),
    IndicatorDefinition(
        id="30 year mortgage",
        label="30Y Mortgage",
        color="#b91c1c",
        unit="%",
        column="30 year mortgage",
        category="Monetary Policy",
        description="Fixed rate for 30-year mortgages.",
    ),
    IndicatorDefinition(
        id="Housing Price Index",
        label="Housing Index",
        color="#78350f",
        unit="",
        column="Housing Price Index",
        category="Housing",
        description="Single-family house price movement.",
    ),
    IndicatorDefinition(
        id="CPI",
        label="CPI (Inflation)",
        color="#ec4899",
        unit="",
        column="CPI",
        category="Macro & Markets",
        description="Consumer Price Index (inflation measure).",
    ),
    IndicatorDefinition(
        id="avg_weeks_unemployed",
        label="Avg Weeks Unemployed",
        color="#86efac",
        unit=" wks",
        column="avg_weeks_unemployed",
        category="Labor Market",
        description="Average duration of unemployment.",
    ),
    IndicatorDefinition(
        id="unemployed_count",
        label="Unemployed Count",
        color="#3b82f6",
        unit=" ppl",
        column="unemployed_count",
        category="Labor Market",
        description="Total number of unemployed people.",
    ),
)

# Spreadsheet export (Observed Date, Unemployment Rate, ...)
EXTENDED_INDICATORS = _table(
    # Labor market
    IndicatorDefinition(
        id="Unemployment Rate",
        label="Unemployment Rate",
        color="#D65D5D",
        unit="%",
        column="Unemployment Rate",
        category="Labor Market",
        description="Percentage of labor force jobless.",
    ),
    IndicatorDefinition(
        id="Unemployeed Count",
        label="Unemployment Count",
        color="#E6A35C",
        unit="",
        column="Unemployeed Count",
        category="Labor Market",
        description="Total number of unemployed persons.",
        fmt="millions",
    ),
    IndicatorDefinition(
        id="Avg Weeks Unemployeed",
        label="Avg Weeks Unemployed",
        color="#6DA36D",
        unit=" wks",
        column="Avg Weeks Unemployeed",
        category="Labor Market",
        description="Average duration of unemployment.",
    ),
    IndicatorDefinition(
        id="Unemployed 27 weeks",
        label="Unemployed 27+ Weeks",
        color="#5D8AA8",
        unit="",
        column="Unemployed 27 weeks",
        category="Labor Market",
        description="Long-term unemployed (27 weeks+).",
        fmt="millions",
    ),
    IndicatorDefinition(
        id="Job Openings",
        label="Job Openings",
        color="#818CF8",
        unit="",
        column="Job Openings",
        category="Labor Market",
        description="Measure of labor demand (JOLTS).",
        fmt="millions",
    ),
    IndicatorDefinition(
        id="Labor Participation Rate",
        label="Labor Participation",
        color="#F472B6",
        unit="%",
        column="Labor Participation Rate",
        category="Labor Market",
        description="Active workforce percentage.",
    ),
    # Monetary policy
    IndicatorDefinition(
        id="Fed Rate",
        label="Fed Funds Rate",
        color="#D9534F",
        unit="%",
        column="Fed Rate",
        category="Monetary Policy",
        description="Interest rate for lending balances.",
    ),
    IndicatorDefinition(
        id="30 year mortgage",
        label="30Y Mortgage",
        color="#4EA8DE",
        unit="%",
        column="30 year mortgage",
        category="Monetary Policy",
        description="Average 30-year fixed mortgage rate.",
    ),
    IndicatorDefinition(
        id="15 year mortgage",
        label="15Y Mortgage",
        color="#2563eb",
        unit="%",
        column="15 year mortgage",
        category="Monetary Policy",
        description="Average 15-year fixed mortgage rate.",
    ),
    # Housing
    IndicatorDefinition(
        id="Housing Price Index",
        label="Housing Price Index",
        color="#2C6E49",
        unit="",
        column="Housing Price Index",
        category="Housing",
        description="US National Home Price Index.",
    ),
    # Macro & markets
    IndicatorDefinition(
        id="S&P 500",
        label="S&P 500",
        color="#4C956C",
        unit="",
        column="S&P 500",
        category="Macro & Markets",
        description="Market cap index of 500 leading US companies.",
        fmt="dollars",
    ),
    IndicatorDefinition(
        id="CPI",
        label="CPI (Inflation)",
        color="#9B5DE5",
        unit="",
        column="CPI",
        category="Macro & Markets",
        description="Consumer Price Index.",
    ),
    IndicatorDefinition(
        id="National Debt (b)",
        label="National Debt",
        color="#6C757D",
        unit="",
        column="National Debt (b)",
        category="Macro & Markets",
        description="Total US National Debt (Billions).",
        fmt="trillions",
    ),
    IndicatorDefinition(
        id="GDP",
        label="US GDP",
        color="#E6A35C",
        unit="",
        column="GDP",
        category="Macro & Markets",
        description="Gross Domestic Product.",
        fmt="trillions",
    ),
    IndicatorDefinition(
        id="Stock Market (b)",
        label="Stock Market Value",
        color="#5D8AA8",
        unit="",
        column="Stock Market (b)",
        category="Macro & Markets",
        description="Total value of US Stock Market.",
        fmt="trillions",
    ),
)

INDICATOR_SETS: dict[str, dict[str, IndicatorDefinition]] = {
    "legacy": LEGACY_INDICATORS,
    "extended": EXTENDED_INDICATORS,
}

# Indicators charted before the user picks any
DEFAULT_SELECTIONS: dict[str, tuple[str, ...]] = {
    "legacy": ("job_openings", "S&P 500"),
    "extended": ("S&P 500", "Job Openings"),
}


def indicators_by_category(
    indicators: dict[str, IndicatorDefinition],
) -> dict[str, list[IndicatorDefinition]]:
    """Group indicators by category, preserving table order."""
    groups: dict[str, list[IndicatorDefinition]] = {}
    for definition in indicators.values():
        groups.setdefault(definition.category, []).append(definition)
    return groups
