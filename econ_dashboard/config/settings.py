"""Configuration settings for the dashboard."""

from dataclasses import dataclass, field
from pathlib import Path
import os

from dotenv import load_dotenv

from econ_dashboard.config.indicators import INDICATOR_SETS, IndicatorDefinition


load_dotenv()


@dataclass(frozen=True)
class ColumnMap:
    """Column names the calculators read for one CSV variant."""

    date: str
    unemployment: str
    cpi: str
    gdp: str
    market_cap: str


# Column naming variants found in the indicator CSV exports
COLUMN_VARIANTS: dict[str, ColumnMap] = {
    # FRED-style export with snake_case headers
    "legacy": ColumnMap(
        date="observation_date",
        unemployment="unemployment_rate",
        cpi="CPI",
        gdp="gdp",
        market_cap="S&P 500",
    ),
    # Spreadsheet export with labelled headers
    "extended": ColumnMap(
        date="Observed Date",
        unemployment="Unemployment Rate",
        cpi="CPI",
        gdp="GDP",
        market_cap="Stock Market (b)",
    ),
}

DEFAULT_VARIANT = "legacy"
DEFAULT_COLUMNS = COLUMN_VARIANTS[DEFAULT_VARIANT]

# Columns that are never zero in practice: a literal 0 marks a data gap
ZERO_AS_MISSING_COLUMNS: frozenset[str] = frozenset({
    "CPI",
    "gdp",
    "GDP",
    "S&P 500",
    "Stock Market (b)",
    "National Debt (b)",
    "Housing Price Index",
})

# Parsed years below this are pushed forward one century ("1/1/00" -> 2000)
CENTURY_PIVOT_YEAR = 1980

SAMPLE_CSV_PATH = Path(__file__).parent.parent / "data" / "sample_indicators.csv"


def _env_path(name: str) -> Path | None:
    value = os.getenv(name, "").strip()
    return Path(value) if value else None


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Application settings."""

    csv_path: Path | None = field(
        default_factory=lambda: _env_path("ECON_DASHBOARD_CSV_PATH")
    )
    csv_url: str = field(default_factory=lambda: os.getenv("ECON_DASHBOARD_CSV_URL", ""))
    variant: str = field(
        default_factory=lambda: os.getenv("ECON_DASHBOARD_VARIANT", DEFAULT_VARIANT)
    )
    quote_aware: bool = field(
        default_factory=lambda: _env_flag("ECON_DASHBOARD_QUOTE_AWARE")
    )
    http_timeout: float = field(
        default_factory=lambda: float(os.getenv("ECON_DASHBOARD_HTTP_TIMEOUT", "30"))
    )

    def validate(self) -> None:
        """Validate settings."""
        if self.variant not in COLUMN_VARIANTS:
            raise ValueError(
                f"Unknown CSV variant: {self.variant!r}. "
                f"Available: {', '.join(COLUMN_VARIANTS)}"
            )
        if self.http_timeout <= 0:
            raise ValueError("ECON_DASHBOARD_HTTP_TIMEOUT must be positive")

    @property
    def columns(self) -> ColumnMap:
        """Column mapping for the configured variant."""
        self.validate()
        return COLUMN_VARIANTS[self.variant]

    @property
    def indicators(self) -> dict[str, IndicatorDefinition]:
        """Indicator table for the configured variant."""
        self.validate()
        return INDICATOR_SETS[self.variant]

    def has_remote(self) -> bool:
        """Check if a remote CSV URL is configured."""
        return bool(self.csv_url)
