"""Configuration: settings, CSV column variants and indicator metadata."""

from econ_dashboard.config.indicators import (
    DEFAULT_SELECTIONS,
    FORMAT_RULES,
    INDICATOR_SETS,
    IndicatorDefinition,
    format_value,
)
from econ_dashboard.config.settings import (
    CENTURY_PIVOT_YEAR,
    COLUMN_VARIANTS,
    DEFAULT_COLUMNS,
    SAMPLE_CSV_PATH,
    ZERO_AS_MISSING_COLUMNS,
    ColumnMap,
    Settings,
)

__all__ = [
    "CENTURY_PIVOT_YEAR",
    "COLUMN_VARIANTS",
    "DEFAULT_COLUMNS",
    "DEFAULT_SELECTIONS",
    "FORMAT_RULES",
    "INDICATOR_SETS",
    "SAMPLE_CSV_PATH",
    "ZERO_AS_MISSING_COLUMNS",
    "ColumnMap",
    "IndicatorDefinition",
    "Settings",
    "format_value",
]
