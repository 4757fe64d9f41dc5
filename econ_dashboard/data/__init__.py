"""CSV ingestion, date normalization and dataset loading."""

from .csv_parser import ParseResult, parse_csv
from .dates import NormalizedDate, normalize_date
from .loader import DataLoadError, DatasetLoader
from .store import ObservationStore, has_column

__all__ = [
    "DataLoadError",
    "DatasetLoader",
    "NormalizedDate",
    "ObservationStore",
    "ParseResult",
    "has_column",
    "normalize_date",
    "parse_csv",
]
