"""Economic indicators dashboard: CSV ingestion and derived analyses."""

__version__ = "0.1.0"
