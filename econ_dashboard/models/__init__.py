"""Observation, derived-point and dashboard state models."""

from econ_dashboard.models.observation import (
    BuffettPoint,
    IndexedPoint,
    LatestChange,
    MiseryPoint,
    Observation,
    PhilipsPoint,
    SahmPoint,
)
from econ_dashboard.models.state import DashboardState, MAX_SELECTED_INDICATORS, VIEW_MODES

__all__ = [
    "BuffettPoint",
    "DashboardState",
    "IndexedPoint",
    "LatestChange",
    "MAX_SELECTED_INDICATORS",
    "MiseryPoint",
    "Observation",
    "PhilipsPoint",
    "SahmPoint",
    "VIEW_MODES",
]
