# =============================================================================
# WEATHER OBSERVER
# Module: models/__init__.py
# Purpose: Package initialization for data models
# =============================================================================

from .data_models import (
    Coordinates,
    Forecast,
    ForecastAlert,
)

__all__ = [
    "Coordinates",
    "Forecast",
    "ForecastAlert",
]
