# =============================================================================
# WEATHER OBSERVER
# Module: models/data_models.py
# Purpose: Value objects passed between providers, service and runner
# =============================================================================
#
# DATA NOTE:
# All models are frozen dataclasses. A Forecast and its alerts are a fresh
# snapshot of one poll cycle and are never merged with earlier cycles.
# Coordinates are resolved once per run and reused for every cycle.
#
# =============================================================================

from dataclasses import dataclass, asdict
from typing import Dict, Any


@dataclass(frozen=True)
class Coordinates:
    """Geographic position in decimal degrees."""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Forecast:
    """
    Current forecast period for a location.

    Values are passed through verbatim from the provider. No unit
    conversion happens: temperature_unit says what temperature means,
    wind_speed is the provider's display string (e.g. "10 mph").

    probability_of_precipitation is a percentage (0-100).
    """
    temperature: float
    temperature_unit: str
    wind_speed: str
    wind_direction: str
    probability_of_precipitation: int
    start_time: str = ""
    end_time: str = ""
    short_forecast: str = ""


@dataclass(frozen=True)
class ForecastAlert:
    """One active hazard alert. No identity across poll cycles."""
    effective: str
    expires: str
    certainty: str
    urgency: str
    description: str
    instruction: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
