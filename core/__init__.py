# =============================================================================
# WEATHER OBSERVER - CORE MODULE
# =============================================================================
#
# MODULES:
# - weather_service: Combines geocoding and forecast/alert providers
# - exceptions: Error hierarchy shared by every layer
# - forecast_sources: Provider contracts, Photon geocoder, NWS client
#
# =============================================================================

from .exceptions import (
    WeatherError,
    ProviderError,
    DecodeError,
    NotFoundError,
    NoDataError,
    ServiceError,
    CancelledError,
    ConfigError,
    error_chain,
    find_cause,
)
from .weather_service import WeatherService

__all__ = [
    "WeatherError",
    "ProviderError",
    "DecodeError",
    "NotFoundError",
    "NoDataError",
    "ServiceError",
    "CancelledError",
    "ConfigError",
    "error_chain",
    "find_cause",
    "WeatherService",
]
