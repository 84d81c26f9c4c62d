# =============================================================================
# FORECAST SOURCES - Provider contracts and shared HTTP helper
# =============================================================================
#
# Two small interfaces are injected into WeatherService:
# - CoordinatesProvider: city name -> Coordinates
# - ForecastProvider:    Coordinates -> Forecast / List[ForecastAlert]
#
# Concrete implementations live next to this file (photon_client,
# nws_client). Tests substitute stubs at this seam.
#
# =============================================================================

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import requests

from ..exceptions import CancelledError, DecodeError, ProviderError
from models.data_models import Coordinates, Forecast, ForecastAlert

logger = logging.getLogger(__name__)


# =============================================================================
# PROVIDER CONTRACTS
# =============================================================================

class CoordinatesProvider(ABC):
    """Resolves a free-text city name to coordinates."""

    @abstractmethod
    def get_coordinates_for_us_city(self, city: str) -> Coordinates:
        """
        Resolve a US city name.

        Raises:
            NotFoundError: No US candidate matched
            ProviderError: Transport, status or decode failure
        """
        ...


class ForecastProvider(ABC):
    """Current forecast and active alerts for a coordinate pair."""

    @abstractmethod
    def get_current_forecast(self, lat: float, lon: float) -> Forecast:
        """
        Fetch the current forecast period.

        Raises:
            NoDataError: The feed returned no periods
            ProviderError: Transport, status or decode failure
        """
        ...

    @abstractmethod
    def get_alerts(self, lat: float, lon: float) -> List[ForecastAlert]:
        """
        Fetch active alerts. An empty list means no alerts.

        Raises:
            ProviderError: Transport, status or decode failure
        """
        ...


# =============================================================================
# HTTP HELPER
# =============================================================================

REQUEST_TIMEOUT = 15  # seconds


def api_get(
    session: requests.Session,
    url: str,
    source: str,
    operation: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = REQUEST_TIMEOUT,
    cancel_event: Optional[threading.Event] = None,
) -> Any:
    """
    HTTP GET with JSON response. Shared across all providers.

    Args:
        session: requests session (injected so tests can stub it)
        url: Full URL
        source: Provider name used in error messages (e.g. "api.weather.gov")
        operation: Step name attached to errors (e.g. "point", "alerts")
        params: Query parameters
        headers: Extra request headers
        timeout: Per-request timeout in seconds
        cancel_event: Shutdown token, checked before the request is sent

    Returns:
        Decoded JSON document

    Raises:
        CancelledError: cancel_event was already set
        ProviderError: Request failed or status was not 200
        DecodeError: Body was not valid JSON
    """
    if cancel_event is not None and cancel_event.is_set():
        raise CancelledError(operation)

    logger.debug(f"GET {url} params={params}")
    try:
        resp = session.get(url, params=params, headers=headers, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise ProviderError(f"unable to request {source}", operation=operation) from e

    if resp.status_code != 200:
        raise ProviderError.from_status(source, resp.status_code, resp.text, operation=operation)

    try:
        return resp.json()
    except ValueError as e:
        raise DecodeError(operation) from e


__all__ = [
    "CoordinatesProvider",
    "ForecastProvider",
    "api_get",
    "REQUEST_TIMEOUT",
]
