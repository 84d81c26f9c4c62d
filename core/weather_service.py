# =============================================================================
# WEATHER OBSERVER - WEATHER SERVICE
# =============================================================================
#
# Composes a CoordinatesProvider and a ForecastProvider behind one interface.
#
# get_forecast_and_alerts() is all-or-nothing per cycle:
# - forecast fails -> ServiceError("forecast"), alerts are NOT requested
# - alerts fail    -> ServiceError("alerts"), the forecast is discarded
# - cancel_event set before a step -> CancelledError, raised unwrapped
#
# =============================================================================

import logging
import threading
from typing import List, Optional, Tuple

from .exceptions import CancelledError, ServiceError, WeatherError
from .forecast_sources import CoordinatesProvider, ForecastProvider
from models.data_models import Coordinates, Forecast, ForecastAlert

logger = logging.getLogger(__name__)


class WeatherService:
    """Geocoding plus forecast/alerts lookups for one location."""

    def __init__(
        self,
        coordinates_provider: CoordinatesProvider,
        forecast_provider: ForecastProvider,
        cancel_event: Optional[threading.Event] = None,
    ):
        self.coordinates_provider = coordinates_provider
        self.forecast_provider = forecast_provider
        self.cancel_event = cancel_event

    def get_coordinates(self, city: str) -> Coordinates:
        return self.coordinates_provider.get_coordinates_for_us_city(city)

    def get_forecast_and_alerts(
        self, coords: Coordinates
    ) -> Tuple[Forecast, List[ForecastAlert]]:
        """
        Fetch the current forecast, then the active alerts.

        Args:
            coords: Location resolved by get_coordinates()

        Returns:
            (forecast, alerts)

        Raises:
            CancelledError: Shutdown was requested before a step started
            ServiceError: Either step failed; the provider error is __cause__
        """
        try:
            self._check_cancelled("forecast")
            forecast = self.forecast_provider.get_current_forecast(
                coords.latitude, coords.longitude
            )
        except CancelledError:
            raise
        except WeatherError as e:
            raise ServiceError("forecast") from e

        try:
            self._check_cancelled("alerts")
            alerts = self.forecast_provider.get_alerts(coords.latitude, coords.longitude)
        except CancelledError:
            raise
        except WeatherError as e:
            raise ServiceError("alerts") from e

        logger.debug(f"Cycle fetched: forecast + {len(alerts)} alert(s)")
        return forecast, alerts

    def _check_cancelled(self, operation: str) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise CancelledError(operation)
