# =============================================================================
# WEATHER OBSERVER - RUNNER
# Module: observer/runner.py
# Purpose: Resolve a city once, then poll forecast + alerts until cancelled
# =============================================================================
#
# STATES:
#   RESOLVING -> POLLING -> STOPPED
#
# - RESOLVING: geocode the city. Failure is fatal (exit code 1).
# - POLLING:   one cycle immediately, then one per interval. A failed cycle
#              is logged and the loop keeps going.
# - STOPPED:   the cancel event was set. No further fetches happen.
#
# The wait between cycles is Event.wait(interval): whichever comes first,
# cancellation or the interval, wins. The timer restarts after each cycle.
# The same event is handed to the service and providers, which check it
# before every request; a cycle cancelled part way renders nothing.
#
# =============================================================================

import logging
import threading
from enum import Enum
from typing import List, Optional

from core.exceptions import CancelledError, WeatherError, error_chain, find_cause
from core.weather_service import WeatherService
from models.data_models import Coordinates, Forecast, ForecastAlert
from shared.config import DEFAULT_REFRESH_SECONDS
from shared.logging_config import log_fields


class RunnerState(Enum):
    RESOLVING = "RESOLVING"
    POLLING = "POLLING"
    STOPPED = "STOPPED"


class WeatherRunner:
    """
    Polling driver around WeatherService.

    The logger is injected so output can be captured in tests and the
    runner never touches global logging state.
    """

    def __init__(
        self,
        service: WeatherService,
        logger: logging.Logger,
        interval_seconds: float = DEFAULT_REFRESH_SECONDS,
        cancel_event: Optional[threading.Event] = None,
    ):
        self.service = service
        self.logger = logger
        self.interval_seconds = interval_seconds
        self.cancel_event = cancel_event or threading.Event()
        self.state = RunnerState.RESOLVING
        self.coordinates: Optional[Coordinates] = None
        self.cycle_count = 0

    def stop(self) -> None:
        """Request cancellation."""
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def resolve(self, city: str) -> Optional[Coordinates]:
        """Geocode the city. Returns None (after logging) on failure."""
        self.state = RunnerState.RESOLVING
        try:
            coords = self.service.get_coordinates(city)
        except WeatherError as e:
            if find_cause(e, CancelledError) is None:
                log_fields(
                    self.logger, logging.ERROR,
                    "Unable to get coordinates information",
                    city=city, err=error_chain(e),
                )
            return None

        self.coordinates = coords
        log_fields(
            self.logger, logging.DEBUG,
            "Coordinates resolved",
            city=city, latitude=coords.latitude, longitude=coords.longitude,
        )
        return coords

    def run_cycle(self, coords: Coordinates) -> bool:
        """
        Fetch and render one forecast/alerts snapshot.

        A cycle cancelled between requests renders nothing and is not
        reported as an error.

        Returns:
            True if the cycle rendered, False if it failed or was cancelled
        """
        self.cycle_count += 1
        try:
            forecast, alerts = self.service.get_forecast_and_alerts(coords)
        except WeatherError as e:
            cancelled = find_cause(e, CancelledError)
            if cancelled is not None:
                log_fields(
                    self.logger, logging.DEBUG,
                    "Cycle cancelled",
                    cycle=self.cycle_count, operation=cancelled.operation,
                )
                return False
            log_fields(
                self.logger, logging.ERROR,
                "Unable to get forecast or alerts information.",
                err=error_chain(e),
            )
            return False

        render_forecast(self.logger, forecast)
        render_alerts(self.logger, alerts)
        log_fields(
            self.logger, logging.DEBUG,
            "Cycle complete",
            cycle=self.cycle_count, alerts=len(alerts),
        )
        return True

    def run(self, city: str, once: bool = False) -> int:
        """
        Resolve the city and poll until cancelled.

        Args:
            city: City name as typed by the user
            once: Run a single cycle and return

        Returns:
            Process exit code
        """
        coords = self.resolve(city)
        if coords is None:
            return self._shutdown(exit_code=1)

        if self.cancelled:
            return self._shutdown()

        self.state = RunnerState.POLLING
        ok = self.run_cycle(coords)
        if once:
            return self._shutdown(exit_code=0 if ok else 1)

        while True:
            if self.cancel_event.wait(self.interval_seconds):
                break
            self.run_cycle(coords)

        return self._shutdown()

    def _shutdown(self, exit_code: int = 0) -> int:
        """Enter STOPPED. A cancelled run always exits 0."""
        self.state = RunnerState.STOPPED
        if self.cancelled:
            self.logger.info("Application shutting down")
            return 0
        return exit_code


# =============================================================================
# RENDERING
# =============================================================================

def render_forecast(logger: logging.Logger, forecast: Forecast) -> None:
    fields = {
        "temperature": f"{forecast.temperature:.2f} {forecast.temperature_unit}",
        "wind_speed": forecast.wind_speed,
        "wind_direction": forecast.wind_direction,
        "probability_of_precipitation": forecast.probability_of_precipitation,
    }
    if forecast.short_forecast:
        fields["short_forecast"] = forecast.short_forecast
    log_fields(logger, logging.INFO, "New forecast information.", **fields)


def render_alerts(logger: logging.Logger, alerts: List[ForecastAlert]) -> None:
    for alert in alerts:
        log_fields(logger, logging.WARNING, "Alert", **alert.to_dict())
