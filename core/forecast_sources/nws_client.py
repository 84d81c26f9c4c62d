# =============================================================================
# NWS FORECAST SOURCE - api.weather.gov (no API key required)
# =============================================================================
#
# NOAA requires a two-step process for forecasts:
# 1. /points/{lat},{lon}  -> grid point with the forecastHourly URL
# 2. GET forecastHourly   -> periods[], the first one is "current"
#
# Alerts are independent of the grid point:
#   /alerts/active?point={lat},{lon}
#
# Responses are requested as JSON-LD (Accept: application/ld+json), which
# flattens "properties" into the top level and lists alerts under "@graph".
#
# =============================================================================

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from . import ForecastProvider, api_get, REQUEST_TIMEOUT
from ..exceptions import DecodeError, NoDataError
from models.data_models import Forecast, ForecastAlert

logger = logging.getLogger(__name__)

NWS_API_URL = "https://api.weather.gov"
ACCEPT_HEADER = "application/ld+json"

ALERT_FIELDS = ("effective", "expires", "certainty", "urgency", "description", "instruction")


def format_coordinate(value: float) -> str:
    """
    Format a coordinate the way api.weather.gov expects it in URLs.

    Four decimals with trailing zeros and a dangling point removed:
    37.0 -> "37", 37.12 -> "37.12", -122.08 -> "-122.08".
    """
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    if text in ("", "-", "-0"):
        return "0"
    return text


@dataclass(frozen=True)
class GridPoint:
    """Result of the /points lookup. Only forecast_hourly is required."""
    forecast_hourly: str
    forecast: str = ""
    grid_id: str = ""
    grid_x: Optional[int] = None
    grid_y: Optional[int] = None
    time_zone: str = ""


class NWSForecastClient(ForecastProvider):
    """Forecast and alert client for the National Weather Service API."""

    SOURCE = "api.weather.gov"

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        base_url: str = NWS_API_URL,
        timeout: float = REQUEST_TIMEOUT,
        user_agent: Optional[str] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        self.session = session or requests.Session()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.cancel_event = cancel_event
        self.headers = {"Accept": ACCEPT_HEADER}
        if user_agent:
            self.headers["User-Agent"] = user_agent

    # -------------------------------------------------------------------------
    # Forecast
    # -------------------------------------------------------------------------

    def get_current_forecast(self, lat: float, lon: float) -> Forecast:
        point = self.get_point(lat, lon)

        data = self._get(point.forecast_hourly, operation="forecast")
        periods = _get_list(data, "periods", operation="forecast")
        if not periods:
            raise NoDataError()

        return parse_period(periods[0])

    def get_point(self, lat: float, lon: float) -> GridPoint:
        """Resolve the grid point (and forecast feed URLs) for a location."""
        url = f"{self.base_url}/points/{format_coordinate(lat)},{format_coordinate(lon)}"
        data = self._get(url, operation="point")
        point = parse_point(data)
        logger.debug(
            f"NWS point {lat},{lon}: {point.grid_id} {point.grid_x},{point.grid_y} "
            f"tz={point.time_zone}"
        )
        return point

    # -------------------------------------------------------------------------
    # Alerts
    # -------------------------------------------------------------------------

    def get_alerts(self, lat: float, lon: float) -> List[ForecastAlert]:
        url = f"{self.base_url}/alerts/active"
        # Built by hand: requests would percent-encode the comma
        url += f"?point={format_coordinate(lat)},{format_coordinate(lon)}"
        data = self._get(url, operation="alerts")
        return parse_alerts(data)

    def _get(self, url: str, operation: str) -> Any:
        return api_get(
            self.session,
            url,
            source=self.SOURCE,
            operation=operation,
            headers=self.headers,
            timeout=self.timeout,
            cancel_event=self.cancel_event,
        )


# =============================================================================
# RESPONSE PARSING
# =============================================================================

def parse_point(data: Any) -> GridPoint:
    """Decode a /points response."""
    if not isinstance(data, dict):
        raise DecodeError("point", "expected a JSON object")

    forecast_hourly = data.get("forecastHourly")
    if not isinstance(forecast_hourly, str) or not forecast_hourly:
        raise DecodeError("point", "missing forecastHourly URL")

    return GridPoint(
        forecast_hourly=forecast_hourly,
        forecast=data.get("forecast") or "",
        grid_id=data.get("gridId") or data.get("cwa") or "",
        grid_x=data.get("gridX"),
        grid_y=data.get("gridY"),
        time_zone=data.get("timeZone") or "",
    )


def parse_period(period: Any) -> Forecast:
    """Decode one forecast period into a Forecast."""
    if not isinstance(period, dict):
        raise DecodeError("forecast", "period is not a JSON object")

    try:
        temperature = float(period["temperature"])
    except (KeyError, TypeError, ValueError) as e:
        raise DecodeError("forecast", "invalid temperature") from e

    pop = period.get("probabilityOfPrecipitation") or {}
    if not isinstance(pop, dict):
        raise DecodeError("forecast", "invalid probabilityOfPrecipitation")
    try:
        precipitation = int(pop.get("value") or 0)
    except (TypeError, ValueError) as e:
        raise DecodeError("forecast", "invalid probabilityOfPrecipitation") from e

    return Forecast(
        temperature=temperature,
        temperature_unit=_str(period.get("temperatureUnit")),
        wind_speed=_str(period.get("windSpeed")),
        wind_direction=_str(period.get("windDirection")),
        probability_of_precipitation=precipitation,
        start_time=_str(period.get("startTime")),
        end_time=_str(period.get("endTime")),
        short_forecast=_str(period.get("shortForecast")),
    )


def parse_alerts(data: Any) -> List[ForecastAlert]:
    """Decode an /alerts/active JSON-LD response."""
    alerts = []
    for item in _get_list(data, "@graph", operation="alerts"):
        if not isinstance(item, dict):
            raise DecodeError("alerts", "alert is not a JSON object")
        fields: Dict[str, str] = {name: _str(item.get(name)) for name in ALERT_FIELDS}
        alerts.append(ForecastAlert(**fields))
    return alerts


def _get_list(data: Any, key: str, operation: str) -> List[Any]:
    """data[key] as a list; a missing or null key is an empty list."""
    if not isinstance(data, dict):
        raise DecodeError(operation, "expected a JSON object")
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(operation, f"'{key}' is not a list")
    return value


def _str(value: Any) -> str:
    return "" if value is None else str(value)
