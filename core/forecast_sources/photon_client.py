# =============================================================================
# PHOTON GEOCODING SOURCE (no API key required)
# =============================================================================
#
# Photon (komoot) is an OpenStreetMap based geocoder.
# https://photon.komoot.io/
#
# Only US results are accepted. The first feature tagged countrycode "US"
# with a two-component geometry wins; order is whatever Photon returned.
# Photon geometries are GeoJSON, i.e. [lon, lat]. Features with a
# non-object properties or geometry member are skipped.
#
# =============================================================================

import logging
import threading
from typing import Any, Optional

import requests

from . import CoordinatesProvider, api_get, REQUEST_TIMEOUT
from ..exceptions import DecodeError, NotFoundError
from models.data_models import Coordinates

logger = logging.getLogger(__name__)

PHOTON_API_URL = "https://photon.komoot.io/api/"
US_COUNTRY_CODE = "US"


class PhotonGeocoder(CoordinatesProvider):
    """Photon API geocoder restricted to US cities."""

    SOURCE = "photon api"

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        base_url: str = PHOTON_API_URL,
        timeout: float = REQUEST_TIMEOUT,
        user_agent: Optional[str] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        self.session = session or requests.Session()
        self.base_url = base_url
        self.timeout = timeout
        self.headers = {"User-Agent": user_agent} if user_agent else None
        self.cancel_event = cancel_event

    def get_coordinates_for_us_city(self, city: str) -> Coordinates:
        if not city or not city.strip():
            raise NotFoundError(city)

        data = api_get(
            self.session,
            self.base_url,
            source=self.SOURCE,
            operation="coordinates",
            params={"q": city},
            headers=self.headers,
            timeout=self.timeout,
            cancel_event=self.cancel_event,
        )

        coords = find_us_coordinates(data)
        if coords is None:
            raise NotFoundError(city)

        logger.debug(f"Photon: {city} -> ({coords.latitude}, {coords.longitude})")
        return coords


def find_us_coordinates(data: Any) -> Optional[Coordinates]:
    """
    Pick the first US feature from a Photon response.

    Args:
        data: Decoded Photon GeoJSON FeatureCollection

    Returns:
        Coordinates of the first matching feature, or None

    Raises:
        DecodeError: The document has no usable "features" list
    """
    if not isinstance(data, dict):
        raise DecodeError("coordinates", "expected a JSON object")

    features = data.get("features")
    if features is None:
        return None
    if not isinstance(features, list):
        raise DecodeError("coordinates", "'features' is not a list")

    for feature in features:
        coords = _us_feature_coordinates(feature)
        if coords is not None:
            props = feature["properties"]
            logger.debug(
                f"Photon match: name={props.get('name')} state={props.get('state')}"
            )
            return coords

    return None


def _us_feature_coordinates(feature: Any) -> Optional[Coordinates]:
    """Coordinates of a single feature if it is a valid US point, else None."""
    if not isinstance(feature, dict):
        return None

    props = feature.get("properties")
    if not isinstance(props, dict) or props.get("countrycode") != US_COUNTRY_CODE:
        return None

    geometry = feature.get("geometry")
    if not isinstance(geometry, dict):
        return None

    points = geometry.get("coordinates")
    if not isinstance(points, list) or len(points) != 2:
        return None

    lon, lat = points
    if not _is_number(lon) or not _is_number(lat):
        return None

    return Coordinates(latitude=float(lat), longitude=float(lon))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
