# =============================================================================
# WEATHER OBSERVER - CONFIGURATION
# =============================================================================
#
# Settings come from environment variables. A .env file is loaded first
# (the path passed to from_env, else python-dotenv's upward search),
# without overriding variables that are already set.
#
# VARIABLES:
#   WEATHER_PHOTON_URL        Photon geocoder endpoint
#   WEATHER_NWS_URL           api.weather.gov base URL
#   WEATHER_REFRESH_SECONDS   Poll interval (default 10)
#   WEATHER_HTTP_TIMEOUT      Per-request timeout (default 15)
#   WEATHER_USER_AGENT        User-Agent sent to both APIs
#   WEATHER_LOG_LEVEL         DEBUG / INFO / WARNING / ERROR
#
# =============================================================================

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from core.exceptions import ConfigError
from core.forecast_sources.nws_client import NWS_API_URL
from core.forecast_sources.photon_client import PHOTON_API_URL

DEFAULT_REFRESH_SECONDS = 10.0
DEFAULT_HTTP_TIMEOUT = 15.0
DEFAULT_USER_AGENT = "WeatherObserver/1.0 (weather-observer)"
DEFAULT_LOG_LEVEL = "INFO"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the observer."""
    photon_url: str = PHOTON_API_URL
    nws_url: str = NWS_API_URL
    refresh_seconds: float = DEFAULT_REFRESH_SECONDS
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(
        cls,
        env_file: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        """
        Build settings from the environment.

        Args:
            env_file: Explicit .env path (default: search from cwd)
            environ: Mapping to read instead of os.environ (no .env loading)

        Raises:
            ConfigError: A variable has an invalid value
        """
        if environ is None:
            load_dotenv(env_file, override=False)
            environ = os.environ

        log_level = environ.get("WEATHER_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError("WEATHER_LOG_LEVEL", log_level, f"expected one of {', '.join(LOG_LEVELS)}")

        return cls(
            photon_url=environ.get("WEATHER_PHOTON_URL", PHOTON_API_URL),
            nws_url=environ.get("WEATHER_NWS_URL", NWS_API_URL),
            refresh_seconds=parse_positive_float(
                "WEATHER_REFRESH_SECONDS",
                environ.get("WEATHER_REFRESH_SECONDS"),
                DEFAULT_REFRESH_SECONDS,
            ),
            http_timeout=parse_positive_float(
                "WEATHER_HTTP_TIMEOUT",
                environ.get("WEATHER_HTTP_TIMEOUT"),
                DEFAULT_HTTP_TIMEOUT,
            ),
            user_agent=environ.get("WEATHER_USER_AGENT", DEFAULT_USER_AGENT),
            log_level=log_level,
        )


def parse_positive_float(name: str, raw: Optional[str], default: float) -> float:
    """Parse a strictly positive number, falling back to default when unset."""
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(name, raw, "not a number")
    if value <= 0:
        raise ConfigError(name, raw, "must be greater than zero")
    return value
