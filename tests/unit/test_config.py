"""
UNIT TESTS - SETTINGS
=====================
Tests for shared/config.py
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest

from core.exceptions import ConfigError
from shared.config import (
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_REFRESH_SECONDS,
    DEFAULT_USER_AGENT,
    Settings,
)


def test_defaults_when_environment_is_empty():
    settings = Settings.from_env(environ={})

    assert settings.photon_url == "https://photon.komoot.io/api/"
    assert settings.nws_url == "https://api.weather.gov"
    assert settings.refresh_seconds == DEFAULT_REFRESH_SECONDS == 10.0
    assert settings.http_timeout == DEFAULT_HTTP_TIMEOUT == 15.0
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.log_level == "INFO"


def test_values_from_environment():
    settings = Settings.from_env(environ={
        "WEATHER_PHOTON_URL": "http://localhost:2322/api",
        "WEATHER_NWS_URL": "http://localhost:8080",
        "WEATHER_REFRESH_SECONDS": "2.5",
        "WEATHER_HTTP_TIMEOUT": "30",
        "WEATHER_USER_AGENT": "me@example.com",
        "WEATHER_LOG_LEVEL": "debug",
    })

    assert settings.photon_url == "http://localhost:2322/api"
    assert settings.nws_url == "http://localhost:8080"
    assert settings.refresh_seconds == 2.5
    assert settings.http_timeout == 30.0
    assert settings.user_agent == "me@example.com"
    assert settings.log_level == "DEBUG"


def test_blank_numeric_value_falls_back_to_default():
    settings = Settings.from_env(environ={"WEATHER_REFRESH_SECONDS": "  "})

    assert settings.refresh_seconds == DEFAULT_REFRESH_SECONDS


@pytest.mark.parametrize("name, raw", [
    ("WEATHER_REFRESH_SECONDS", "soon"),
    ("WEATHER_REFRESH_SECONDS", "0"),
    ("WEATHER_HTTP_TIMEOUT", "-1"),
])
def test_invalid_numbers_raise_config_error(name, raw):
    with pytest.raises(ConfigError) as exc_info:
        Settings.from_env(environ={name: raw})

    assert exc_info.value.name == name


def test_invalid_log_level_raises_config_error():
    with pytest.raises(ConfigError):
        Settings.from_env(environ={"WEATHER_LOG_LEVEL": "LOUD"})


def test_env_file_is_loaded_without_override(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "WEATHER_REFRESH_SECONDS=42\nWEATHER_USER_AGENT=from-dotenv\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("WEATHER_REFRESH_SECONDS", "1")
    monkeypatch.delenv("WEATHER_REFRESH_SECONDS")
    monkeypatch.setenv("WEATHER_USER_AGENT", "from-shell")

    settings = Settings.from_env(env_file=env_file)

    assert settings.refresh_seconds == 42.0
    assert settings.user_agent == "from-shell"
