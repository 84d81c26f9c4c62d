# =============================================================================
# WEATHER OBSERVER
# Module: observer/__main__.py
# Purpose: CLI entry point for the forecast/alerts observer
# =============================================================================
#
# USAGE:
# python -m observer "Philadelphia"
# python -m observer "Seattle" --interval 30 --verbose
#
# OPTIONS:
# city         US city name (required)
# --interval   Seconds between refreshes (default: WEATHER_REFRESH_SECONDS or 10)
# --timeout    Per-request HTTP timeout (default: WEATHER_HTTP_TIMEOUT or 15)
# --once       Run a single forecast/alerts cycle, then exit
# --verbose    Enable debug logging
#
# Ctrl+C / SIGTERM stop the loop cleanly.
#
# =============================================================================

import argparse
import signal
import sys
import threading
from dataclasses import replace
from typing import List, Optional

import requests

from core.exceptions import ConfigError
from core.forecast_sources.nws_client import NWSForecastClient
from core.forecast_sources.photon_client import PhotonGeocoder
from core.weather_service import WeatherService
from shared.config import Settings
from shared.logging_config import setup_logging

from .runner import WeatherRunner


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="python -m observer",
        description="Weather Observer - current NWS forecast and active alerts for a US city",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m observer "Philadelphia"
  python -m observer "Denver" --interval 60
  python -m observer "Miami" --once --verbose
        """,
    )

    parser.add_argument(
        "city",
        help="US city name, e.g. \"Philadelphia\"",
    )

    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Seconds between refreshes (default: 10)",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request HTTP timeout in seconds (default: 15)",
    )

    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single cycle and exit",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    if args.interval is not None and args.interval <= 0:
        parser.error("--interval must be greater than zero")
    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be greater than zero")

    return args


def build_runner(
    settings: Settings,
    logger,
    cancel_event: threading.Event,
    session: Optional[requests.Session] = None,
) -> WeatherRunner:
    """Wire the providers, service and runner from settings."""
    session = session or requests.Session()
    geocoder = PhotonGeocoder(
        session=session,
        base_url=settings.photon_url,
        timeout=settings.http_timeout,
        user_agent=settings.user_agent,
        cancel_event=cancel_event,
    )
    nws = NWSForecastClient(
        session=session,
        base_url=settings.nws_url,
        timeout=settings.http_timeout,
        user_agent=settings.user_agent,
        cancel_event=cancel_event,
    )
    service = WeatherService(geocoder, nws, cancel_event=cancel_event)
    return WeatherRunner(
        service,
        logger,
        interval_seconds=settings.refresh_seconds,
        cancel_event=cancel_event,
    )


def install_signal_handlers(cancel_event: threading.Event) -> None:
    """SIGINT / SIGTERM set the cancel event instead of raising."""
    def _handler(signum, frame):
        # Event.set() takes the condition lock the interrupted main thread
        # may be holding inside Event.wait(); set it from a helper thread.
        threading.Thread(target=cancel_event.set, name="cancel", daemon=True).start()

    signal.signal(signal.SIGINT, _handler)
    signal.signal(signal.SIGTERM, _handler)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        settings = Settings.from_env()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    overrides = {}
    if args.interval is not None:
        overrides["refresh_seconds"] = args.interval
    if args.timeout is not None:
        overrides["http_timeout"] = args.timeout
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    if overrides:
        settings = replace(settings, **overrides)

    logger = setup_logging(level=settings.log_level)

    cancel_event = threading.Event()
    install_signal_handlers(cancel_event)

    with requests.Session() as session:
        runner = build_runner(settings, logger, cancel_event, session=session)
        return runner.run(args.city, once=args.once)


if __name__ == "__main__":
    sys.exit(main())
