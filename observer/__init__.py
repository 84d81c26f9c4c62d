# =============================================================================
# WEATHER OBSERVER
# Module: observer/__init__.py
# Purpose: Polling driver and CLI entry point
# =============================================================================

from .runner import WeatherRunner, RunnerState, render_forecast, render_alerts

__all__ = [
    "WeatherRunner",
    "RunnerState",
    "render_forecast",
    "render_alerts",
]
