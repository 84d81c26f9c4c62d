# =============================================================================
# WEATHER OBSERVER - LOGGING CONFIGURATION
# =============================================================================
#
# All observer output is structured: one JSON object per line on stdout.
#
#   {"time": "...", "level": "INFO", "logger": "weather",
#    "msg": "New forecast information.", "temperature": "72.50 F", ...}
#
# Structured fields are passed with extra={"fields": {...}}.
#
# setup_logging() returns the configured logger. Callers pass it down
# explicitly instead of relying on the root logger.
#
# =============================================================================

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, IO, Optional, Union

LOGGER_NAME = "weather"


class JsonLineFormatter(logging.Formatter):
    """Format a LogRecord as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        fields = getattr(record, "fields", None)
        if isinstance(fields, dict):
            for key, value in fields.items():
                if key not in payload:
                    payload[key] = value

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(
    level: Union[int, str] = logging.INFO,
    stream: Optional[IO[str]] = None,
    name: str = LOGGER_NAME,
) -> logging.Logger:
    """
    Configure the observer logger.

    Args:
        level: Logging level (int or name such as "DEBUG")
        stream: Output stream (default: sys.stdout)
        name: Logger name

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(JsonLineFormatter())
    handler.setLevel(level)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False

    # Module loggers (core.*) share the same output
    for module_logger in ("core", "observer"):
        child = logging.getLogger(module_logger)
        child.setLevel(level)
        child.handlers.clear()
        child.addHandler(handler)
        child.propagate = False

    # Reduce noise from urllib3
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return logger


def log_fields(logger: logging.Logger, level: int, msg: str, **fields: Any) -> None:
    """Log msg with structured key/value fields."""
    logger.log(level, msg, extra={"fields": fields})
