# =============================================================================
# WEATHER OBSERVER - SHARED MODULE
# =============================================================================
#
# Shared utilities only. No weather logic lives here.
#
# CONTENTS:
# - Settings loaded from environment / .env
# - Structured (JSON lines) logging
#
# =============================================================================

from .config import Settings
from .logging_config import setup_logging, log_fields, JsonLineFormatter

__all__ = [
    "Settings",
    "setup_logging",
    "log_fields",
    "JsonLineFormatter",
]
