"""
Settings loading and logging setup.

Settings are read once from ``GHL_*`` environment variables and cached.
Tests clear the cache with ``get_settings.cache_clear()``.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from ghl_mcp.config.schemas import HighLevelSettings
from ghl_mcp.integrations.highlevel.core import DEFAULT_API_VERSION, DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@lru_cache()
def get_settings() -> HighLevelSettings:
    """
    Get settings from environment.

    Uses lru_cache for singleton pattern.
    """
    return HighLevelSettings(
        # Credentials
        api_key=os.getenv("GHL_API_KEY", ""),
        location_id=os.getenv("GHL_LOCATION_ID", ""),
        # API
        base_url=os.getenv("GHL_BASE_URL", DEFAULT_BASE_URL),
        api_version=os.getenv("GHL_API_VERSION", DEFAULT_API_VERSION),
        timeout=float(os.getenv("GHL_TIMEOUT", "30")),
        # Runtime
        log_level=os.getenv("GHL_LOG_LEVEL", "INFO"),
        debug=os.getenv("GHL_DEBUG", "false").lower() == "true",
    )


def configure_logging(settings: HighLevelSettings | None = None) -> None:
    """
    Configure root logging for an entry point.

    ``debug=True`` forces DEBUG, which also logs request payloads.
    Library modules never call this.
    """
    settings = settings or get_settings()
    if settings.debug:
        level = logging.DEBUG
    else:
        level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.debug(f"Logging configured at {logging.getLevelName(level)}")
