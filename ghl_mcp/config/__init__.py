"""
ghl-mcp Configuration

Environment-driven settings (``GHL_*``) and logging setup.
"""

from .schemas import HighLevelSettings
from .settings import LOG_FORMAT, configure_logging, get_settings

__all__ = [
    "HighLevelSettings",
    "LOG_FORMAT",
    "configure_logging",
    "get_settings",
]
