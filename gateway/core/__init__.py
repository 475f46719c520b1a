"""
Core package for configuration, logging, and the error taxonomy.
"""

from gateway.core.config import Settings, get_settings
from gateway.core.logging import configure_structlog, get_structlog_logger

__all__ = [
    "Settings",
    "get_settings",
    "configure_structlog",
    "get_structlog_logger",
]
