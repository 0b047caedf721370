"""Configuration module using Pydantic Settings and structlog.

Provides typed configuration for the clone engine and logging, with
environment variable support.

Usage:
    from protoclone.config import CloneSettings, LoggingSettings, configure_logging

    settings = CloneSettings(detect_cycles=False)
    configure_logging(LoggingSettings(level="DEBUG"))
"""

from protoclone.config.logging import configure_logging, configure_logging_once
from protoclone.config.settings import CloneSettings, LoggingSettings

__all__ = [
    "CloneSettings",
    "LoggingSettings",
    "configure_logging",
    "configure_logging_once",
]
