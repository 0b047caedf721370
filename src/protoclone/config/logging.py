"""Structured logging configuration with structlog.

The library only emits events; applications normally configure structlog
themselves. When they have not, the default Prototyper calls
`configure_logging()` once so that debug chatter stays below the configured
level.

Usage:
    from protoclone.config import LoggingSettings, configure_logging

    configure_logging(LoggingSettings(level="DEBUG", format="json"))

    import structlog
    log = structlog.get_logger()
    log.info("event_name", key="value")
"""

from __future__ import annotations

import logging

import structlog
from structlog.typing import Processor

from protoclone.config.settings import LoggingSettings


def _level_number(name: str) -> int:
    """Translate a level name into a logging level number.

    Args:
        name: Level name, case insensitive. Unknown names fall back to WARNING.

    Returns:
        The logging level integer (e.g., logging.WARNING).
    """
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure structlog for protoclone events.

    Args:
        settings: Logging settings. Loaded from the environment when None.
    """
    settings = settings or LoggingSettings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.format == "json":
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(settings.level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging_once(settings: LoggingSettings | None = None) -> bool:
    """Configure logging unless the host application already configured structlog.

    Args:
        settings: Logging settings. Loaded from the environment when None.

    Returns:
        True if this call configured structlog, False if it was left alone.
    """
    if structlog.is_configured():
        return False
    configure_logging(settings)
    return True
