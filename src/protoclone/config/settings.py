"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for the
clone engine and its logging.

Usage:
    from protoclone.config import CloneSettings, LoggingSettings

    # Load from environment variables (PROTOCLONE_*, PROTOCLONE_LOG_*)
    settings = CloneSettings()
    log_settings = LoggingSettings()

    # Or override with explicit values
    settings = CloneSettings(detect_cycles=False)
"""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class CloneSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the clone engine.

    Attributes:
        detect_cycles: Raise CyclicGraphError when a value is reached again
            while it is still being cloned. When False, cyclic graphs recurse
            until Python's recursion limit is hit.
        delegate_foreign: Hand objects that define __copy__/__deepcopy__ to
            their own duplication. When False, Python-defined classes are
            field-copied like any other object.
        rebind_behaviors: Re-bind methods stored on an instance and bound to
            it, so the clone's copy is bound to the clone.

    Environment Variables:
        PROTOCLONE_DETECT_CYCLES
        PROTOCLONE_DELEGATE_FOREIGN
        PROTOCLONE_REBIND_BEHAVIORS
    """

    model_config = SettingsConfigDict(
        env_prefix="PROTOCLONE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    detect_cycles: bool = True
    delegate_foreign: bool = True
    rebind_behaviors: bool = True


class LoggingSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for structured logging.

    Attributes:
        level: Minimum level name (DEBUG, INFO, WARNING, ...).
        format: "console" for human readable lines, "json" for log shipping.

    Environment Variables:
        PROTOCLONE_LOG_LEVEL
        PROTOCLONE_LOG_FORMAT
    """

    model_config = SettingsConfigDict(
        env_prefix="PROTOCLONE_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "WARNING"
    format: Literal["console", "json"] = "console"
