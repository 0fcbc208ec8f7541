"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        DndConditionsError: Base exception for all engine errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Boundary validation errors.
        UnknownConditionError: Condition kinds outside the catalog.
        StorageError / EntityNotFoundError: Entity store failures.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        log_mutation: Debug-log a state change unless disabled in settings.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from dnd_conditions.core.config import (
    EngineSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from dnd_conditions.core.exceptions import (
    ConfigurationError,
    DndConditionsError,
    EntityNotFoundError,
    StorageError,
    UnknownConditionError,
    ValidationError,
)
from dnd_conditions.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    log_mutation,
)


__all__ = [
    # Exceptions
    "DndConditionsError",
    "ConfigurationError",
    "ValidationError",
    "UnknownConditionError",
    "StorageError",
    "EntityNotFoundError",
    # Configuration
    "Settings",
    "EngineSettings",
    "StorageSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "log_mutation",
    "bind_context",
    "clear_context",
]
