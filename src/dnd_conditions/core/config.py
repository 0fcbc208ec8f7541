"""Configuration management for the condition engine.

Settings are loaded with pydantic-settings from environment variables and
an optional ``.env`` file.

Example:
    >>> from dnd_conditions.core.config import get_settings
    >>> get_settings().engine.default_source
    'Unknown'

Environment Variables:
    DND_CONDITIONS_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    DND_CONDITIONS_JSON_LOGS: Emit JSON log lines instead of console output
    DND_CONDITIONS_LOG_FILE: Also write log records to this file
    DND_CONDITIONS_ENGINE_LOG_MUTATIONS: Log apply/remove/tick/rest state changes
    DND_CONDITIONS_ENGINE_DEFAULT_SOURCE: Source recorded when none is given
    DND_CONDITIONS_DATABASE_PATH: Path to the SQLite entity store
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dnd_conditions.core.exceptions import ConfigurationError


class EngineSettings(BaseSettings):
    """Configuration for the status engine.

    Attributes:
        default_source: Source string recorded on effects applied without one.
        log_mutations: Emit debug log lines for state changes made by apply,
            remove, tick, rest and the speed mechanics.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_CONDITIONS_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_source: str = Field(
        default="Unknown",
        description="Source recorded when an effect is applied without one",
    )
    log_mutations: bool = Field(
        default=True,
        description="Log every successful apply/remove/tick",
    )

    @field_validator("default_source")
    @classmethod
    def validate_default_source(cls, value: str) -> str:
        """Reject a blank default source.

        Raises:
            ConfigurationError: If the value is empty or whitespace.
        """
        if not value.strip():
            raise ConfigurationError(
                "default_source must not be blank",
                config_key="default_source",
            )
        return value


class StorageSettings(BaseSettings):
    """Configuration for the SQLite entity store.

    Attributes:
        database_path: Path to the SQLite database file.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_CONDITIONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default=Path("data/entities.db"),
        description="Path to SQLite database",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON.
        log_file: Optional file that also receives log records.
        engine: Status engine settings.
        storage: Entity store settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_CONDITIONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="D&D 5E Condition Engine",
        description="Application name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    engine: EngineSettings = Field(default_factory=EngineSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "EngineSettings",
    "StorageSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
