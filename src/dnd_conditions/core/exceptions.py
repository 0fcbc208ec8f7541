"""Custom exception hierarchy for the D&D 5E condition engine.

Game outcomes (immunity, duplicate condition, nothing to remove) are never
exceptions; they come back as ``StatusApplicationResult`` objects. The
exceptions here cover programming and boundary errors only: bad
configuration, unknown condition kinds, malformed input, and storage
failures.

Example:
    >>> from dnd_conditions.core.exceptions import UnknownConditionError
    >>> raise UnknownConditionError("Unknown condition", value="sleepy")
"""

from __future__ import annotations

from typing import Any


class DndConditionsError(Exception):
    """Base exception for all condition engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation
# =============================================================================


class ConfigurationError(DndConditionsError):
    """Raised when application configuration is invalid or missing."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with the offending key.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(DndConditionsError):
    """Raised when input to the engine fails boundary validation."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field: Name of the field that failed validation.
            value: The invalid value.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field:
            combined_details["field"] = field
        if value is not None:
            combined_details["value"] = value
        super().__init__(message, details=combined_details)


class UnknownConditionError(ValidationError):
    """Raised for a condition kind outside the closed catalog.

    Also covers condition parameters no catalog entry can hold, such as an
    exhaustion level below 1.
    """


# =============================================================================
# Storage
# =============================================================================


class StorageError(DndConditionsError):
    """Raised when the entity store cannot read or write a record."""


class EntityNotFoundError(StorageError):
    """Raised when loading an entity id the store has never saved."""

    def __init__(
        self,
        message: str,
        *,
        entity_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize not-found error with the requested id.

        Args:
            message: Human-readable error description.
            entity_id: The entity id that was requested.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if entity_id:
            combined_details["entity_id"] = entity_id
        super().__init__(message, details=combined_details)


__all__ = [
    "DndConditionsError",
    "ConfigurationError",
    "ValidationError",
    "UnknownConditionError",
    "StorageError",
    "EntityNotFoundError",
]
