"""Structured logging for the condition engine.

Output is console-rendered by default and JSON when ``json_logs`` is set.
Unless overridden, the level, format and log file all come from
``Settings``. Engine modules log state changes through ``log_mutation``,
which ``EngineSettings.log_mutations`` switches off.

Example:
    >>> from dnd_conditions.core.logging import configure_logging, get_logger
    >>> configure_logging()  # DND_CONDITIONS_LOG_LEVEL, DND_CONDITIONS_JSON_LOGS
    >>> get_logger(__name__).info("Condition applied", entity_id="goblin-1", condition="prone")
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor

from dnd_conditions.core.config import get_settings


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


APP_NAME = "dnd_conditions"


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every entry with the package name."""
    event_dict["app"] = APP_NAME
    return event_dict


def _renderer(json_format: bool) -> list[Processor]:
    if json_format:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(
    *,
    level: str | None = None,
    json_format: bool | None = None,
    log_file: str | Path | None = None,
) -> None:
    """Configure structlog and the root stdlib logger.

    Arguments left as None are read from ``Settings`` (``log_level``,
    ``json_logs`` and ``log_file``).

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Render JSON lines instead of console output.
        log_file: Also write stdlib log records to this file.
    """
    settings = get_settings()
    level = level if level is not None else settings.log_level
    json_format = json_format if json_format is not None else settings.json_logs
    log_file = log_file if log_file is not None else settings.log_file

    log_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_app_context,
            structlog.processors.StackInfoRenderer(),
            *_renderer(json_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=log_level,
        handlers=handlers,
        force=True,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structlog logger, typically for ``__name__``."""
    return structlog.get_logger(name)


def log_mutation(logger: structlog.BoundLogger, event: str, **fields: Any) -> None:
    """Log an entity state change at debug level.

    Silent when ``EngineSettings.log_mutations`` is off.
    """
    if get_settings().engine.log_mutations:
        logger.debug(event, **fields)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables included in all subsequent log entries.

    Example:
        >>> bind_context(encounter_id="cave-3")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "configure_logging",
    "get_logger",
    "log_mutation",
    "bind_context",
    "clear_context",
]
