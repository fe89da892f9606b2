"""Structured logging configuration with secret redaction."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from rcp.settings import Settings

__all__ = [
    "REDACTED",
    "SECRET_KEYS",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
    "redact_secrets",
]

REDACTED = "***"

# Event keys whose values are secret material and must never be rendered.
SECRET_KEYS = frozenset({"shared_secret", "secret"})


def redact_secrets(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Replace secret-bearing values before any renderer sees them."""
    for name in SECRET_KEYS.intersection(event_dict):
        event_dict[name] = REDACTED
    return event_dict


def configure_logging(*, json_output: bool = True, level: str = "INFO") -> None:
    """Configure structlog for processes embedding rcp.

    Args:
        json_output: True for JSON (production), False for console (dev).
        level: Log level string.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        redact_secrets,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping()[level.upper()]
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_from_settings(settings: Settings) -> None:
    """Apply the ``RCP_LOG_JSON`` / ``RCP_LOG_LEVEL`` settings."""
    configure_logging(json_output=settings.log_json, level=settings.log_level)


def get_logger(**kwargs: Any) -> structlog.BoundLogger:
    """Get a bound logger with optional initial context."""
    return structlog.get_logger(**kwargs)  # type: ignore[no-any-return]
