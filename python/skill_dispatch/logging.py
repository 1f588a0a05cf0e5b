"""Structured logging for skill_dispatch.

This module provides structured logging functions that attach key/value
fields to every record, so that resolution activity can be correlated
with the request that triggered it.

Example:
    >>> from skill_dispatch import log_info, log_error
    >>>
    >>> log_info("Resolution started", {
    ...     "request_id": "amzn1.echo-api.request.1",
    ...     "request_type": "IntentRequest"
    ... })
    >>>
    >>> try:
    ...     process()
    ... except Exception as e:
    ...     log_error(f"Processing failed: {e}", {
    ...         "request_id": "amzn1.echo-api.request.1",
    ...         "error_type": type(e).__name__
    ...     })
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

from .types import LogContext

if TYPE_CHECKING:
    from .config import DispatchConfig

LOGGER_NAME = "skill_dispatch"

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_LEVELS = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

_logger = logging.getLogger(LOGGER_NAME)


class StructuredFormatter(logging.Formatter):
    """Formatter that appends structured fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = getattr(record, "fields", None)
        if fields:
            pairs = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
            line = f"{line} {pairs}"
        return line


def log_error(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log an ERROR level message with structured fields.

    Use this for unrecoverable failures that require intervention.

    Args:
        message: The log message.
        fields: Optional structured fields for context. Can be a dict
                or a LogContext instance.

    Example:
        >>> log_error("Handler configuration could not be loaded", {
        ...     "path": "config/handlers.yaml",
        ...     "error_message": "file not found"
        ... })
    """
    _log(logging.ERROR, message, fields)


def log_warn(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a WARN level message with structured fields.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _log(logging.WARNING, message, fields)


def log_info(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log an INFO level message with structured fields.

    Use this for lifecycle events such as a mapper being built.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _log(logging.INFO, message, fields)


def log_debug(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a DEBUG level message with structured fields.

    Use this for detailed diagnostic information, such as which chain
    a request resolved to.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _log(logging.DEBUG, message, fields)


def log_trace(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a TRACE level message with structured fields.

    Use this for very verbose logging, like each chain consulted during
    resolution.
    This level is typically disabled in production.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _log(TRACE, message, fields)


def configure_logging(config: DispatchConfig | None = None) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Calling this more than once replaces the level but never adds a
    second handler.

    Args:
        config: Configuration providing ``log_level``. Defaults are used
            when omitted.

    Returns:
        The configured package logger.
    """
    level_name = config.log_level if config is not None else "info"
    _logger.setLevel(_LEVELS[level_name])

    if not any(getattr(h, "_skill_dispatch", False) for h in _logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            StructuredFormatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handler._skill_dispatch = True  # type: ignore[attr-defined]
        _logger.addHandler(handler)

    return _logger


def is_enabled_for(level: int) -> bool:
    """Return True if records at ``level`` would be emitted.

    Guard log calls whose fields are costly to compute with this.
    """
    return _logger.isEnabledFor(level)


def _log(
    level: int,
    message: str,
    fields: dict[str, Any] | LogContext | None,
) -> None:
    if not _logger.isEnabledFor(level):
        return
    _logger.log(level, message, extra={"fields": _normalize_fields(fields)})


def _normalize_fields(
    fields: dict[str, Any] | LogContext | None,
) -> dict[str, str] | None:
    """Normalize fields to a dict of strings.

    Args:
        fields: Input fields as dict, LogContext, or None.

    Returns:
        Dict with string values, or None if no fields.
    """
    if fields is None:
        return None

    if isinstance(fields, LogContext):
        # Convert LogContext to dict, excluding None values
        return {k: str(v) for k, v in fields.model_dump().items() if v is not None}

    return {k: str(v) for k, v in fields.items()}


__all__ = [
    "TRACE",
    "LOGGER_NAME",
    "StructuredFormatter",
    "configure_logging",
    "is_enabled_for",
    "log_error",
    "log_warn",
    "log_info",
    "log_debug",
    "log_trace",
]
