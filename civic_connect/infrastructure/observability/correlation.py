"""Correlation ID management for log tracing.

Correlation IDs tie together every log line emitted while handling one
external request (a CLI command, a worker cycle). They live in a
ContextVar, so they stay consistent across await points.

Usage:
    set_correlation_id(generate_correlation_id())
    log = structlog.get_logger().bind(correlation_id=get_correlation_id())
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4

# Default is empty string to avoid None type issues
_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """Generate a new correlation ID (UUID4)."""
    return str(uuid4())


def get_correlation_id() -> str:
    """Get the current correlation ID from context.

    Returns:
        The current correlation ID or empty string if not set.
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID in the current context."""
    _correlation_id.set(correlation_id)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor to add correlation_id to every log entry.

    An explicitly bound correlation_id is left untouched.

    Args:
        logger: The logger instance (unused, required by structlog).
        method_name: The logging method name (unused, required by structlog).
        event_dict: The event dictionary to modify.

    Returns:
        The event dictionary with correlation_id added.
    """
    if "correlation_id" not in event_dict or not event_dict["correlation_id"]:
        correlation_id = get_correlation_id()
        if correlation_id:
            event_dict["correlation_id"] = correlation_id
    return event_dict
