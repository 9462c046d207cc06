"""Structured logging configuration with structlog.

Supports production (JSON) and development (console) output modes.

Log Entry Format (production):
    {
        "timestamp": "2026-01-01T00:00:00.000000Z",
        "level": "info",
        "event": "report_advanced",
        "correlation_id": "uuid",
        "service": "ReportLifecycleService",
        ...additional context
    }

Usage:
    from civic_connect.infrastructure.observability import configure_structlog

    configure_structlog(environment="production")  # JSON output
    configure_structlog(environment="development")  # Console output

    import structlog
    log = structlog.get_logger()
    log.info("event_name", key="value")
"""

import logging
import os
from typing import TextIO, cast

import structlog
from structlog.typing import Processor

from civic_connect.infrastructure.observability.correlation import (
    correlation_id_processor,
)

# Environment variable for log level (default: INFO)
LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _get_log_level() -> int:
    """Get the configured log level from environment.

    Returns:
        The logging level integer (e.g., logging.INFO).
    """
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_structlog(
    environment: str = "production",
    log_file: TextIO | None = None,
    cache_loggers: bool = True,
) -> None:
    """Configure structlog for the application.

    Should be called once at startup.

    Args:
        environment: 'production' for JSON output, 'development' for console.
                    Defaults to 'production'.
        log_file: Stream to write to. Defaults to stdout.
        cache_loggers: Pin each logger to this configuration on first use.
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if environment == "production":
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=log_file),
        cache_logger_on_first_use=cache_loggers,
    )


def get_logger_for_service(
    service_name: str, component: str = "civic"
) -> structlog.BoundLogger:
    """Get a pre-bound logger for a service.

    Args:
        service_name: The name of the service (typically class name).
        component: The component type (default: "civic").

    Returns:
        A BoundLogger with service and component bound.
    """
    return structlog.get_logger().bind(
        service=service_name,
        component=component,
    )
