"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

from typing import TextIO

from civic_connect.infrastructure.observability import (
    configure_structlog as _configure_structlog,
)


def configure_structlog(
    environment: str,
    log_file: TextIO | None = None,
    cache_loggers: bool = True,
) -> None:
    """Configure structlog for the given environment."""
    _configure_structlog(
        environment=environment,
        log_file=log_file,
        cache_loggers=cache_loggers,
    )


__all__ = ["configure_structlog"]
