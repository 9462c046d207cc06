"""Base service logging mixin.

Provides LoggingMixin for standardized structured logging across the
application services.

Usage:
    from civic_connect.application.services.base import LoggingMixin

    class MyService(LoggingMixin):
        def __init__(self, dependency: SomePort) -> None:
            self._dependency = dependency
            self._init_logger()  # Initialize structured logger

        async def do_something(self) -> None:
            log = self._log_operation("do_something", report_id="123")
            log.info("operation_started")
            # ... do work ...
            log.info("operation_completed")
"""

import structlog

from civic_connect.infrastructure.observability.correlation import get_correlation_id


class LoggingMixin:
    """Mixin providing structured logging for services.

    The logger is bound with:
    - service: The class name of the service
    - component: The component type (default: "civic")

    Each operation gets:
    - operation: The name of the operation being performed
    - correlation_id: From context, so one CLI command or worker tick can
      be followed across services
    - Any additional context passed to _log_operation()

    Attributes:
        _log: The structlog BoundLogger for this service instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "civic") -> None:
        """Initialize the logger with service name binding.

        Should be called in __init__ after setting up dependencies.

        Args:
            component: The component type for log categorization.
        """
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Create operation-scoped logger with correlation ID.

        Args:
            operation: Name of the operation being performed.
            **context: Additional context to bind to the logger.

        Returns:
            BoundLogger with operation and correlation context.

        Example:
            log = self._log_operation("advance", report_id=report.id)
            log.info("advance_started")
            # ... do work ...
            log.info("report_advanced", status=report.status.value)
        """
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )
