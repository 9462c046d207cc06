"""Report domain errors.

Errors for report and draft lookup and for rejected submissions. The
application layer converts these into typed results, so callers of the
submission and lifecycle services never see them raised.
"""

from __future__ import annotations

from civic_connect.domain.exceptions import CivicConnectError


class ReportError(CivicConnectError):
    """Base error for report-related operations."""

    pass


class ReportValidationError(ReportError):
    """Raised when submitted report fields fail validation.

    Attributes:
        errors: Human-readable validation messages, in rule order.
    """

    def __init__(self, errors: list[str] | tuple[str, ...]) -> None:
        """Initialize the error.

        Args:
            errors: Validation messages for the caller to re-prompt with.
        """
        self.errors = tuple(errors)
        super().__init__(", ".join(self.errors))


class ReportNotFoundError(ReportError):
    """Raised when a report is not found.

    Attributes:
        report_id: The ID that was looked up.
    """

    def __init__(self, report_id: str) -> None:
        """Initialize the error.

        Args:
            report_id: The ID that was looked up.
        """
        self.report_id = report_id
        super().__init__(f"Report not found: {report_id}")


class DraftNotFoundError(ReportError):
    """Raised when a draft is not found.

    Attributes:
        draft_id: The ID that was looked up.
    """

    def __init__(self, draft_id: str) -> None:
        """Initialize the error.

        Args:
            draft_id: The ID that was looked up.
        """
        self.draft_id = draft_id
        super().__init__(f"Draft not found: {draft_id}")
