"""State transition errors for the report lifecycle.

Raised by the Report model when a timeline transition is not permitted by
the transition matrix, or when a resolved report is asked to move again.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from civic_connect.domain.exceptions import CivicConnectError

if TYPE_CHECKING:
    from civic_connect.domain.models.report import ReportStatus


class InvalidStateTransitionError(CivicConnectError):
    """Raised when an invalid status transition is attempted.

    Attributes:
        from_state: Current status of the report.
        to_state: Attempted target status.
        allowed_transitions: List of valid target statuses from current status.
    """

    def __init__(
        self,
        from_state: ReportStatus,
        to_state: ReportStatus,
        allowed_transitions: list[ReportStatus] | None = None,
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            from_state: Current report status.
            to_state: Attempted invalid target status.
            allowed_transitions: Valid statuses from current status (optional).
        """
        self.from_state = from_state
        self.to_state = to_state
        self.allowed_transitions = allowed_transitions or []

        allowed_str = (
            f" Valid transitions: {sorted(s.value for s in self.allowed_transitions)}"
            if self.allowed_transitions
            else ""
        )
        super().__init__(
            f"Invalid state transition: {from_state.value} -> {to_state.value}.{allowed_str}"
        )


class ReportAlreadyResolvedError(CivicConnectError):
    """Raised when attempting to move a report out of the resolved state.

    Resolved is absorbing: once a report is resolved, no further
    transitions are permitted.

    Attributes:
        report_id: ID of the report.
    """

    def __init__(self, report_id: str) -> None:
        """Initialize report already resolved error.

        Args:
            report_id: ID of the resolved report.
        """
        self.report_id = report_id
        super().__init__(
            f"Report {report_id} is already resolved. Resolved reports cannot change."
        )
