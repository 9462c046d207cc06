"""Report domain model and lifecycle state machine.

A report is a citizen-submitted civic issue. Its status moves through a
fixed sequence and every move is recorded on an append-only timeline.

State Machine:
    SUBMITTED -> ROUTED (informational, status field unchanged)
    SUBMITTED -> UNDER_REVIEW
    ROUTED -> UNDER_REVIEW
    UNDER_REVIEW -> IN_PROGRESS
    IN_PROGRESS -> RESOLVED

RESOLVED is absorbing. The ROUTED entry records the category lookup; the
report's visible status stays SUBMITTED until the first advance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from civic_connect.domain.errors.state_transition import (
    InvalidStateTransitionError,
    ReportAlreadyResolvedError,
)

# Sentinel submitter ids for reports filed without a signed-in user
ANONYMOUS_SUBMITTER = "anonymous"
OFFLINE_SUBMITTER = "offline_user"


class ReportStatus(Enum):
    """Status in the report lifecycle.

    States:
        SUBMITTED: Initial state after submission
        ROUTED: Authority assigned (timeline only, never the visible status)
        UNDER_REVIEW: Authority is reviewing the report
        IN_PROGRESS: Authority is working on the issue
        RESOLVED: Issue resolved (terminal)
    """

    SUBMITTED = "submitted"
    ROUTED = "routed"
    UNDER_REVIEW = "under-review"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"

    def is_terminal(self) -> bool:
        """Check if this is the absorbing RESOLVED state."""
        return self in TERMINAL_STATES

    def is_status_bearing(self) -> bool:
        """Check if a timeline entry with this status changes the report status.

        Returns:
            False for ROUTED, True for every other state.
        """
        return self is not ReportStatus.ROUTED

    def valid_transitions(self) -> frozenset[ReportStatus]:
        """Get valid transitions from this state.

        Returns:
            Frozenset of states this state can transition to.
            Empty set for terminal states.
        """
        return STATE_TRANSITION_MATRIX.get(self, frozenset())

    def next_in_sequence(self) -> ReportStatus | None:
        """Get the state an advance moves to, or None when resolved."""
        return ADVANCE_SEQUENCE.get(self)


class ReportCategory(Enum):
    """Known report categories.

    The category field on a report is a plain string; values outside this
    enumeration are accepted and route to General Administration.
    """

    INFRASTRUCTURE = "infrastructure"
    PUBLIC_SAFETY = "public-safety"
    ENVIRONMENT = "environment"
    TRANSPORTATION = "transportation"
    PUBLIC_SERVICES = "public-services"
    CORRUPTION = "corruption"
    ACCESSIBILITY = "accessibility"
    OTHER = "other"

    @classmethod
    def is_known(cls, value: str | None) -> bool:
        """Check whether a raw category string names a known category."""
        return value in _CATEGORY_VALUES


class ReportPriority(Enum):
    """Report priority, ordered low < medium < high."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Ordinal rank for sorting (LOW=0)."""
        return _PRIORITY_RANKS[self]


_CATEGORY_VALUES: frozenset[str] = frozenset(c.value for c in ReportCategory)

_PRIORITY_RANKS: dict[ReportPriority, int] = {
    ReportPriority.LOW: 0,
    ReportPriority.MEDIUM: 1,
    ReportPriority.HIGH: 2,
}

TERMINAL_STATES: frozenset[ReportStatus] = frozenset({ReportStatus.RESOLVED})

# States with outstanding work; a scheduled advance is meaningful only here
PENDING_STATES: frozenset[ReportStatus] = frozenset(
    {
        ReportStatus.SUBMITTED,
        ReportStatus.ROUTED,
        ReportStatus.UNDER_REVIEW,
        ReportStatus.IN_PROGRESS,
    }
)

STATE_TRANSITION_MATRIX: dict[ReportStatus, frozenset[ReportStatus]] = {
    ReportStatus.SUBMITTED: frozenset(
        {ReportStatus.ROUTED, ReportStatus.UNDER_REVIEW}
    ),
    ReportStatus.ROUTED: frozenset({ReportStatus.UNDER_REVIEW}),
    ReportStatus.UNDER_REVIEW: frozenset({ReportStatus.IN_PROGRESS}),
    ReportStatus.IN_PROGRESS: frozenset({ReportStatus.RESOLVED}),
    ReportStatus.RESOLVED: frozenset(),
}

# The only path an advance follows; no branching, no skipping
ADVANCE_SEQUENCE: dict[ReportStatus, ReportStatus] = {
    ReportStatus.SUBMITTED: ReportStatus.UNDER_REVIEW,
    ReportStatus.ROUTED: ReportStatus.UNDER_REVIEW,
    ReportStatus.UNDER_REVIEW: ReportStatus.IN_PROGRESS,
    ReportStatus.IN_PROGRESS: ReportStatus.RESOLVED,
}

STATUS_DESCRIPTIONS: dict[ReportStatus, str] = {
    ReportStatus.SUBMITTED: "Report submitted by citizen",
    ReportStatus.UNDER_REVIEW: "Report is being reviewed by authorities",
    ReportStatus.IN_PROGRESS: "Authorities have started working on this issue",
    ReportStatus.RESOLVED: "Issue has been successfully resolved",
}


def routed_description(authority: str) -> str:
    """Timeline description for the routing entry."""
    return f"Report routed to {authority}"


@dataclass(frozen=True, eq=True)
class TimelineEntry:
    """One recorded status transition.

    Attributes:
        status: The status recorded by this entry.
        timestamp: When the transition happened (UTC, timezone-aware).
        description: Human-readable description of the transition.
    """

    status: ReportStatus
    timestamp: datetime
    description: str

    def __post_init__(self) -> None:
        if self.timestamp.tzinfo is None:
            raise ValueError("timestamp must be timezone-aware (UTC)")


@dataclass(frozen=True, eq=True)
class Report:
    """A citizen-submitted civic issue report.

    Reports are frozen. Every change produces a new instance through one of
    the with_* methods, and the repository swaps its copy, so the timeline
    can only ever grow at the end.

    Attributes:
        id: Opaque unique identifier, never reused.
        title: Sanitized title.
        category: Category value (see ReportCategory).
        description: Sanitized description.
        submitted_at: Submission timestamp (UTC).
        timeline: Ordered transition log, oldest first.
        location: Sanitized free-text location.
        priority: Report priority.
        is_public: Whether the report is visible to other citizens.
        is_anonymous: Whether the submitter asked to stay anonymous.
        submitted_by: User id or a submitter sentinel.
        status: Current lifecycle status.
        assigned_to: Responsible authority, set once by routing.
        routed_at: When routing happened, set once.
        evidence: Attached evidence file names.
    """

    id: str
    title: str
    category: str
    description: str
    submitted_at: datetime
    timeline: tuple[TimelineEntry, ...]
    location: str = field(default="")
    priority: ReportPriority = field(default=ReportPriority.MEDIUM)
    is_public: bool = field(default=True)
    is_anonymous: bool = field(default=False)
    submitted_by: str = field(default=ANONYMOUS_SUBMITTER)
    status: ReportStatus = field(default=ReportStatus.SUBMITTED)
    assigned_to: str | None = field(default=None)
    routed_at: datetime | None = field(default=None)
    evidence: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        """Validate timeline invariants."""
        if not self.timeline:
            raise ValueError("Report timeline cannot be empty")
        if self.timeline[0].status is not ReportStatus.SUBMITTED:
            raise ValueError(
                f"Report timeline must start with submitted, got {self.timeline[0].status.value}"
            )
        for previous, current in zip(self.timeline, self.timeline[1:]):
            if current.status not in previous.status.valid_transitions():
                raise ValueError(
                    f"Report timeline has invalid transition: "
                    f"{previous.status.value} -> {current.status.value}"
                )
        if self.status is not self._last_status_bearing().status:
            raise ValueError(
                f"Report status {self.status.value} does not match timeline "
                f"({self._last_status_bearing().status.value})"
            )
        if self.submitted_at.tzinfo is None:
            raise ValueError("submitted_at must be timezone-aware (UTC)")

    @classmethod
    def create(
        cls,
        report_id: str,
        title: str,
        category: str,
        description: str,
        submitted_at: datetime,
        location: str = "",
        priority: ReportPriority = ReportPriority.MEDIUM,
        is_public: bool = True,
        is_anonymous: bool = False,
        submitted_by: str = ANONYMOUS_SUBMITTER,
        evidence: tuple[str, ...] = (),
    ) -> Report:
        """Create a freshly submitted report with its first timeline entry."""
        return cls(
            id=report_id,
            title=title,
            category=category,
            description=description,
            submitted_at=submitted_at,
            timeline=(
                TimelineEntry(
                    status=ReportStatus.SUBMITTED,
                    timestamp=submitted_at,
                    description=STATUS_DESCRIPTIONS[ReportStatus.SUBMITTED],
                ),
            ),
            location=location,
            priority=priority,
            is_public=is_public,
            is_anonymous=is_anonymous,
            submitted_by=submitted_by,
            evidence=evidence,
        )

    @property
    def is_pending(self) -> bool:
        """True while the report still has lifecycle steps ahead."""
        return self.status in PENDING_STATES

    @property
    def is_routed(self) -> bool:
        return self.assigned_to is not None

    @property
    def updated_at(self) -> datetime:
        """Timestamp of the most recent timeline entry."""
        return self.timeline[-1].timestamp

    def status_history(self) -> tuple[TimelineEntry, ...]:
        """Timeline entries that changed the visible status (ROUTED excluded)."""
        return tuple(e for e in self.timeline if e.status.is_status_bearing())

    def with_routing(self, authority: str, routed_at: datetime) -> Report:
        """Create new report with the responsible authority assigned.

        Appends a ROUTED timeline entry. The visible status is unchanged.

        Args:
            authority: Authority name from the routing table.
            routed_at: Routing timestamp.

        Returns:
            New Report with assigned_to, routed_at and the extra entry.

        Raises:
            InvalidStateTransitionError: If the report was already routed or
                has moved past SUBMITTED.
        """
        self._check_transition(ReportStatus.ROUTED)
        return self._replace(
            timeline=self.timeline
            + (
                TimelineEntry(
                    status=ReportStatus.ROUTED,
                    timestamp=routed_at,
                    description=routed_description(authority),
                ),
            ),
            assigned_to=authority,
            routed_at=routed_at,
        )

    def with_status(
        self,
        new_status: ReportStatus,
        at: datetime,
        description: str | None = None,
    ) -> Report:
        """Create new report with updated status and a new timeline entry.

        Enforces the transition matrix.

        Args:
            new_status: The status to transition to.
            at: Transition timestamp.
            description: Timeline description; defaults to the standard
                description for the status.

        Returns:
            New Report with the status changed and the entry appended.

        Raises:
            ReportAlreadyResolvedError: If the report is resolved.
            InvalidStateTransitionError: If the transition is not valid.
        """
        if new_status is ReportStatus.ROUTED:
            raise ValueError("Use with_routing() to record routing")
        self._check_transition(new_status)
        return self._replace(
            timeline=self.timeline
            + (
                TimelineEntry(
                    status=new_status,
                    timestamp=at,
                    description=description or STATUS_DESCRIPTIONS[new_status],
                ),
            ),
            status=new_status,
        )

    def advanced(self, at: datetime) -> Report:
        """Create new report moved one step along the advance sequence.

        Raises:
            ReportAlreadyResolvedError: If the report is resolved.
        """
        next_status = self.status.next_in_sequence()
        if next_status is None:
            raise ReportAlreadyResolvedError(self.id)
        return self.with_status(next_status, at)

    def _last_status_bearing(self) -> TimelineEntry:
        for entry in reversed(self.timeline):
            if entry.status.is_status_bearing():
                return entry
        return self.timeline[0]

    def _check_transition(self, new_status: ReportStatus) -> None:
        if self.status.is_terminal():
            raise ReportAlreadyResolvedError(self.id)

        current = self.timeline[-1].status
        valid_transitions = current.valid_transitions()
        if new_status not in valid_transitions:
            raise InvalidStateTransitionError(
                from_state=current,
                to_state=new_status,
                allowed_transitions=list(valid_transitions),
            )

    def _replace(self, **changes: object) -> Report:
        values = {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "description": self.description,
            "submitted_at": self.submitted_at,
            "timeline": self.timeline,
            "location": self.location,
            "priority": self.priority,
            "is_public": self.is_public,
            "is_anonymous": self.is_anonymous,
            "submitted_by": self.submitted_by,
            "status": self.status,
            "assigned_to": self.assigned_to,
            "routed_at": self.routed_at,
            "evidence": self.evidence,
        }
        values.update(changes)
        return Report(**values)  # type: ignore[arg-type]
