"""Read-side queries over the report repository.

Search, dashboard counts and recent activity. Nothing here mutates
state.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from civic_connect.application.ports.report_repository import (
    ReportRepositoryProtocol,
)
from civic_connect.domain.models.draft import Draft
from civic_connect.domain.models.report import Report, ReportStatus

# Statuses counted as pending on the dashboard
DASHBOARD_PENDING_STATES: frozenset[ReportStatus] = frozenset(
    {
        ReportStatus.SUBMITTED,
        ReportStatus.UNDER_REVIEW,
        ReportStatus.IN_PROGRESS,
    }
)


@dataclass(frozen=True)
class ReportFilter:
    """Search criteria. Empty criteria match everything.

    Attributes:
        text: Case-insensitive substring of the title or the id.
        status: Exact status value.
        category: Exact category value.
    """

    text: str = ""
    status: str = ""
    category: str = ""

    def matches(self, report: Report) -> bool:
        needle = self.text.strip().lower()
        if needle and needle not in report.title.lower() and needle not in report.id.lower():
            return False
        if self.status and report.status.value != self.status:
            return False
        if self.category and report.category != self.category:
            return False
        return True


@dataclass(frozen=True)
class DashboardSummary:
    """Aggregate report counts.

    Attributes:
        total: Number of reports.
        resolved: Reports in the resolved state.
        pending: Reports submitted, under review or in progress.
        by_status: Count per status value.
        by_category: Count per category value.
        draft_count: Number of saved drafts.
    """

    total: int = 0
    resolved: int = 0
    pending: int = 0
    by_status: dict[str, int] = field(default_factory=dict)
    by_category: dict[str, int] = field(default_factory=dict)
    draft_count: int = 0

    @property
    def resolution_rate(self) -> float:
        """Share of reports resolved, 0.0 to 1.0 (0.0 with no reports)."""
        if self.total == 0:
            return 0.0
        return self.resolved / self.total


def _newest_first(reports: list[Report]) -> list[Report]:
    return sorted(reports, key=lambda r: r.submitted_at, reverse=True)


class ReportQueryService:
    """Query service for reports and drafts."""

    def __init__(self, repository: ReportRepositoryProtocol) -> None:
        self._repository = repository

    async def find(self, report_id: str) -> Report | None:
        return await self._repository.find(report_id)

    async def search(self, criteria: ReportFilter | None = None) -> list[Report]:
        """Reports matching the filter, newest submission first."""
        criteria = criteria or ReportFilter()
        return _newest_first(await self._repository.filtered(criteria.matches))

    async def drafts(self) -> list[Draft]:
        return await self._repository.drafts()

    async def dashboard_summary(self) -> DashboardSummary:
        reports = await self._repository.all()
        drafts = await self._repository.drafts()
        by_status = Counter(r.status.value for r in reports)
        return DashboardSummary(
            total=len(reports),
            resolved=by_status.get(ReportStatus.RESOLVED.value, 0),
            pending=sum(1 for r in reports if r.status in DASHBOARD_PENDING_STATES),
            by_status=dict(by_status),
            by_category=dict(Counter(r.category for r in reports)),
            draft_count=len(drafts),
        )

    async def recent_activity(self, limit: int = 5) -> list[Report]:
        """The most recently submitted reports, newest first."""
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        return _newest_first(await self._repository.all())[:limit]
