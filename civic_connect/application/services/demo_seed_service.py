"""Demo data for an empty store.

Seeds two sample reports so a fresh session has something to show: one
still in progress and one resolved. Timestamps are relative to the
injected clock.
"""

from __future__ import annotations

from datetime import timedelta
from uuid import uuid4

from civic_connect.application.ports.report_repository import (
    ReportRepositoryProtocol,
)
from civic_connect.application.ports.time_authority import TimeAuthorityProtocol
from civic_connect.application.services.base import LoggingMixin
from civic_connect.domain.models.report import (
    ANONYMOUS_SUBMITTER,
    Report,
    ReportPriority,
    ReportStatus,
)
from civic_connect.domain.services.routing import route

DEMO_SUBMITTER = "demo_user"


class DemoSeedService(LoggingMixin):
    """Seeds sample reports into an empty repository."""

    def __init__(
        self,
        repository: ReportRepositoryProtocol,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        self._repository = repository
        self._time = time_authority
        self._init_logger(component="seed")

    async def seed_if_empty(self) -> list[Report]:
        """Seed the sample reports unless reports already exist.

        Returns:
            The seeded reports, or an empty list when nothing was seeded.
        """
        if await self._repository.all():
            return []

        reports = [self._streetlight_report(), self._dumping_report()]
        for report in reports:
            await self._repository.append(report)

        self._log_operation("seed_if_empty").info(
            "demo_data_seeded", count=len(reports)
        )
        return reports

    def _streetlight_report(self) -> Report:
        now = self._time.now()
        submitted_at = now - timedelta(days=2)
        report = Report.create(
            report_id=str(uuid4()),
            title="Broken streetlight on Main Street",
            category="infrastructure",
            description=(
                "The streetlight at the intersection of Main Street and 5th "
                "Avenue has been broken for over a week, creating a safety "
                "hazard for pedestrians and drivers."
            ),
            submitted_at=submitted_at,
            location="Main Street & 5th Avenue",
            priority=ReportPriority.MEDIUM,
            submitted_by=DEMO_SUBMITTER,
        )
        return (
            report.with_routing(route(report.category), submitted_at)
            .with_status(ReportStatus.UNDER_REVIEW, now - timedelta(days=1.5))
            .with_status(ReportStatus.IN_PROGRESS, now - timedelta(days=1))
        )

    def _dumping_report(self) -> Report:
        now = self._time.now()
        submitted_at = now - timedelta(days=5)
        report = Report.create(
            report_id=str(uuid4()),
            title="Illegal dumping in Central Park",
            category="environment",
            description=(
                "Someone has been illegally dumping construction waste in the "
                "north section of Central Park. This is damaging the "
                "environment and creating an eyesore."
            ),
            submitted_at=submitted_at,
            location="Central Park, North Section",
            priority=ReportPriority.HIGH,
            is_anonymous=True,
            submitted_by=ANONYMOUS_SUBMITTER,
        )
        return (
            report.with_routing(route(report.category), submitted_at)
            .with_status(ReportStatus.UNDER_REVIEW, now - timedelta(days=4))
            .with_status(
                ReportStatus.IN_PROGRESS,
                now - timedelta(days=2),
                description="Cleanup crew dispatched to the location",
            )
            .with_status(
                ReportStatus.RESOLVED,
                now - timedelta(days=1),
                description="Illegal waste removed and area cleaned up",
            )
        )
