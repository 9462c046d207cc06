"""Unit tests for AdvanceWorker."""

from __future__ import annotations

import asyncio
from datetime import timedelta

import pytest

from civic_connect.application.services.report_lifecycle_service import (
    ReportLifecycleService,
)
from civic_connect.domain.models.report import Report, ReportStatus
from civic_connect.infrastructure.adapters.persistence import LocalReportRepository
from civic_connect.workers import AdvanceWorker
from tests.helpers.fake_time_authority import FakeTimeAuthority


@pytest.fixture
async def pending_report(
    repository: LocalReportRepository, fake_time_authority: FakeTimeAuthority
) -> Report:
    report = Report.create(
        report_id="r-1",
        title="Flooded underpass",
        category="transportation",
        description="The underpass floods after every heavy rain.",
        submitted_at=fake_time_authority.now(),
    )
    await repository.append(report)
    return report


class TestAdvanceWorker:
    """Tests for the advance worker loop."""

    def test_poll_interval_must_be_positive(
        self, lifecycle_service: ReportLifecycleService
    ) -> None:
        with pytest.raises(ValueError, match="poll_interval_seconds"):
            AdvanceWorker(lifecycle_service, poll_interval_seconds=0)

    @pytest.mark.asyncio
    async def test_run_once_processes_due_jobs(
        self,
        lifecycle_service: ReportLifecycleService,
        repository: LocalReportRepository,
        fake_time_authority: FakeTimeAuthority,
        pending_report: Report,
    ) -> None:
        worker = AdvanceWorker(lifecycle_service)
        await lifecycle_service.schedule_advance(pending_report.id, timedelta(seconds=2))

        assert await worker.run_once() == []

        fake_time_authority.advance(seconds=2)
        results = await worker.run_once()

        assert [r.report_id for r in results] == ["r-1"]
        stored = await repository.find("r-1")
        assert stored is not None
        assert stored.status is ReportStatus.UNDER_REVIEW
        assert worker.get_metrics() == {
            "ticks": 2,
            "advances_processed": 1,
            "reports_advanced": 1,
            "running": False,
        }

    @pytest.mark.asyncio
    async def test_run_until_stopped(
        self,
        lifecycle_service: ReportLifecycleService,
        repository: LocalReportRepository,
        pending_report: Report,
    ) -> None:
        worker = AdvanceWorker(lifecycle_service, poll_interval_seconds=0.01)
        await lifecycle_service.schedule_advance(pending_report.id, timedelta(0))

        task = asyncio.create_task(worker.run())
        for _ in range(100):
            await asyncio.sleep(0.01)
            if worker.get_metrics()["reports_advanced"]:
                break
        assert worker.is_running

        worker.stop()
        await asyncio.wait_for(task, timeout=1.0)

        assert not worker.is_running
        stored = await repository.find("r-1")
        assert stored is not None
        assert stored.status is ReportStatus.UNDER_REVIEW
