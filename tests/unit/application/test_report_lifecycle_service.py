"""Unit tests for ReportLifecycleService."""

from __future__ import annotations

from datetime import timedelta

import pytest

from civic_connect.application.services.report_lifecycle_service import (
    AdvanceDelayPolicy,
    AdvanceOutcome,
    ReportLifecycleService,
)
from civic_connect.application.services.report_submission_service import (
    ReportSubmissionService,
)
from civic_connect.domain.errors import ReportNotFoundError
from civic_connect.domain.models.report import Report, ReportStatus
from civic_connect.domain.models.scheduled_job import ADVANCE_REPORT_JOB, JobStatus
from civic_connect.infrastructure.adapters.persistence import LocalReportRepository
from civic_connect.infrastructure.stubs import JobSchedulerStub, SnapshotStoreStub
from tests.helpers.fake_time_authority import FakeTimeAuthority


def _report(report_id: str, clock: FakeTimeAuthority) -> Report:
    return Report.create(
        report_id=report_id,
        title=f"Report {report_id}",
        category="infrastructure",
        description="Something needs fixing on this street corner.",
        submitted_at=clock.now(),
    )


class _StaleReadRepository(LocalReportRepository):
    """Keeps serving reports it has read once, even after they are deleted."""

    def __init__(self, store: SnapshotStoreStub) -> None:
        super().__init__(store)
        self._seen: dict[str, Report] = {}

    async def find(self, report_id: str) -> Report | None:
        report = await super().find(report_id)
        if report is not None:
            self._seen[report_id] = report
        return self._seen.get(report_id)


class TestAdvancePolicy:
    """Tests for AdvanceDelayPolicy."""

    def test_staggered_delays(self) -> None:
        policy = AdvanceDelayPolicy(stagger_seconds=10)

        assert [policy.delay_for(i) for i in range(3)] == [
            timedelta(seconds=10),
            timedelta(seconds=20),
            timedelta(seconds=30),
        ]

    @pytest.mark.parametrize("stagger", [0, -1.5])
    def test_stagger_must_be_positive(self, stagger: float) -> None:
        with pytest.raises(ValueError, match="stagger_seconds"):
            AdvanceDelayPolicy(stagger_seconds=stagger)

    def test_negative_index_rejected(self) -> None:
        with pytest.raises(ValueError, match="index"):
            AdvanceDelayPolicy().delay_for(-1)


class TestAdvance:
    """Tests for advance()."""

    @pytest.mark.asyncio
    async def test_walks_the_sequence(
        self,
        lifecycle_service: ReportLifecycleService,
        repository: LocalReportRepository,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        await repository.append(_report("r-1", fake_time_authority))

        statuses = []
        for _ in range(3):
            fake_time_authority.advance(seconds=1)
            result = await lifecycle_service.advance("r-1")
            assert result.advanced
            assert result.report is not None
            statuses.append(result.report.status)

        assert statuses == [
            ReportStatus.UNDER_REVIEW,
            ReportStatus.IN_PROGRESS,
            ReportStatus.RESOLVED,
        ]
        stored = await repository.find("r-1")
        assert stored is not None
        assert stored.updated_at == fake_time_authority.now()

    @pytest.mark.asyncio
    async def test_resolved_report_is_left_alone(
        self,
        lifecycle_service: ReportLifecycleService,
        repository: LocalReportRepository,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        await repository.append(_report("r-1", fake_time_authority))
        for _ in range(3):
            await lifecycle_service.advance("r-1")

        result = await lifecycle_service.advance("r-1")

        assert result.outcome is AdvanceOutcome.ALREADY_RESOLVED
        assert result.report is not None
        assert len(result.report.timeline) == 4

    @pytest.mark.asyncio
    async def test_missing_report(
        self, lifecycle_service: ReportLifecycleService
    ) -> None:
        result = await lifecycle_service.advance("ghost")

        assert result.outcome is AdvanceOutcome.NOT_FOUND
        assert result.report is None
        assert isinstance(result.error, ReportNotFoundError)
        assert result.advanced is False


class TestScheduledAdvances:
    """Tests for scheduling and processing advance jobs."""

    @pytest.mark.asyncio
    async def test_submitted_report_reviewed_after_two_seconds(
        self,
        submission_service: ReportSubmissionService,
        lifecycle_service: ReportLifecycleService,
        repository: LocalReportRepository,
        fake_time_authority: FakeTimeAuthority,
        pothole_fields: dict[str, str],
    ) -> None:
        report = (await submission_service.submit(pothole_fields)).unwrap()

        fake_time_authority.advance(seconds=1)
        assert await lifecycle_service.process_due_advances() == []

        fake_time_authority.advance(seconds=1)
        results = await lifecycle_service.process_due_advances()

        assert [r.outcome for r in results] == [AdvanceOutcome.ADVANCED]
        stored = await repository.find(report.id)
        assert stored is not None
        assert stored.status is ReportStatus.UNDER_REVIEW
        assert len(stored.timeline) == 3

    @pytest.mark.asyncio
    async def test_schedule_advances_staggers_pending_reports(
        self,
        lifecycle_service: ReportLifecycleService,
        repository: LocalReportRepository,
        scheduler: JobSchedulerStub,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        start = fake_time_authority.now()
        for report_id in ("a", "b", "c"):
            await repository.append(_report(report_id, fake_time_authority))

        job_ids = await lifecycle_service.schedule_advances()

        jobs = [await scheduler.get_job(job_id) for job_id in job_ids]
        assert [j.payload["report_id"] for j in jobs if j] == ["a", "b", "c"]
        assert [j.scheduled_for - start for j in jobs if j] == [
            timedelta(seconds=10),
            timedelta(seconds=20),
            timedelta(seconds=30),
        ]

    @pytest.mark.asyncio
    async def test_resolved_reports_not_scheduled(
        self,
        lifecycle_service: ReportLifecycleService,
        repository: LocalReportRepository,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        await repository.append(_report("done", fake_time_authority))
        await repository.append(_report("open", fake_time_authority))
        for _ in range(3):
            await lifecycle_service.advance("done")

        job_ids = await lifecycle_service.schedule_advances(AdvanceDelayPolicy(5))

        assert len(job_ids) == 1

    @pytest.mark.asyncio
    async def test_three_rounds_resolve_every_report(
        self,
        lifecycle_service: ReportLifecycleService,
        repository: LocalReportRepository,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        for report_id in ("a", "b", "c"):
            await repository.append(_report(report_id, fake_time_authority))

        for _ in range(3):
            await lifecycle_service.schedule_advances()
            fake_time_authority.advance(seconds=30)
            results = await lifecycle_service.process_due_advances()
            assert [r.report_id for r in results] == ["a", "b", "c"]

        reports = await repository.all()
        assert all(r.status is ReportStatus.RESOLVED for r in reports)
        assert all(len(r.timeline) == 4 for r in reports)
        for report in reports:
            timestamps = [e.timestamp for e in report.timeline]
            assert timestamps == sorted(timestamps)

    @pytest.mark.asyncio
    async def test_each_job_runs_once(
        self,
        lifecycle_service: ReportLifecycleService,
        repository: LocalReportRepository,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        await repository.append(_report("a", fake_time_authority))
        await lifecycle_service.schedule_advance("a", timedelta(seconds=1))
        fake_time_authority.advance(seconds=1)

        first = await lifecycle_service.process_due_advances()
        second = await lifecycle_service.process_due_advances()

        assert len(first) == 1
        assert second == []

    @pytest.mark.asyncio
    async def test_completed_jobs_released(
        self,
        lifecycle_service: ReportLifecycleService,
        repository: LocalReportRepository,
        scheduler: JobSchedulerStub,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        """A long-running queue holds nothing once its jobs have run."""
        await repository.append(_report("a", fake_time_authority))

        for _ in range(50):
            await lifecycle_service.schedule_advance("a", timedelta(seconds=1))
            fake_time_authority.advance(seconds=1)
            await lifecycle_service.process_due_advances()

        assert scheduler.get_scheduled_count() == 0
        assert await scheduler.get_pending_jobs() == []

    @pytest.mark.asyncio
    async def test_deleted_report_job_completes_as_noop(
        self,
        lifecycle_service: ReportLifecycleService,
        repository: LocalReportRepository,
        scheduler: JobSchedulerStub,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        await repository.append(_report("a", fake_time_authority))
        job_id = await lifecycle_service.schedule_advance("a", timedelta(seconds=1))
        assert await lifecycle_service.delete_report("a") is True
        fake_time_authority.advance(seconds=1)

        results = await lifecycle_service.process_due_advances()

        assert [r.outcome for r in results] == [AdvanceOutcome.NOT_FOUND]
        assert job_id in scheduler.get_completed_jobs()
        assert await repository.all() == []

    @pytest.mark.asyncio
    async def test_other_job_types_left_pending(
        self,
        lifecycle_service: ReportLifecycleService,
        scheduler: JobSchedulerStub,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        job_id = await scheduler.schedule(
            "report.notify", {}, run_at=fake_time_authority.now()
        )

        assert await lifecycle_service.process_due_advances() == []
        job = await scheduler.get_job(job_id)
        assert job is not None
        assert job.status is JobStatus.PENDING

    @pytest.mark.asyncio
    async def test_failing_job_dead_lettered_after_retries(
        self,
        scheduler: JobSchedulerStub,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        repository = _StaleReadRepository(SnapshotStoreStub())
        lifecycle = ReportLifecycleService(repository, scheduler, fake_time_authority)
        await repository.append(_report("a", fake_time_authority))
        await lifecycle.schedule_advance("a", timedelta(0))
        await repository.find("a")
        await repository.delete("a")

        for _ in range(3):
            assert await lifecycle.process_due_advances() == []

        entries, total = await scheduler.get_dlq_jobs()
        assert total == 1
        assert entries[0].job_type == ADVANCE_REPORT_JOB
        assert scheduler.get_pending_count() == 0

    @pytest.mark.asyncio
    async def test_cancel_scheduled_advances(
        self,
        lifecycle_service: ReportLifecycleService,
        repository: LocalReportRepository,
        scheduler: JobSchedulerStub,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        await repository.append(_report("a", fake_time_authority))
        await repository.append(_report("b", fake_time_authority))
        await lifecycle_service.schedule_advances()

        assert await lifecycle_service.cancel_scheduled_advances() == 2
        fake_time_authority.advance(seconds=60)
        assert await lifecycle_service.process_due_advances() == []
        assert scheduler.get_pending_count() == 0

    @pytest.mark.asyncio
    async def test_delete_unknown_report(
        self, lifecycle_service: ReportLifecycleService
    ) -> None:
        assert await lifecycle_service.delete_report("ghost") is False
