"""Report lifecycle service.

Drives reports along the fixed advance sequence:

    submitted -> under-review -> in-progress -> resolved

Advances are requested through the job scheduler ("report.advance" jobs)
and consumed by process_due_advances, which the advance worker calls on
every tick. Tests call it directly after moving a fake clock.

Advancing is idempotent at the edges: a resolved report stays resolved
and a missing report is reported back, neither raises.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from uuid import UUID

from civic_connect.application.ports.job_scheduler import JobSchedulerProtocol
from civic_connect.application.ports.report_repository import (
    ReportRepositoryProtocol,
)
from civic_connect.application.ports.time_authority import TimeAuthorityProtocol
from civic_connect.application.services.base import LoggingMixin
from civic_connect.domain.errors.report import ReportNotFoundError
from civic_connect.domain.exceptions import CivicConnectError
from civic_connect.domain.models.report import Report
from civic_connect.domain.models.scheduled_job import ADVANCE_REPORT_JOB

DEFAULT_STAGGER_SECONDS: float = 10.0


class AdvanceOutcome(Enum):
    """What a single advance request did."""

    ADVANCED = "advanced"
    ALREADY_RESOLVED = "already_resolved"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class AdvanceResult:
    """Result of an advance request.

    Attributes:
        report_id: The requested report.
        outcome: What happened.
        report: The report after the request (None when not found).
        error: ReportNotFoundError for NOT_FOUND, otherwise None.
    """

    report_id: str
    outcome: AdvanceOutcome
    report: Report | None = None
    error: CivicConnectError | None = field(default=None)

    @property
    def advanced(self) -> bool:
        return self.outcome is AdvanceOutcome.ADVANCED


@dataclass(frozen=True)
class AdvanceDelayPolicy:
    """Delay schedule for one round of staggered advances.

    The i-th pending report (0-based) is advanced (i + 1) * stagger_seconds
    after the round is scheduled.
    """

    stagger_seconds: float = DEFAULT_STAGGER_SECONDS

    def __post_init__(self) -> None:
        if self.stagger_seconds <= 0:
            raise ValueError(
                f"stagger_seconds must be positive, got {self.stagger_seconds}"
            )

    def delay_for(self, index: int) -> timedelta:
        if index < 0:
            raise ValueError(f"index must be non-negative, got {index}")
        return timedelta(seconds=(index + 1) * self.stagger_seconds)


class ReportLifecycleService(LoggingMixin):
    """Service that advances reports and schedules advances.

    Attributes:
        _repository: Report repository.
        _scheduler: Job scheduler holding advance requests.
        _time: Clock for timeline timestamps and run-at times.
        _default_policy: Policy used when schedule_advances gets none.
    """

    def __init__(
        self,
        repository: ReportRepositoryProtocol,
        scheduler: JobSchedulerProtocol,
        time_authority: TimeAuthorityProtocol,
        delay_policy: AdvanceDelayPolicy | None = None,
    ) -> None:
        self._repository = repository
        self._scheduler = scheduler
        self._time = time_authority
        self._default_policy = delay_policy or AdvanceDelayPolicy()
        self._init_logger(component="lifecycle")

    async def advance(self, report_id: str) -> AdvanceResult:
        """Move a report one step along the advance sequence.

        Args:
            report_id: Report to advance.

        Returns:
            AdvanceResult with outcome ADVANCED, ALREADY_RESOLVED or
            NOT_FOUND. Only ADVANCED changes state.

        Raises:
            ReportNotFoundError: If the repository rejects the update because
                the report was deleted after it was read.
        """
        log = self._log_operation("advance", report_id=report_id)

        report = await self._repository.find(report_id)
        if report is None:
            log.warning("advance_report_not_found")
            return AdvanceResult(
                report_id=report_id,
                outcome=AdvanceOutcome.NOT_FOUND,
                error=ReportNotFoundError(report_id),
            )

        if report.status.is_terminal():
            log.debug("advance_skipped_resolved")
            return AdvanceResult(
                report_id=report_id,
                outcome=AdvanceOutcome.ALREADY_RESOLVED,
                report=report,
            )

        previous_status = report.status
        advanced = report.advanced(self._time.now())
        await self._repository.update(advanced)

        log.info(
            "report_advanced",
            from_status=previous_status.value,
            to_status=advanced.status.value,
        )
        return AdvanceResult(
            report_id=report_id,
            outcome=AdvanceOutcome.ADVANCED,
            report=advanced,
        )

    async def schedule_advance(
        self,
        report_id: str,
        delay: timedelta,
    ) -> UUID:
        """Schedule one advance request for a report."""
        return await self._scheduler.schedule(
            job_type=ADVANCE_REPORT_JOB,
            payload={"report_id": report_id},
            run_at=self._time.now() + delay,
        )

    async def schedule_advances(
        self,
        policy: AdvanceDelayPolicy | None = None,
    ) -> list[UUID]:
        """Schedule one staggered advance for every pending report.

        Reports are taken in repository order; the i-th pending report runs
        at now + policy.delay_for(i).

        Returns:
            Job ids in the same order as the reports.
        """
        policy = policy or self._default_policy
        pending = await self._repository.filtered(lambda r: r.is_pending)

        job_ids = [
            await self.schedule_advance(report.id, policy.delay_for(index))
            for index, report in enumerate(pending)
        ]

        self._log_operation("schedule_advances").info(
            "advances_scheduled",
            count=len(job_ids),
            stagger_seconds=policy.stagger_seconds,
        )
        return job_ids

    async def process_due_advances(self, limit: int = 100) -> list[AdvanceResult]:
        """Run every due advance request exactly once.

        Each due job is claimed before it runs, so a job is never applied
        twice. Jobs whose report was deleted or already resolved still
        complete. A job whose advance raises a CivicConnectError (the
        repository rejecting the update of a report deleted after it was
        read) is handed back to the scheduler's retry and dead-letter
        handling.

        Args:
            limit: Maximum number of jobs to process in this call.

        Returns:
            Results of the advances that ran, in run order.
        """
        log = self._log_operation("process_due_advances")
        results: list[AdvanceResult] = []

        for job in await self._scheduler.get_pending_jobs(limit=limit):
            if job.job_type != ADVANCE_REPORT_JOB:
                continue
            claimed = await self._scheduler.claim_job(job.id)
            if claimed is None:
                continue

            report_id = str(claimed.payload.get("report_id", ""))
            try:
                result = await self.advance(report_id)
            except CivicConnectError as e:
                dlq_entry = await self._scheduler.mark_failed(claimed.id, str(e))
                log.error(
                    "advance_job_failed",
                    job_id=str(claimed.id),
                    report_id=report_id,
                    error=str(e),
                    dead_lettered=dlq_entry is not None,
                )
                continue

            await self._scheduler.mark_completed(claimed.id)
            results.append(result)

        if results:
            log.info("advances_processed", count=len(results))
        return results

    async def cancel_scheduled_advances(self) -> int:
        """Cancel every pending advance request.

        Returns:
            Number of jobs cancelled.
        """
        cancelled = await self._scheduler.cancel_all(ADVANCE_REPORT_JOB)
        self._log_operation("cancel_scheduled_advances").info(
            "advances_cancelled", count=cancelled
        )
        return cancelled

    async def delete_report(self, report_id: str) -> bool:
        """Delete a report. Its pending advance requests become no-ops."""
        deleted = await self._repository.delete(report_id)
        if deleted:
            self._log_operation("delete_report", report_id=report_id).info(
                "report_deleted"
            )
        return deleted
