"""In-memory job scheduler.

Implements JobSchedulerProtocol on top of a dict, reading time from the
injected TimeAuthorityProtocol. Since browser timers are replaced by this
queue, it is also what the bootstrap wires in for a local session; jobs do
not survive a restart (scheduled advances are a simulation aid, and the
app re-schedules pending reports on start).
"""

from __future__ import annotations

from collections import deque
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from civic_connect.application.ports.job_scheduler import JobSchedulerProtocol
from civic_connect.application.ports.time_authority import TimeAuthorityProtocol
from civic_connect.domain.models.scheduled_job import (
    DeadLetterJob,
    JobStatus,
    ScheduledJob,
)

# Completed job ids remembered for get_completed_jobs()
COMPLETED_HISTORY_LIMIT = 1000


class JobSchedulerStub(JobSchedulerProtocol):
    """In-memory implementation of JobSchedulerProtocol.

    Attributes:
        _time: Clock used for due checks and timestamps
        _jobs: Dictionary mapping job.id to ScheduledJob
        _dlq: Dictionary mapping dlq entry id to DeadLetterJob
        _scheduled_jobs: List of job IDs in scheduling order
        _cancelled_jobs: Set of cancelled job IDs (for testing)
        _completed_jobs: Most recent completed job IDs (for testing)
    """

    def __init__(self, time_authority: TimeAuthorityProtocol) -> None:
        """Initialize the stub with empty storage."""
        self._time = time_authority
        self._jobs: dict[UUID, ScheduledJob] = {}
        self._dlq: dict[UUID, DeadLetterJob] = {}
        self._scheduled_jobs: list[UUID] = []
        self._cancelled_jobs: set[UUID] = set()
        self._completed_jobs: deque[UUID] = deque(maxlen=COMPLETED_HISTORY_LIMIT)

    async def schedule(
        self,
        job_type: str,
        payload: dict[str, Any],
        run_at: datetime | None = None,
    ) -> UUID:
        """Schedule a new job for future execution.

        Raises:
            ValueError: If run_at is missing or not timezone-aware
        """
        if run_at is None:
            raise ValueError("run_at must be provided")
        if run_at.tzinfo is None:
            raise ValueError("run_at must be timezone-aware (UTC)")

        job_id = uuid4()
        job = ScheduledJob(
            id=job_id,
            job_type=job_type,
            payload=dict(payload),
            scheduled_for=run_at,
            created_at=self._time.now(),
        )
        self._jobs[job_id] = job
        self._scheduled_jobs.append(job_id)
        return job_id

    async def cancel(self, job_id: UUID) -> bool:
        """Cancel a scheduled job.

        Only jobs with status PENDING can be cancelled.
        """
        job = self._jobs.get(job_id)
        if job is None:
            return False
        if job.status != JobStatus.PENDING:
            return False

        del self._jobs[job_id]
        self._cancelled_jobs.add(job_id)
        if job_id in self._scheduled_jobs:
            self._scheduled_jobs.remove(job_id)
        return True

    async def cancel_all(self, job_type: str) -> int:
        """Cancel every pending job of the given type."""
        pending_ids = [
            job.id
            for job in self._jobs.values()
            if job.job_type == job_type and job.status == JobStatus.PENDING
        ]
        cancelled = 0
        for job_id in pending_ids:
            if await self.cancel(job_id):
                cancelled += 1
        return cancelled

    async def get_pending_jobs(self, limit: int = 10) -> list[ScheduledJob]:
        """Get jobs due for execution.

        Returns pending jobs where scheduled_for <= now, ordered by
        scheduled_for, then by scheduling order.
        """
        now = self._time.now()
        order = {job_id: index for index, job_id in enumerate(self._scheduled_jobs)}
        pending = [job for job in self._jobs.values() if job.is_due(now)]
        pending.sort(key=lambda j: (j.scheduled_for, order.get(j.id, 0)))
        return pending[:limit]

    async def claim_job(self, job_id: UUID) -> ScheduledJob | None:
        """Claim a job for processing.

        Returns:
            The claimed ScheduledJob if successful, None if already claimed
        """
        job = self._jobs.get(job_id)
        if job is None:
            return None
        if job.status != JobStatus.PENDING:
            return None

        claimed_job = job.with_status(JobStatus.PROCESSING)
        self._jobs[job_id] = claimed_job
        return claimed_job

    async def mark_completed(self, job_id: UUID) -> None:
        """Mark a job as successfully completed and release it.

        Completed jobs are dropped from the queue; only their ids are kept,
        up to COMPLETED_HISTORY_LIMIT.

        Raises:
            KeyError: If job doesn't exist
        """
        if job_id not in self._jobs:
            raise KeyError(f"Job not found: {job_id}")

        del self._jobs[job_id]
        if job_id in self._scheduled_jobs:
            self._scheduled_jobs.remove(job_id)
        self._completed_jobs.append(job_id)

    async def mark_failed(
        self,
        job_id: UUID,
        reason: str,
    ) -> DeadLetterJob | None:
        """Mark a job as failed.

        Increments attempt counter. If max attempts reached, moves the job
        to the dead letter queue; otherwise it goes back to PENDING.

        Raises:
            KeyError: If job doesn't exist
        """
        job = self._jobs.get(job_id)
        if job is None:
            raise KeyError(f"Job not found: {job_id}")

        now = self._time.now()
        failed_job = job.with_attempt(now).with_status(JobStatus.FAILED)
        self._jobs[job_id] = failed_job

        if failed_job.should_move_to_dlq():
            dlq_job = DeadLetterJob.from_failed_job(uuid4(), failed_job, reason, now)
            self._dlq[dlq_job.id] = dlq_job

            del self._jobs[job_id]
            if job_id in self._scheduled_jobs:
                self._scheduled_jobs.remove(job_id)

            return dlq_job

        self._jobs[job_id] = failed_job.with_status(JobStatus.PENDING)
        return None

    async def get_dlq_jobs(
        self,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[DeadLetterJob], int]:
        """Get jobs from dead letter queue, newest first."""
        dlq_list = sorted(self._dlq.values(), key=lambda j: j.failed_at, reverse=True)
        return dlq_list[offset : offset + limit], len(dlq_list)

    async def get_job(self, job_id: UUID) -> ScheduledJob | None:
        """Get a job by ID."""
        return self._jobs.get(job_id)

    # Testing helper methods

    def get_scheduled_count(self) -> int:
        """Get count of jobs still held (pending or processing)."""
        return len(self._jobs)

    def get_pending_count(self) -> int:
        """Get count of jobs still waiting to run."""
        return sum(1 for job in self._jobs.values() if job.status == JobStatus.PENDING)

    def get_cancelled_jobs(self) -> set[UUID]:
        """Get set of cancelled job IDs (for testing)."""
        return self._cancelled_jobs.copy()

    def get_completed_jobs(self) -> set[UUID]:
        """Get the most recent completed job IDs (for testing)."""
        return set(self._completed_jobs)

    def get_all_jobs(self) -> list[ScheduledJob]:
        """Get all jobs (for testing)."""
        return list(self._jobs.values())
