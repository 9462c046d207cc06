"""Job scheduler port for deferred report advances.

Defines the contract for the single-threaded task queue that replaces
browser timers: deferred "advance-request" jobs are scheduled with a
run-at time and consumed by a scheduler loop.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from civic_connect.domain.models.scheduled_job import DeadLetterJob, ScheduledJob


class JobSchedulerProtocol(Protocol):
    """Protocol for job scheduling operations.

    Methods:
        schedule: Schedule a new job for future execution
        cancel: Cancel a scheduled job
        cancel_all: Cancel every pending job of a type
        get_pending_jobs: Get jobs due for execution
        claim_job: Claim a due job for processing
        mark_completed: Mark a job as successfully completed
        mark_failed: Mark a job as failed (with retry/DLQ logic)
        get_dlq_jobs: Get jobs from dead letter queue
        get_job: Get a job by ID
    """

    async def schedule(
        self,
        job_type: str,
        payload: dict[str, Any],
        run_at: datetime,
    ) -> UUID:
        """Schedule a new job for future execution.

        Args:
            job_type: Type of job (report.advance)
            payload: Job-specific data (report_id)
            run_at: Earliest execution time (UTC, timezone-aware)

        Returns:
            UUID of the newly scheduled job

        Raises:
            ValueError: If run_at is not timezone-aware
        """
        ...

    async def cancel(self, job_id: UUID) -> bool:
        """Cancel a scheduled job.

        Only jobs with status PENDING can be cancelled.

        Returns:
            True if job was cancelled, False if not found or not cancellable
        """
        ...

    async def cancel_all(self, job_type: str) -> int:
        """Cancel every pending job of the given type.

        Returns:
            Number of jobs cancelled
        """
        ...

    async def get_pending_jobs(self, limit: int = 10) -> list[ScheduledJob]:
        """Get jobs due for execution, oldest scheduled_for first.

        Args:
            limit: Maximum number of jobs to return
        """
        ...

    async def claim_job(self, job_id: UUID) -> ScheduledJob | None:
        """Claim a job for processing.

        Returns:
            The claimed ScheduledJob, or None if missing or already claimed
        """
        ...

    async def mark_completed(self, job_id: UUID) -> None:
        """Mark a job as successfully completed.

        The job leaves the queue; get_job() no longer returns it.

        Raises:
            KeyError: If job doesn't exist
        """
        ...

    async def mark_failed(self, job_id: UUID, reason: str) -> DeadLetterJob | None:
        """Mark a job as failed.

        Increments the attempt counter. If max attempts are reached, moves
        the job to the dead letter queue.

        Returns:
            DeadLetterJob if job was moved to DLQ, None if retry scheduled

        Raises:
            KeyError: If job doesn't exist
        """
        ...

    async def get_dlq_jobs(
        self,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[DeadLetterJob], int]:
        """Get jobs from dead letter queue, newest first.

        Returns:
            Tuple of (list of DeadLetterJob, total count)
        """
        ...

    async def get_job(self, job_id: UUID) -> ScheduledJob | None:
        """Get a job by ID."""
        ...
