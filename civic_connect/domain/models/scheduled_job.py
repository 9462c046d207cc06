"""Scheduled job domain models for deferred report advances.

A scheduled job is one deferred task: "advance report X at time T". Jobs
are consumed by a single-threaded scheduler loop, so tests can drive time
deterministically instead of waiting on real timers.

Status transitions:
    PENDING -> PROCESSING -> COMPLETED
                         -> FAILED (retried, moved to the DLQ after 3 attempts)
    PENDING -> CANCELLED
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

ADVANCE_REPORT_JOB = "report.advance"


class JobStatus(Enum):
    """Status of a scheduled job.

    Statuses:
        PENDING: Job scheduled, waiting for execution time
        PROCESSING: Job claimed, execution in progress
        COMPLETED: Job executed
        FAILED: Job failed (will be retried or moved to DLQ)
        CANCELLED: Job cancelled before it ran
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True, eq=True)
class ScheduledJob:
    """A deferred task.

    Attributes:
        id: Unique identifier for the job
        job_type: Type of job (report.advance)
        payload: Job-specific data (report_id)
        scheduled_for: Earliest time the job may run
        created_at: When the job was scheduled
        attempts: Number of failed execution attempts
        last_attempt_at: Timestamp of last failed attempt
        status: Current job status
    """

    id: UUID
    job_type: str
    payload: dict[str, Any]
    scheduled_for: datetime
    created_at: datetime
    attempts: int = field(default=0)
    last_attempt_at: datetime | None = field(default=None)
    status: JobStatus = field(default=JobStatus.PENDING)

    MAX_ATTEMPTS: int = 3

    def __post_init__(self) -> None:
        """Validate scheduled job fields."""
        if not self.job_type:
            raise ValueError("job_type cannot be empty")
        if self.attempts < 0:
            raise ValueError("attempts cannot be negative")
        if self.scheduled_for.tzinfo is None:
            raise ValueError("scheduled_for must be timezone-aware (UTC)")

    def with_status(self, new_status: JobStatus) -> ScheduledJob:
        """Create new job with updated status."""
        return replace(self, status=new_status)

    def with_attempt(self, at: datetime) -> ScheduledJob:
        """Create new job with incremented attempt count.

        Args:
            at: Time of the failed attempt.
        """
        return replace(self, attempts=self.attempts + 1, last_attempt_at=at)

    def is_due(self, now: datetime) -> bool:
        """Check if job is due for execution.

        Returns:
            True if scheduled_for <= now and status is PENDING.
        """
        return self.status == JobStatus.PENDING and self.scheduled_for <= now

    def should_move_to_dlq(self) -> bool:
        """Check if job should be moved to dead letter queue.

        Returns:
            True if attempts >= MAX_ATTEMPTS and status is FAILED.
        """
        return self.status == JobStatus.FAILED and self.attempts >= self.MAX_ATTEMPTS

    def to_dict(self) -> dict[str, Any]:
        """Serialize job to dictionary for logging and the CLI."""
        return {
            "id": str(self.id),
            "job_type": self.job_type,
            "payload": self.payload,
            "scheduled_for": self.scheduled_for.isoformat(),
            "created_at": self.created_at.isoformat(),
            "attempts": self.attempts,
            "last_attempt_at": (
                self.last_attempt_at.isoformat() if self.last_attempt_at else None
            ),
            "status": self.status.value,
        }


@dataclass(frozen=True, eq=True)
class DeadLetterJob:
    """A failed job in the dead letter queue.

    Attributes:
        id: Unique identifier for the DLQ entry
        original_job_id: Reference to the original job id
        job_type: Copied job type
        payload: Copied payload for debugging
        failure_reason: Why the last attempt failed
        failed_at: When the job was moved to the DLQ
        attempts: Total execution attempts before failure
    """

    id: UUID
    original_job_id: UUID
    job_type: str
    payload: dict[str, Any]
    failure_reason: str
    failed_at: datetime
    attempts: int = field(default=0)

    @classmethod
    def from_failed_job(
        cls, dlq_id: UUID, job: ScheduledJob, reason: str, failed_at: datetime
    ) -> DeadLetterJob:
        """Create a DLQ entry from a job that exhausted its attempts."""
        return cls(
            id=dlq_id,
            original_job_id=job.id,
            job_type=job.job_type,
            payload=job.payload,
            failure_reason=reason,
            failed_at=failed_at,
            attempts=job.attempts,
        )
