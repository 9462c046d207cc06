"""Domain models for CivicConnect."""

from civic_connect.domain.models.draft import Draft
from civic_connect.domain.models.report import (
    ADVANCE_SEQUENCE,
    ANONYMOUS_SUBMITTER,
    OFFLINE_SUBMITTER,
    PENDING_STATES,
    STATE_TRANSITION_MATRIX,
    STATUS_DESCRIPTIONS,
    TERMINAL_STATES,
    Report,
    ReportCategory,
    ReportPriority,
    ReportStatus,
    TimelineEntry,
)
from civic_connect.domain.models.report_fields import ReportFields
from civic_connect.domain.models.scheduled_job import (
    ADVANCE_REPORT_JOB,
    DeadLetterJob,
    JobStatus,
    ScheduledJob,
)
from civic_connect.domain.models.settings import Settings
from civic_connect.domain.models.user import User

__all__: list[str] = [
    "ADVANCE_REPORT_JOB",
    "ADVANCE_SEQUENCE",
    "ANONYMOUS_SUBMITTER",
    "OFFLINE_SUBMITTER",
    "PENDING_STATES",
    "STATE_TRANSITION_MATRIX",
    "STATUS_DESCRIPTIONS",
    "TERMINAL_STATES",
    "DeadLetterJob",
    "Draft",
    "JobStatus",
    "Report",
    "ReportCategory",
    "ReportFields",
    "ReportPriority",
    "ReportStatus",
    "ScheduledJob",
    "Settings",
    "TimelineEntry",
    "User",
]
