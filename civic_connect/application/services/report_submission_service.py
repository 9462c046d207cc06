"""Report submission service.

Orchestrates the submission workflow:
1. Sanitize and validate the form fields
2. Build the report with its first timeline entry
3. Route it to the responsible authority
4. Append to the repository (which persists the snapshot)
5. Schedule the first automatic advance

Rejected submissions come back as a ReportSubmissionResult carrying the
validation messages; nothing is raised to the caller for bad input.
Drafts skip validation entirely and are only sanitized.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any
from uuid import UUID, uuid4

from civic_connect.application.ports.job_scheduler import JobSchedulerProtocol
from civic_connect.application.ports.report_repository import (
    ReportRepositoryProtocol,
)
from civic_connect.application.ports.time_authority import TimeAuthorityProtocol
from civic_connect.application.services.base import LoggingMixin
from civic_connect.application.services.session_service import SessionService
from civic_connect.domain.errors.report import (
    DraftNotFoundError,
    ReportValidationError,
)
from civic_connect.domain.models.draft import Draft
from civic_connect.domain.models.report import Report, ReportPriority
from civic_connect.domain.models.report_fields import ReportFields
from civic_connect.domain.models.scheduled_job import ADVANCE_REPORT_JOB
from civic_connect.domain.services.routing import route
from civic_connect.domain.services.sanitization import (
    DEFAULT_SANITIZATION_POLICY,
    TextSanitizerProtocol,
)
from civic_connect.domain.services.validation import sanitize_fields, validate_report

RawFields = Mapping[str, Any] | ReportFields


@dataclass(frozen=True)
class ReportSubmissionResult:
    """Result of a submission attempt.

    Attributes:
        accepted: True if the report was stored.
        report: The stored report, routed, when accepted.
        errors: Messages explaining a rejection, in rule order.
        advance_job_id: The scheduled first advance, when accepted.
    """

    accepted: bool
    report: Report | None = None
    errors: tuple[str, ...] = field(default=())
    advance_job_id: UUID | None = None

    @classmethod
    def rejected(cls, errors: tuple[str, ...]) -> ReportSubmissionResult:
        return cls(accepted=False, errors=errors)

    def unwrap(self) -> Report:
        """Return the stored report.

        Raises:
            ReportValidationError: If the submission was rejected.
        """
        if not self.accepted or self.report is None:
            raise ReportValidationError(self.errors)
        return self.report


def _as_fields(raw: RawFields) -> ReportFields:
    if isinstance(raw, ReportFields):
        return raw
    return ReportFields.from_mapping(raw)


class ReportSubmissionService(LoggingMixin):
    """Service for submitting reports and managing drafts.

    Attributes:
        _repository: Report repository.
        _scheduler: Job scheduler for the first advance.
        _time: Clock for submission timestamps.
        _session: Supplies the submitter identity.
        _review_delay: Delay before the first advance.
        _strict_categories: Reject unknown categories.
        _policy: Free-text sanitization policy.
    """

    def __init__(
        self,
        repository: ReportRepositoryProtocol,
        scheduler: JobSchedulerProtocol,
        time_authority: TimeAuthorityProtocol,
        session: SessionService,
        review_delay_seconds: float = 2.0,
        strict_categories: bool = False,
        sanitization_policy: TextSanitizerProtocol = DEFAULT_SANITIZATION_POLICY,
    ) -> None:
        """Initialize the submission service.

        Args:
            repository: Report repository.
            scheduler: Job scheduler for the first automatic advance.
            time_authority: Clock for timestamps.
            session: Session service supplying submitted_by.
            review_delay_seconds: Delay before the first advance.
            strict_categories: Also reject categories outside the known set.
            sanitization_policy: Free-text sanitization policy.
        """
        self._repository = repository
        self._scheduler = scheduler
        self._time = time_authority
        self._session = session
        self._review_delay = timedelta(seconds=review_delay_seconds)
        self._strict_categories = strict_categories
        self._policy = sanitization_policy
        self._init_logger(component="submission")

    async def submit(self, raw: RawFields) -> ReportSubmissionResult:
        """Validate, route, store and schedule a new report.

        Args:
            raw: Form field bag or ReportFields.

        Returns:
            ReportSubmissionResult. Rejections carry the validation
            messages and store nothing.
        """
        log = self._log_operation("submit")
        log.info("submission_started")

        validation = validate_report(
            _as_fields(raw),
            policy=self._policy,
            strict_categories=self._strict_categories,
        )
        if not validation.ok or validation.sanitized is None:
            log.info("submission_rejected", errors=list(validation.errors))
            return ReportSubmissionResult.rejected(validation.errors)

        fields = validation.sanitized
        now = self._time.now()
        report = Report.create(
            report_id=str(uuid4()),
            title=fields.title,
            category=fields.category.strip(),
            description=fields.description,
            submitted_at=now,
            location=fields.location,
            priority=ReportPriority(fields.priority),
            is_public=fields.is_public,
            is_anonymous=fields.is_anonymous,
            submitted_by=self._session.submitter_id(),
            evidence=fields.evidence,
        )
        authority = route(report.category)
        report = report.with_routing(authority, now)

        await self._repository.append(report)

        job_id = await self._scheduler.schedule(
            job_type=ADVANCE_REPORT_JOB,
            payload={"report_id": report.id},
            run_at=now + self._review_delay,
        )

        log.info(
            "report_submitted",
            report_id=report.id,
            category=report.category,
            assigned_to=authority,
            advance_job_id=str(job_id),
        )
        return ReportSubmissionResult(
            accepted=True,
            report=report,
            advance_job_id=job_id,
        )

    async def save_draft(self, raw: RawFields) -> Draft:
        """Sanitize and store the fields as a draft, without validation."""
        draft = Draft(
            id=str(uuid4()),
            fields=sanitize_fields(_as_fields(raw), self._policy),
            saved_at=self._time.now(),
            submitted_by=self._session.submitter_id(),
        )
        await self._repository.append_draft(draft)
        self._log_operation("save_draft", draft_id=draft.id).info("draft_saved")
        return draft

    async def submit_draft(self, draft_id: str) -> ReportSubmissionResult:
        """Submit a saved draft. The draft is deleted only when accepted.

        Returns:
            ReportSubmissionResult. A missing draft is a rejection whose
            single message is the DraftNotFoundError text.
        """
        log = self._log_operation("submit_draft", draft_id=draft_id)
        draft = await self._repository.find_draft(draft_id)
        if draft is None:
            error = DraftNotFoundError(draft_id)
            log.warning("draft_not_found")
            return ReportSubmissionResult.rejected((str(error),))

        result = await self.submit(draft.fields)
        if result.accepted:
            await self._repository.delete_draft(draft_id)
            log.info("draft_submitted", report_id=result.report.id if result.report else None)
        return result

    async def delete_draft(self, draft_id: str) -> bool:
        """Delete a draft. Returns False if it did not exist."""
        deleted = await self._repository.delete_draft(draft_id)
        if deleted:
            self._log_operation("delete_draft", draft_id=draft_id).info("draft_deleted")
        return deleted
