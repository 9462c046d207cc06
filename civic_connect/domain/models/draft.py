"""Draft domain model.

A draft is a report-shaped snapshot the citizen saved for later. Drafts
never enter the lifecycle and are never routed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from civic_connect.domain.models.report import ANONYMOUS_SUBMITTER
from civic_connect.domain.models.report_fields import ReportFields


@dataclass(frozen=True, eq=True)
class Draft:
    """An unsubmitted, unrouted report.

    Attributes:
        id: Opaque unique identifier.
        fields: The sanitized form fields.
        saved_at: When the draft was saved (UTC).
        submitted_by: User id or a submitter sentinel.
    """

    id: str
    fields: ReportFields
    saved_at: datetime
    submitted_by: str = field(default=ANONYMOUS_SUBMITTER)

    def __post_init__(self) -> None:
        if self.saved_at.tzinfo is None:
            raise ValueError("saved_at must be timezone-aware (UTC)")

    @property
    def is_draft(self) -> bool:
        return True

    @property
    def title(self) -> str:
        return self.fields.title
