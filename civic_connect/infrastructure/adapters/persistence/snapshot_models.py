"""Snapshot wire schema (pydantic v2).

The durable snapshot is one JSON object:

    {
      "reports": [Report...],
      "drafts": [Draft...],
      "currentUser": User | null,
      "settings": {"highContrast": bool, "largeText": bool,
                   "screenReader": bool, "language": str,
                   "emailNotifications": bool, "smsNotifications": bool}
    }

Keys are camelCase on the wire, timestamps ISO 8601 UTC with a Z suffix.
Timeline entries written by older clients used "date" instead of
"timestamp", and their evidence lists held file objects rather than
names; both forms are accepted on read.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
)
from pydantic.alias_generators import to_camel

from civic_connect.domain.models.draft import Draft
from civic_connect.domain.models.report import (
    ANONYMOUS_SUBMITTER,
    Report,
    ReportPriority,
    ReportStatus,
    TimelineEntry,
)
from civic_connect.domain.models.report_fields import (
    DEFAULT_PRIORITY,
    ReportFields,
    evidence_names,
)
from civic_connect.domain.models.settings import DEFAULT_LANGUAGE, Settings
from civic_connect.domain.models.user import User

DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(
        lambda v: v.isoformat().replace("+00:00", "Z"), return_type=str
    ),
]


def _ensure_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class _SnapshotModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class TimelineEntryRecord(_SnapshotModel):
    """Wire form of a TimelineEntry."""

    status: str
    timestamp: DateTimeWithZ = Field(
        validation_alias=AliasChoices("timestamp", "date")
    )
    description: str = ""

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        return _ensure_utc(value)

    @classmethod
    def from_domain(cls, entry: TimelineEntry) -> TimelineEntryRecord:
        return cls(
            status=entry.status.value,
            timestamp=entry.timestamp,
            description=entry.description,
        )

    def to_domain(self) -> TimelineEntry:
        return TimelineEntry(
            status=ReportStatus(self.status),
            timestamp=self.timestamp,
            description=self.description,
        )


class ReportRecord(_SnapshotModel):
    """Wire form of a Report."""

    id: str
    title: str
    category: str
    priority: str = DEFAULT_PRIORITY
    location: str = ""
    description: str
    is_public: bool = True
    is_anonymous: bool = False
    submitted_by: str = ANONYMOUS_SUBMITTER
    submitted_at: DateTimeWithZ
    status: str
    assigned_to: str | None = None
    routed_at: DateTimeWithZ | None = None
    timeline: list[TimelineEntryRecord]
    evidence: list[str] = Field(default_factory=list)

    @field_validator("submitted_at", "routed_at")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        return _ensure_utc(value)

    @field_validator("evidence", mode="before")
    @classmethod
    def evidence_as_names(cls, value: Any) -> list[str]:
        return list(evidence_names(value))

    @classmethod
    def from_domain(cls, report: Report) -> ReportRecord:
        return cls(
            id=report.id,
            title=report.title,
            category=report.category,
            priority=report.priority.value,
            location=report.location,
            description=report.description,
            is_public=report.is_public,
            is_anonymous=report.is_anonymous,
            submitted_by=report.submitted_by,
            submitted_at=report.submitted_at,
            status=report.status.value,
            assigned_to=report.assigned_to,
            routed_at=report.routed_at,
            timeline=[TimelineEntryRecord.from_domain(e) for e in report.timeline],
            evidence=list(report.evidence),
        )

    def to_domain(self) -> Report:
        """Convert to the domain model.

        Raises:
            ValueError: If a value is outside its enumeration or the
                timeline breaks a Report invariant.
        """
        return Report(
            id=self.id,
            title=self.title,
            category=self.category,
            description=self.description,
            submitted_at=self.submitted_at,
            timeline=tuple(e.to_domain() for e in self.timeline),
            location=self.location,
            priority=ReportPriority(self.priority),
            is_public=self.is_public,
            is_anonymous=self.is_anonymous,
            submitted_by=self.submitted_by,
            status=ReportStatus(self.status),
            assigned_to=self.assigned_to,
            routed_at=self.routed_at,
            evidence=tuple(self.evidence),
        )


class DraftRecord(_SnapshotModel):
    """Wire form of a Draft."""

    id: str
    title: str = ""
    category: str = ""
    priority: str = DEFAULT_PRIORITY
    location: str = ""
    description: str = ""
    is_public: bool = True
    is_anonymous: bool = False
    submitted_by: str = ANONYMOUS_SUBMITTER
    evidence: list[str] = Field(default_factory=list)
    is_draft: bool = True
    saved_at: DateTimeWithZ

    @field_validator("saved_at")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        return _ensure_utc(value)

    @field_validator("evidence", mode="before")
    @classmethod
    def evidence_as_names(cls, value: Any) -> list[str]:
        return list(evidence_names(value))

    @classmethod
    def from_domain(cls, draft: Draft) -> DraftRecord:
        fields = draft.fields
        return cls(
            id=draft.id,
            title=fields.title,
            category=fields.category,
            priority=fields.priority,
            location=fields.location,
            description=fields.description,
            is_public=fields.is_public,
            is_anonymous=fields.is_anonymous,
            submitted_by=draft.submitted_by,
            evidence=list(fields.evidence),
            saved_at=draft.saved_at,
        )

    def to_domain(self) -> Draft:
        return Draft(
            id=self.id,
            fields=ReportFields(
                title=self.title,
                category=self.category,
                description=self.description,
                location=self.location,
                priority=self.priority,
                is_public=self.is_public,
                is_anonymous=self.is_anonymous,
                evidence=tuple(self.evidence),
            ),
            saved_at=self.saved_at,
            submitted_by=self.submitted_by,
        )


class UserRecord(_SnapshotModel):
    """Wire form of a User."""

    id: str
    name: str
    email: str
    phone: str | None = None
    location: str | None = None
    registered_at: DateTimeWithZ
    is_verified: bool = False

    @field_validator("registered_at")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        return _ensure_utc(value)

    @classmethod
    def from_domain(cls, user: User) -> UserRecord:
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            phone=user.phone,
            location=user.location,
            registered_at=user.registered_at,
            is_verified=user.is_verified,
        )

    def to_domain(self) -> User:
        return User(
            id=self.id,
            name=self.name,
            email=self.email,
            registered_at=self.registered_at,
            phone=self.phone,
            location=self.location,
            is_verified=self.is_verified,
        )


class SettingsRecord(_SnapshotModel):
    """Wire form of Settings."""

    high_contrast: bool = False
    large_text: bool = False
    screen_reader: bool = False
    language: str = DEFAULT_LANGUAGE
    email_notifications: bool = False
    sms_notifications: bool = False

    @classmethod
    def from_domain(cls, settings: Settings) -> SettingsRecord:
        return cls(
            high_contrast=settings.high_contrast,
            large_text=settings.large_text,
            screen_reader=settings.screen_reader,
            language=settings.language,
            email_notifications=settings.email_notifications,
            sms_notifications=settings.sms_notifications,
        )

    def to_domain(self) -> Settings:
        return Settings(
            high_contrast=self.high_contrast,
            large_text=self.large_text,
            screen_reader=self.screen_reader,
            language=self.language,
            email_notifications=self.email_notifications,
            sms_notifications=self.sms_notifications,
        )


class SnapshotRecord(_SnapshotModel):
    """The whole durable snapshot."""

    reports: list[ReportRecord] = Field(default_factory=list)
    drafts: list[DraftRecord] = Field(default_factory=list)
    current_user: UserRecord | None = None
    settings: SettingsRecord = Field(default_factory=SettingsRecord)

    def to_json(self) -> str:
        """Serialize with camelCase keys."""
        return self.model_dump_json(by_alias=True)
