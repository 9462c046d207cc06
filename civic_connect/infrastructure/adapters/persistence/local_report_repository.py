"""Local report repository with whole-snapshot persistence.

Holds reports, drafts, the current user and settings in memory and
mirrors the complete state to a snapshot store after every mutation.
Restore is fail-soft: a missing snapshot is normal, a corrupt one is
logged and discarded.
"""

from __future__ import annotations

from pydantic import ValidationError
from structlog import get_logger

from civic_connect.application.ports.report_repository import (
    ReportPredicate,
    ReportRepositoryProtocol,
)
from civic_connect.application.ports.snapshot_store import SnapshotStoreProtocol
from civic_connect.domain.errors.persistence import (
    PersistenceError,
    SnapshotCorruptError,
)
from civic_connect.domain.errors.report import ReportNotFoundError
from civic_connect.domain.models.draft import Draft
from civic_connect.domain.models.report import Report
from civic_connect.domain.models.settings import Settings
from civic_connect.domain.models.user import User
from civic_connect.infrastructure.adapters.persistence.snapshot_models import (
    DraftRecord,
    ReportRecord,
    SettingsRecord,
    SnapshotRecord,
    UserRecord,
)

logger = get_logger()


class LocalReportRepository(ReportRepositoryProtocol):
    """In-memory repository mirrored to a single JSON snapshot.

    Attributes:
        _store: Durable snapshot slot
        _reports: Reports in insertion order
        _drafts: Drafts in insertion order
        _current_user: Registered user for this session, if any
        _settings: Accessibility and notification preferences
    """

    def __init__(self, store: SnapshotStoreProtocol) -> None:
        self._store = store
        self._reports: list[Report] = []
        self._drafts: list[Draft] = []
        self._current_user: User | None = None
        self._settings = Settings()

    # Reports

    async def append(self, report: Report) -> None:
        if self._index_of(report.id) is not None:
            raise ValueError(f"Report {report.id} already exists")
        self._reports.append(report)
        self.persist()

    async def update(self, report: Report) -> None:
        index = self._index_of(report.id)
        if index is None:
            raise ReportNotFoundError(report.id)
        self._reports[index] = report
        self.persist()

    async def delete(self, report_id: str) -> bool:
        index = self._index_of(report_id)
        if index is None:
            return False
        del self._reports[index]
        self.persist()
        return True

    async def find(self, report_id: str) -> Report | None:
        index = self._index_of(report_id)
        return None if index is None else self._reports[index]

    async def all(self) -> list[Report]:
        return list(self._reports)

    async def filtered(self, predicate: ReportPredicate) -> list[Report]:
        return [r for r in self._reports if predicate(r)]

    # Drafts

    async def append_draft(self, draft: Draft) -> None:
        self._drafts.append(draft)
        self.persist()

    async def delete_draft(self, draft_id: str) -> bool:
        for i, draft in enumerate(self._drafts):
            if draft.id == draft_id:
                del self._drafts[i]
                self.persist()
                return True
        return False

    async def find_draft(self, draft_id: str) -> Draft | None:
        return next((d for d in self._drafts if d.id == draft_id), None)

    async def drafts(self) -> list[Draft]:
        return list(self._drafts)

    # Session state

    @property
    def current_user(self) -> User | None:
        return self._current_user

    @property
    def settings(self) -> Settings:
        return self._settings

    async def set_current_user(self, user: User | None) -> None:
        self._current_user = user
        self.persist()

    async def set_settings(self, settings: Settings) -> None:
        self._settings = settings
        self.persist()

    # Snapshot

    def snapshot(self) -> SnapshotRecord:
        """Build the wire snapshot of the current state."""
        return SnapshotRecord(
            reports=[ReportRecord.from_domain(r) for r in self._reports],
            drafts=[DraftRecord.from_domain(d) for d in self._drafts],
            current_user=(
                UserRecord.from_domain(self._current_user)
                if self._current_user is not None
                else None
            ),
            settings=SettingsRecord.from_domain(self._settings),
        )

    def persist(self) -> bool:
        try:
            self._store.write(self.snapshot().to_json())
        except PersistenceError as e:
            logger.warning(
                "snapshot_persist_failed",
                location=self._store.location,
                error=str(e),
            )
            return False
        return True

    def restore(self) -> bool:
        self._clear_memory()
        try:
            payload = self._store.read()
            if payload is None:
                return False
            self._load(payload)
        except PersistenceError as e:
            self._clear_memory()
            logger.warning(
                "snapshot_restore_failed",
                location=self._store.location,
                error=str(e),
            )
            return False

        logger.info(
            "snapshot_restored",
            location=self._store.location,
            report_count=len(self._reports),
            draft_count=len(self._drafts),
        )
        return True

    def reset(self) -> None:
        self._clear_memory()
        self._store.clear()

    def _load(self, payload: str) -> None:
        try:
            record = SnapshotRecord.model_validate_json(payload)
            reports = [r.to_domain() for r in record.reports]
            drafts = [d.to_domain() for d in record.drafts]
            user = (
                record.current_user.to_domain()
                if record.current_user is not None
                else None
            )
            settings = record.settings.to_domain()
        except (ValidationError, ValueError) as e:
            raise SnapshotCorruptError(str(e)) from e

        self._reports = reports
        self._drafts = drafts
        self._current_user = user
        self._settings = settings

    def _clear_memory(self) -> None:
        self._reports = []
        self._drafts = []
        self._current_user = None
        self._settings = Settings()

    def _index_of(self, report_id: str) -> int | None:
        for i, report in enumerate(self._reports):
            if report.id == report_id:
                return i
        return None
