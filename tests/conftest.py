"""
Pytest configuration and shared fixtures for CivicConnect tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Time-dependent tests use FakeTimeAuthority, never the system clock
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from collections.abc import Iterator
from datetime import datetime, timezone

import pytest
import structlog

from civic_connect.application.services.report_lifecycle_service import (
    ReportLifecycleService,
)
from civic_connect.application.services.report_query_service import (
    ReportQueryService,
)
from civic_connect.application.services.report_submission_service import (
    ReportSubmissionService,
)
from civic_connect.application.services.session_service import SessionService
from civic_connect.infrastructure.adapters.persistence import LocalReportRepository
from civic_connect.infrastructure.stubs import JobSchedulerStub, SnapshotStoreStub
from tests.helpers.fake_time_authority import FakeTimeAuthority

FIXED_NOW = datetime(2026, 3, 14, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from civic_connect import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Clock frozen at FIXED_NOW."""
    return FakeTimeAuthority(frozen_at=FIXED_NOW)


@pytest.fixture
def snapshot_store() -> SnapshotStoreStub:
    return SnapshotStoreStub()


@pytest.fixture
def repository(snapshot_store: SnapshotStoreStub) -> LocalReportRepository:
    return LocalReportRepository(snapshot_store)


@pytest.fixture
def scheduler(fake_time_authority: FakeTimeAuthority) -> JobSchedulerStub:
    return JobSchedulerStub(fake_time_authority)


@pytest.fixture
def session_service(
    repository: LocalReportRepository,
    scheduler: JobSchedulerStub,
    fake_time_authority: FakeTimeAuthority,
) -> SessionService:
    return SessionService(repository, scheduler, fake_time_authority)


@pytest.fixture
def submission_service(
    repository: LocalReportRepository,
    scheduler: JobSchedulerStub,
    fake_time_authority: FakeTimeAuthority,
    session_service: SessionService,
) -> ReportSubmissionService:
    return ReportSubmissionService(
        repository=repository,
        scheduler=scheduler,
        time_authority=fake_time_authority,
        session=session_service,
    )


@pytest.fixture
def lifecycle_service(
    repository: LocalReportRepository,
    scheduler: JobSchedulerStub,
    fake_time_authority: FakeTimeAuthority,
) -> ReportLifecycleService:
    return ReportLifecycleService(repository, scheduler, fake_time_authority)


@pytest.fixture
def query_service(repository: LocalReportRepository) -> ReportQueryService:
    return ReportQueryService(repository)


@pytest.fixture
def pothole_fields() -> dict[str, str]:
    """A valid infrastructure report as the form sends it."""
    return {
        "title": "Pothole on Oak St",
        "category": "infrastructure",
        "description": "A large pothole has formed near the school crossing.",
    }
