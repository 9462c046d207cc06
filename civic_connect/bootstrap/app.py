"""Application wiring.

CivicConnectApp builds the whole object graph for one session from a
CivicConnectConfig. Nothing is stored at module level; tests build as
many independent apps as they like, each with its own clock and
snapshot store.
"""

from __future__ import annotations

from structlog import get_logger

from civic_connect.application.ports.snapshot_store import SnapshotStoreProtocol
from civic_connect.application.ports.time_authority import TimeAuthorityProtocol
from civic_connect.application.services.demo_seed_service import DemoSeedService
from civic_connect.application.services.report_lifecycle_service import (
    AdvanceDelayPolicy,
    ReportLifecycleService,
)
from civic_connect.application.services.report_query_service import (
    ReportQueryService,
)
from civic_connect.application.services.report_submission_service import (
    ReportSubmissionService,
)
from civic_connect.application.services.session_service import SessionService
from civic_connect.config.civic_config import CivicConnectConfig
from civic_connect.infrastructure.adapters.persistence import (
    JsonFileSnapshotStore,
    LocalReportRepository,
)
from civic_connect.infrastructure.adapters.time import SystemTimeAuthority
from civic_connect.infrastructure.stubs.job_scheduler_stub import JobSchedulerStub
from civic_connect.workers.advance_worker import AdvanceWorker

logger = get_logger()


class CivicConnectApp:
    """One wired CivicConnect session.

    Attributes:
        config: Session configuration.
        time_authority: Clock shared by every component.
        snapshot_store: Durable snapshot slot.
        repository: Owner of all reports, drafts, user and settings.
        scheduler: Queue of pending advance requests.
        session: Registration, connectivity and settings.
        submission: Submit and draft operations.
        lifecycle: Advance operations.
        queries: Search and dashboard.
        seeder: Demo data.
        worker: Advance worker (not started automatically).
    """

    def __init__(
        self,
        config: CivicConnectConfig,
        time_authority: TimeAuthorityProtocol,
        snapshot_store: SnapshotStoreProtocol,
    ) -> None:
        self.config = config
        self.time_authority = time_authority
        self.snapshot_store = snapshot_store

        self.repository = LocalReportRepository(snapshot_store)
        self.scheduler = JobSchedulerStub(time_authority)
        self.session = SessionService(self.repository, self.scheduler, time_authority)
        self.submission = ReportSubmissionService(
            repository=self.repository,
            scheduler=self.scheduler,
            time_authority=time_authority,
            session=self.session,
            review_delay_seconds=config.review_delay_seconds,
            strict_categories=config.strict_categories,
        )
        self.lifecycle = ReportLifecycleService(
            repository=self.repository,
            scheduler=self.scheduler,
            time_authority=time_authority,
            delay_policy=AdvanceDelayPolicy(
                stagger_seconds=config.advance_stagger_seconds
            ),
        )
        self.queries = ReportQueryService(self.repository)
        self.seeder = DemoSeedService(self.repository, time_authority)
        self.worker = AdvanceWorker(
            self.lifecycle, poll_interval_seconds=config.worker_poll_seconds
        )
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    async def start(self) -> bool:
        """Restore the snapshot and prime the session.

        Seeds demo data into an empty store when configured, then schedules
        a staggered advance round for pending reports when configured.

        Returns:
            True if a stored snapshot was restored.
        """
        restored = self.repository.restore()
        if self.config.seed_demo_data:
            await self.seeder.seed_if_empty()
        if self.config.simulate_on_start:
            await self.lifecycle.schedule_advances()
        self._started = True
        logger.info(
            "app_started",
            restored=restored,
            snapshot=self.snapshot_store.location,
        )
        return restored

    async def shutdown(self) -> None:
        """Stop the worker and cancel outstanding advances."""
        if self.worker.is_running:
            self.worker.stop()
        cancelled = await self.lifecycle.cancel_scheduled_advances()
        self._started = False
        logger.info("app_shutdown", cancelled_advances=cancelled)


def create_app(
    config: CivicConnectConfig | None = None,
    time_authority: TimeAuthorityProtocol | None = None,
    snapshot_store: SnapshotStoreProtocol | None = None,
) -> CivicConnectApp:
    """Build a CivicConnectApp.

    Args:
        config: Configuration; read from the environment when omitted.
        time_authority: Clock; the system clock when omitted.
        snapshot_store: Snapshot slot; a JSON file at config.snapshot_path
            when omitted.
    """
    config = config or CivicConnectConfig.from_environment()
    return CivicConnectApp(
        config=config,
        time_authority=time_authority or SystemTimeAuthority(),
        snapshot_store=(
            snapshot_store
            if snapshot_store is not None
            else JsonFileSnapshotStore(config.resolved_snapshot_path)
        ),
    )
