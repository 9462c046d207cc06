"""Application services for CivicConnect.

Services orchestrate the domain against the ports:
- ReportSubmissionService: submit, drafts
- ReportLifecycleService: advance, scheduled advances
- ReportQueryService: search, dashboard, recent activity
- SessionService: registration, connectivity, settings, logout
- DemoSeedService: sample data for an empty store
"""

from civic_connect.application.services.base import LoggingMixin
from civic_connect.application.services.demo_seed_service import DemoSeedService
from civic_connect.application.services.report_lifecycle_service import (
    AdvanceDelayPolicy,
    AdvanceOutcome,
    AdvanceResult,
    ReportLifecycleService,
)
from civic_connect.application.services.report_query_service import (
    DashboardSummary,
    ReportFilter,
    ReportQueryService,
)
from civic_connect.application.services.report_submission_service import (
    ReportSubmissionResult,
    ReportSubmissionService,
)
from civic_connect.application.services.session_service import (
    ConnectivityState,
    SessionService,
)

__all__ = [
    "AdvanceDelayPolicy",
    "AdvanceOutcome",
    "AdvanceResult",
    "ConnectivityState",
    "DashboardSummary",
    "DemoSeedService",
    "LoggingMixin",
    "ReportFilter",
    "ReportLifecycleService",
    "ReportQueryService",
    "ReportSubmissionResult",
    "ReportSubmissionService",
    "SessionService",
]
