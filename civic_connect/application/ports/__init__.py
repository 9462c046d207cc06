"""Application ports (interfaces) for CivicConnect.

Ports define the contracts that infrastructure adapters must implement.
Services depend only on these contracts.
"""

from civic_connect.application.ports.job_scheduler import JobSchedulerProtocol
from civic_connect.application.ports.report_repository import (
    ReportPredicate,
    ReportRepositoryProtocol,
)
from civic_connect.application.ports.snapshot_store import SnapshotStoreProtocol
from civic_connect.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = [
    "JobSchedulerProtocol",
    "ReportPredicate",
    "ReportRepositoryProtocol",
    "SnapshotStoreProtocol",
    "TimeAuthorityProtocol",
]
