"""In-memory implementations of application ports.

Used by tests and by local sessions that need no durable backend.
"""

from civic_connect.infrastructure.stubs.job_scheduler_stub import JobSchedulerStub
from civic_connect.infrastructure.stubs.snapshot_store_stub import SnapshotStoreStub

__all__: list[str] = [
    "JobSchedulerStub",
    "SnapshotStoreStub",
]
