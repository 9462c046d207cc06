"""Snapshot persistence adapters."""

from civic_connect.infrastructure.adapters.persistence.json_file_snapshot_store import (
    JsonFileSnapshotStore,
)
from civic_connect.infrastructure.adapters.persistence.local_report_repository import (
    LocalReportRepository,
)
from civic_connect.infrastructure.adapters.persistence.snapshot_models import (
    DraftRecord,
    ReportRecord,
    SettingsRecord,
    SnapshotRecord,
    TimelineEntryRecord,
    UserRecord,
)

__all__ = [
    "DraftRecord",
    "JsonFileSnapshotStore",
    "LocalReportRepository",
    "ReportRecord",
    "SettingsRecord",
    "SnapshotRecord",
    "TimelineEntryRecord",
    "UserRecord",
]
