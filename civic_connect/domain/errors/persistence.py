"""Persistence errors for the local snapshot.

A corrupt or unreadable snapshot is never fatal: the repository logs the
error and continues with empty state.
"""

from __future__ import annotations

from civic_connect.domain.exceptions import CivicConnectError


class PersistenceError(CivicConnectError):
    """Base error for snapshot persistence."""

    pass


class SnapshotCorruptError(PersistenceError):
    """Raised when a stored snapshot cannot be parsed.

    Attributes:
        reason: Parser or schema error detail.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Snapshot is corrupt: {reason}")


class SnapshotWriteError(PersistenceError):
    """Raised when a snapshot cannot be written to durable storage.

    Attributes:
        location: Where the snapshot was being written.
        reason: Underlying I/O error detail.
    """

    def __init__(self, location: str, reason: str) -> None:
        self.location = location
        self.reason = reason
        super().__init__(f"Failed to write snapshot to {location}: {reason}")
