"""In-memory snapshot store for tests and ephemeral sessions."""

from __future__ import annotations

from civic_connect.application.ports.snapshot_store import SnapshotStoreProtocol
from civic_connect.domain.errors.persistence import SnapshotWriteError


class SnapshotStoreStub(SnapshotStoreProtocol):
    """Single-slot in-memory snapshot store.

    Attributes:
        _payload: The stored snapshot text, None when empty
        _write_count: Number of successful writes (for testing)
        _fail_writes: When True, write() raises SnapshotWriteError
    """

    def __init__(self, payload: str | None = None) -> None:
        self._payload = payload
        self._write_count = 0
        self._fail_writes = False

    @property
    def location(self) -> str:
        return "memory"

    def read(self) -> str | None:
        return self._payload

    def write(self, payload: str) -> None:
        if self._fail_writes:
            raise SnapshotWriteError(self.location, "writes disabled")
        self._payload = payload
        self._write_count += 1

    def clear(self) -> None:
        self._payload = None

    # Testing helper methods

    @property
    def payload(self) -> str | None:
        """The raw stored snapshot (for testing)."""
        return self._payload

    @property
    def write_count(self) -> int:
        """Number of successful writes (for testing)."""
        return self._write_count

    def set_payload(self, payload: str | None) -> None:
        """Replace the stored snapshot directly (for testing)."""
        self._payload = payload

    def set_fail_writes(self, fail: bool) -> None:
        """Make subsequent writes fail (for testing)."""
        self._fail_writes = fail
