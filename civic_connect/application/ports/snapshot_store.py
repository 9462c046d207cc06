"""Snapshot store port for durable repository state.

The repository serializes its whole state into one JSON document and
hands it to a snapshot store. Every write overwrites the prior snapshot;
there is no partial-write recovery.
"""

from __future__ import annotations

from typing import Protocol


class SnapshotStoreProtocol(Protocol):
    """Protocol for the single durable snapshot slot.

    Methods:
        read: Return the stored snapshot, or None if nothing is stored
        write: Overwrite the stored snapshot
        clear: Remove the stored snapshot
    """

    @property
    def location(self) -> str:
        """Human-readable location of the snapshot, used in logs."""
        ...

    def read(self) -> str | None:
        """Return the stored snapshot text, or None if nothing is stored.

        Raises:
            SnapshotCorruptError: If the stored bytes cannot be read as text.
        """
        ...

    def write(self, payload: str) -> None:
        """Overwrite the stored snapshot.

        Raises:
            SnapshotWriteError: If the snapshot cannot be written.
        """
        ...

    def clear(self) -> None:
        """Remove the stored snapshot. Clearing an empty store is a no-op."""
        ...
