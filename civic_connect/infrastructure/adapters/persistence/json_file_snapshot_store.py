"""File-backed snapshot store.

Keeps the snapshot in a single JSON file. Writes go to a sibling temp
file first and are moved into place with os.replace, so a crash mid-write
leaves the previous snapshot intact.
"""

from __future__ import annotations

import os
from pathlib import Path

from civic_connect.application.ports.snapshot_store import SnapshotStoreProtocol
from civic_connect.domain.errors.persistence import (
    SnapshotCorruptError,
    SnapshotWriteError,
)


class JsonFileSnapshotStore(SnapshotStoreProtocol):
    """Snapshot store backed by one JSON file on disk."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def read(self) -> str | None:
        if not self._path.exists():
            return None
        try:
            with open(self._path, encoding="utf-8") as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise SnapshotCorruptError(f"not valid UTF-8: {e}") from e
        except OSError as e:
            raise SnapshotCorruptError(f"unreadable: {e}") from e

    def write(self, payload: str) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise SnapshotWriteError(self.location, str(e)) from e

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
