"""Report repository port.

The repository exclusively owns every report, draft, the current user and
the settings for the process lifetime. Consumers receive frozen instances
and request changes through the services, which hand the new instance
back to the repository. Every mutating call persists the whole snapshot.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from civic_connect.domain.models.draft import Draft
from civic_connect.domain.models.report import Report
from civic_connect.domain.models.settings import Settings
from civic_connect.domain.models.user import User

ReportPredicate = Callable[[Report], bool]


class ReportRepositoryProtocol(Protocol):
    """Protocol for report, draft, user and settings storage.

    Methods:
        append / append_draft: Add to the ordered collections
        update: Replace a stored report with its next version
        delete / delete_draft: Remove by id
        find / find_draft: Lookup by id
        all / drafts / filtered: Read views in insertion order
        set_current_user / set_settings: Session state
        persist / restore / reset: Durable snapshot handling
    """

    async def append(self, report: Report) -> None:
        """Add a new report and persist.

        Raises:
            ValueError: If a report with the same id already exists.
        """
        ...

    async def append_draft(self, draft: Draft) -> None:
        """Add a new draft and persist."""
        ...

    async def update(self, report: Report) -> None:
        """Replace the stored report with the same id and persist.

        Raises:
            ReportNotFoundError: If no report has that id, including one
                deleted after the caller read it.
        """
        ...

    async def delete(self, report_id: str) -> bool:
        """Remove a report. Returns False if it did not exist."""
        ...

    async def delete_draft(self, draft_id: str) -> bool:
        """Remove a draft. Returns False if it did not exist."""
        ...

    async def find(self, report_id: str) -> Report | None:
        """Lookup a report by id."""
        ...

    async def find_draft(self, draft_id: str) -> Draft | None:
        """Lookup a draft by id."""
        ...

    async def all(self) -> list[Report]:
        """All reports in insertion order."""
        ...

    async def drafts(self) -> list[Draft]:
        """All drafts in insertion order."""
        ...

    async def filtered(self, predicate: ReportPredicate) -> list[Report]:
        """Reports matching the predicate, in insertion order."""
        ...

    @property
    def current_user(self) -> User | None:
        ...

    @property
    def settings(self) -> Settings:
        ...

    async def set_current_user(self, user: User | None) -> None:
        """Replace the current user and persist."""
        ...

    async def set_settings(self, settings: Settings) -> None:
        """Replace the settings and persist."""
        ...

    def persist(self) -> bool:
        """Write the whole snapshot. Returns False if the write failed."""
        ...

    def restore(self) -> bool:
        """Load the stored snapshot.

        Returns:
            True if a snapshot was loaded. False if none was stored or it
            was corrupt; in both cases the repository is left empty.
        """
        ...

    def reset(self) -> None:
        """Clear all state and the stored snapshot."""
        ...
