"""Session service: registration, connectivity and settings.

A session has at most one registered user and one connectivity state.
The submitter recorded on a new report is derived from both:
- offline: "offline_user"
- online with a registered user: the user's id
- online without a user: "anonymous"

Logging out wipes every piece of local data, including scheduled
advances, because the snapshot holds nothing that belongs to anyone else.
"""

from __future__ import annotations

from enum import Enum
from uuid import uuid4

from civic_connect.application.ports.job_scheduler import JobSchedulerProtocol
from civic_connect.application.ports.report_repository import (
    ReportRepositoryProtocol,
)
from civic_connect.application.ports.time_authority import TimeAuthorityProtocol
from civic_connect.application.services.base import LoggingMixin
from civic_connect.domain.errors.registration import RegistrationError
from civic_connect.domain.models.report import (
    ANONYMOUS_SUBMITTER,
    OFFLINE_SUBMITTER,
)
from civic_connect.domain.models.scheduled_job import ADVANCE_REPORT_JOB
from civic_connect.domain.models.settings import Settings
from civic_connect.domain.models.user import User

NAME_AND_EMAIL_REQUIRED = "Name and email are required."


class ConnectivityState(Enum):
    """Network connectivity as last reported by the host."""

    ONLINE = "online"
    OFFLINE = "offline"


class SessionService(LoggingMixin):
    """Owns the per-session user, connectivity and settings.

    Attributes:
        _repository: Where the current user and settings are stored.
        _scheduler: Job scheduler, drained on logout.
        _time: Clock for registration timestamps.
        _connectivity: Current connectivity state.
    """

    def __init__(
        self,
        repository: ReportRepositoryProtocol,
        scheduler: JobSchedulerProtocol,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        self._repository = repository
        self._scheduler = scheduler
        self._time = time_authority
        self._connectivity = ConnectivityState.ONLINE
        self._init_logger(component="session")

    @property
    def current_user(self) -> User | None:
        return self._repository.current_user

    @property
    def settings(self) -> Settings:
        return self._repository.settings

    @property
    def connectivity(self) -> ConnectivityState:
        return self._connectivity

    @property
    def is_online(self) -> bool:
        return self._connectivity is ConnectivityState.ONLINE

    def set_online(self, online: bool) -> None:
        """Record a connectivity change reported by the host."""
        new_state = ConnectivityState.ONLINE if online else ConnectivityState.OFFLINE
        if new_state is not self._connectivity:
            self._log.info("connectivity_changed", state=new_state.value)
        self._connectivity = new_state

    def submitter_id(self) -> str:
        """Identity to record as submitted_by on a new report or draft."""
        if not self.is_online:
            return OFFLINE_SUBMITTER
        user = self._repository.current_user
        if user is None:
            return ANONYMOUS_SUBMITTER
        return user.id

    async def register(
        self,
        name: str,
        email: str,
        phone: str | None = None,
        location: str | None = None,
    ) -> User:
        """Register a citizen and make them the current user.

        Args:
            name: Display name (required).
            email: Contact email (required).
            phone: Optional phone number.
            location: Optional home location.

        Returns:
            The new, verified User.

        Raises:
            RegistrationError: If name or email is blank.
        """
        name = (name or "").strip()
        email = (email or "").strip()
        if not name or not email:
            raise RegistrationError([NAME_AND_EMAIL_REQUIRED])

        user = User(
            id=str(uuid4()),
            name=name,
            email=email,
            registered_at=self._time.now(),
            phone=(phone or "").strip() or None,
            location=(location or "").strip() or None,
            is_verified=True,
        )
        await self._repository.set_current_user(user)

        self._log_operation("register", user_id=user.id).info("user_registered")
        return user

    async def logout(self) -> int:
        """Forget the current user and wipe all local data.

        Returns:
            Number of scheduled advances that were cancelled.
        """
        log = self._log_operation("logout")
        cancelled = await self._scheduler.cancel_all(ADVANCE_REPORT_JOB)
        self._repository.reset()
        log.info("session_cleared", cancelled_advances=cancelled)
        return cancelled

    async def update_settings(self, **changes: object) -> Settings:
        """Apply settings changes and persist them.

        Raises:
            ValueError: If a key does not name a setting.
        """
        settings = self._repository.settings.with_changes(**changes)
        await self._repository.set_settings(settings)
        self._log_operation("update_settings", changed=sorted(changes)).info(
            "settings_updated"
        )
        return settings
