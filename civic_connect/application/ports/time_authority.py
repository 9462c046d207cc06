"""Time Authority Protocol - interface for timestamp provisioning.

Every service that stamps a report, draft, user or job injects a
TimeAuthorityProtocol implementation instead of calling datetime.now()
directly, so tests can drive time deterministically.

For production:
    Use SystemTimeAuthority from civic_connect.infrastructure.adapters.time

For testing:
    Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    Example usage:
        class MyService:
            def __init__(self, time_authority: TimeAuthorityProtocol) -> None:
                self._time = time_authority

            def process(self) -> None:
                now = self._time.now()  # NOT datetime.now()
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return current time.

        Returns:
            Current datetime, timezone-aware in UTC.
        """
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return monotonic clock value for measuring elapsed time.

        Returns:
            Monotonically increasing float value (in seconds). Only
            differences are meaningful.
        """
        ...
