"""System clock implementation of TimeAuthorityProtocol.

This is the only module allowed to read the wall clock directly.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone

from civic_connect.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Wall clock in UTC plus the process monotonic clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()
