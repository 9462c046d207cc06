"""Clock adapters."""

from civic_connect.infrastructure.adapters.time.system_time_authority import (
    SystemTimeAuthority,
)

__all__ = ["SystemTimeAuthority"]
