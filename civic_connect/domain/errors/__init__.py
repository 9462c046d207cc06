"""Domain errors for CivicConnect.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from CivicConnectError.
"""

from civic_connect.domain.errors.persistence import (
    PersistenceError,
    SnapshotCorruptError,
    SnapshotWriteError,
)
from civic_connect.domain.errors.registration import RegistrationError
from civic_connect.domain.errors.report import (
    DraftNotFoundError,
    ReportError,
    ReportNotFoundError,
    ReportValidationError,
)
from civic_connect.domain.errors.state_transition import (
    InvalidStateTransitionError,
    ReportAlreadyResolvedError,
)

__all__: list[str] = [
    "DraftNotFoundError",
    "InvalidStateTransitionError",
    "PersistenceError",
    "RegistrationError",
    "ReportAlreadyResolvedError",
    "ReportError",
    "ReportNotFoundError",
    "ReportValidationError",
    "SnapshotCorruptError",
    "SnapshotWriteError",
]
