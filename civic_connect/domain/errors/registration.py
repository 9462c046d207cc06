"""User registration errors."""

from __future__ import annotations

from civic_connect.domain.exceptions import CivicConnectError


class RegistrationError(CivicConnectError):
    """Raised when user registration details are incomplete.

    Attributes:
        errors: Human-readable messages.
    """

    def __init__(self, errors: list[str] | tuple[str, ...]) -> None:
        self.errors = tuple(errors)
        super().__init__(", ".join(self.errors))
