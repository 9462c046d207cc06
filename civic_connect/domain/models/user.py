"""Registered citizen model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, eq=True)
class User:
    """A registered citizen.

    At most one user is current per session. Reports may be submitted
    without one.

    Attributes:
        id: Opaque unique identifier.
        name: Display name.
        email: Contact email.
        registered_at: Registration timestamp (UTC).
        phone: Optional phone number.
        location: Optional home location.
        is_verified: Verification flag.
    """

    id: str
    name: str
    email: str
    registered_at: datetime
    phone: str | None = field(default=None)
    location: str | None = field(default=None)
    is_verified: bool = field(default=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name cannot be empty")
        if not self.email:
            raise ValueError("email cannot be empty")
        if self.registered_at.tzinfo is None:
            raise ValueError("registered_at must be timezone-aware (UTC)")
