"""Accessibility and notification settings."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace

DEFAULT_LANGUAGE = "en"


@dataclass(frozen=True, eq=True)
class Settings:
    """Per-session display and notification preferences.

    Attributes:
        high_contrast: High contrast theme.
        large_text: Enlarged text.
        screen_reader: Screen reader enhancements.
        language: UI language code.
        email_notifications: Email status notifications.
        sms_notifications: SMS status notifications.
    """

    high_contrast: bool = field(default=False)
    large_text: bool = field(default=False)
    screen_reader: bool = field(default=False)
    language: str = field(default=DEFAULT_LANGUAGE)
    email_notifications: bool = field(default=False)
    sms_notifications: bool = field(default=False)

    def with_changes(self, **changes: object) -> Settings:
        """Create new settings with the given fields replaced.

        Raises:
            ValueError: If a key does not name a settings field.
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ValueError(f"Unknown settings: {unknown}")
        return replace(self, **changes)  # type: ignore[arg-type]
