"""Raw report form fields.

ReportFields is the plain-data record the form collaborator hands to the
core. It is the input of validation and sanitization, and the body of a
draft.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

DEFAULT_PRIORITY = "medium"

# Form keys as sent by the browser form, mapped to field names
_FORM_KEY_ALIASES: dict[str, str] = {
    "isPublic": "is_public",
    "isAnonymous": "is_anonymous",
}


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes", "on"}
    return bool(value)


def evidence_names(value: Any) -> tuple[str, ...]:
    """Normalize an evidence value to a tuple of file names.

    Accepts a single file name, a list of names, or the file objects the
    browser form stores ({"name", "size", "type", "lastModified"}).
    """
    if not value:
        return ()
    if not isinstance(value, (list, tuple)):
        value = [value]
    names: list[str] = []
    for item in value:
        name = item.get("name") if isinstance(item, Mapping) else item
        if name:
            names.append(str(name))
    return tuple(names)


@dataclass(frozen=True, eq=True)
class ReportFields:
    """Report fields as collected from the submission form.

    Attributes:
        title: Issue title.
        category: Category value (may be empty or unknown).
        description: Issue description.
        location: Free-text location.
        priority: Priority value (low, medium, high).
        is_public: Whether the report is publicly visible.
        is_anonymous: Whether the submitter asked to stay anonymous.
        evidence: Attached evidence file names.
    """

    title: str = field(default="")
    category: str = field(default="")
    description: str = field(default="")
    location: str = field(default="")
    priority: str = field(default=DEFAULT_PRIORITY)
    is_public: bool = field(default=True)
    is_anonymous: bool = field(default=False)
    evidence: tuple[str, ...] = field(default=())

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> ReportFields:
        """Build fields from a raw form field bag.

        Accepts snake_case keys and the form's camelCase keys. Missing
        strings become empty, a missing priority becomes medium.

        Args:
            raw: Field bag from the form.

        Returns:
            ReportFields with text coerced to str and flags to bool.
        """
        data = {_FORM_KEY_ALIASES.get(key, key): value for key, value in raw.items()}
        return cls(
            title=_as_text(data.get("title")),
            category=_as_text(data.get("category")),
            description=_as_text(data.get("description")),
            location=_as_text(data.get("location")),
            priority=_as_text(data.get("priority")).strip().lower() or DEFAULT_PRIORITY,
            is_public=_as_bool(data.get("is_public"), default=True),
            is_anonymous=_as_bool(data.get("is_anonymous"), default=False),
            evidence=evidence_names(data.get("evidence")),
        )

    def with_text(self, title: str, description: str, location: str) -> ReportFields:
        """Create new fields with the free-text values replaced."""
        return replace(self, title=title, description=description, location=location)
