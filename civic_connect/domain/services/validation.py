"""Report field validation domain service.

Validation is the gate in front of submission: it sanitizes the free-text
fields with the configured policy and checks the minimum constraints. It
never raises for bad input; it returns a ValidationResult the caller can
re-prompt with.

Rules:
- Title at least 5 characters after sanitization.
- Category present. With strict_categories, also a known category.
- Description at least 20 characters after sanitization.
- Priority one of low, medium, high.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from civic_connect.domain.models.report import ReportCategory, ReportPriority
from civic_connect.domain.models.report_fields import ReportFields
from civic_connect.domain.services.sanitization import (
    DEFAULT_SANITIZATION_POLICY,
    TextSanitizerProtocol,
)

MIN_TITLE_LENGTH: int = 5
MIN_DESCRIPTION_LENGTH: int = 20

TITLE_TOO_SHORT = f"Title must be at least {MIN_TITLE_LENGTH} characters long"
CATEGORY_MISSING = "Please select a category"
CATEGORY_UNKNOWN = "Please select a valid category"
DESCRIPTION_TOO_SHORT = (
    f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters long"
)
PRIORITY_INVALID = "Priority must be one of: low, medium, high"

_PRIORITY_VALUES: frozenset[str] = frozenset(p.value for p in ReportPriority)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating report fields.

    Attributes:
        errors: Validation messages, empty when the fields are valid.
        sanitized: Sanitized fields (present even when invalid, so a draft
            can keep what the citizen typed).
    """

    errors: tuple[str, ...] = field(default=())
    sanitized: ReportFields | None = field(default=None)

    @property
    def ok(self) -> bool:
        return not self.errors


def sanitize_fields(
    fields: ReportFields,
    policy: TextSanitizerProtocol = DEFAULT_SANITIZATION_POLICY,
) -> ReportFields:
    """Apply the sanitization policy to the free-text fields."""
    return fields.with_text(
        title=policy.sanitize(fields.title),
        description=policy.sanitize(fields.description),
        location=policy.sanitize(fields.location),
    )


def validate_report(
    fields: ReportFields,
    policy: TextSanitizerProtocol = DEFAULT_SANITIZATION_POLICY,
    strict_categories: bool = False,
) -> ValidationResult:
    """Sanitize and validate report fields.

    Args:
        fields: Raw fields from the form.
        policy: Sanitization policy for free text.
        strict_categories: Also reject categories outside ReportCategory.

    Returns:
        ValidationResult with errors in rule order.
    """
    sanitized = sanitize_fields(fields, policy)
    errors: list[str] = []

    if len(sanitized.title) < MIN_TITLE_LENGTH:
        errors.append(TITLE_TOO_SHORT)

    category = sanitized.category.strip()
    if not category:
        errors.append(CATEGORY_MISSING)
    elif strict_categories and not ReportCategory.is_known(category):
        errors.append(CATEGORY_UNKNOWN)

    if len(sanitized.description) < MIN_DESCRIPTION_LENGTH:
        errors.append(DESCRIPTION_TOO_SHORT)

    if sanitized.priority not in _PRIORITY_VALUES:
        errors.append(PRIORITY_INVALID)

    return ValidationResult(errors=tuple(errors), sanitized=sanitized)
