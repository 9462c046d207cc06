"""Domain services for CivicConnect.

Domain services contain business logic that doesn't naturally fit in the
models. They must NOT depend on infrastructure.

Available services:
- route: Category to authority routing table
- validate_report: Report field validation
- ScriptTagPolicy: Baseline free-text sanitization policy
- format_status / format_category / format_priority: Display labels
"""

from civic_connect.domain.services.labels import (
    format_category,
    format_priority,
    format_status,
    format_time_ago,
)
from civic_connect.domain.services.routing import DEFAULT_AUTHORITY, ROUTING_TABLE, route
from civic_connect.domain.services.sanitization import (
    DEFAULT_SANITIZATION_POLICY,
    ScriptTagPolicy,
    TextSanitizerProtocol,
)
from civic_connect.domain.services.validation import (
    MIN_DESCRIPTION_LENGTH,
    MIN_TITLE_LENGTH,
    ValidationResult,
    sanitize_fields,
    validate_report,
)

__all__ = [
    "DEFAULT_AUTHORITY",
    "DEFAULT_SANITIZATION_POLICY",
    "MIN_DESCRIPTION_LENGTH",
    "MIN_TITLE_LENGTH",
    "ROUTING_TABLE",
    "ScriptTagPolicy",
    "TextSanitizerProtocol",
    "ValidationResult",
    "format_category",
    "format_priority",
    "format_status",
    "format_time_ago",
    "route",
    "sanitize_fields",
    "validate_report",
]
