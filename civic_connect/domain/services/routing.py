"""Category routing domain service.

Maps a report category to the authority responsible for it. The table is
static and the lookup is pure.
"""

from __future__ import annotations

from types import MappingProxyType

from civic_connect.domain.models.report import ReportCategory

DEFAULT_AUTHORITY = "General Administration"

ROUTING_TABLE: MappingProxyType[str, str] = MappingProxyType(
    {
        ReportCategory.INFRASTRUCTURE.value: "Municipal Public Works Department",
        ReportCategory.PUBLIC_SAFETY.value: "Police Department",
        ReportCategory.ENVIRONMENT.value: "Environmental Protection Agency",
        ReportCategory.TRANSPORTATION.value: "Transportation Department",
        ReportCategory.PUBLIC_SERVICES.value: "Municipal Services",
        ReportCategory.CORRUPTION.value: "Anti-Corruption Commission",
        ReportCategory.ACCESSIBILITY.value: "Disability Rights Office",
        ReportCategory.OTHER.value: DEFAULT_AUTHORITY,
    }
)


def route(category: str | None) -> str:
    """Return the responsible authority for a category.

    Args:
        category: Category value. Matching is exact.

    Returns:
        Authority name. Unknown or missing categories map to
        General Administration.
    """
    if not category:
        return DEFAULT_AUTHORITY
    return ROUTING_TABLE.get(category, DEFAULT_AUTHORITY)
