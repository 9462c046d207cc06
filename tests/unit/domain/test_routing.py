"""Unit tests for category routing."""

from __future__ import annotations

import pytest

from civic_connect.domain.models.report import ReportCategory
from civic_connect.domain.services.routing import (
    DEFAULT_AUTHORITY,
    ROUTING_TABLE,
    route,
)


class TestRoute:
    """Tests for route()."""

    @pytest.mark.parametrize(
        ("category", "authority"),
        [
            ("infrastructure", "Municipal Public Works Department"),
            ("public-safety", "Police Department"),
            ("environment", "Environmental Protection Agency"),
            ("transportation", "Transportation Department"),
            ("public-services", "Municipal Services"),
            ("corruption", "Anti-Corruption Commission"),
            ("accessibility", "Disability Rights Office"),
            ("other", "General Administration"),
        ],
    )
    def test_known_categories(self, category: str, authority: str) -> None:
        assert route(category) == authority

    @pytest.mark.parametrize("category", ["", None, "potholes", "Infrastructure", " infrastructure"])
    def test_unknown_or_missing_routes_to_general_administration(
        self, category: str | None
    ) -> None:
        """Matching is exact; anything else gets the default authority."""
        assert route(category) == DEFAULT_AUTHORITY

    def test_table_covers_every_category(self) -> None:
        assert set(ROUTING_TABLE) == {c.value for c in ReportCategory}

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            ROUTING_TABLE["infrastructure"] = "Someone else"  # type: ignore[index]
