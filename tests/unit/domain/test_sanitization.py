"""Unit tests for the script-tag sanitization policy."""

from __future__ import annotations

from civic_connect.domain.services.sanitization import (
    DEFAULT_SANITIZATION_POLICY,
    ScriptTagPolicy,
    TextSanitizerProtocol,
)


class TestScriptTagPolicy:
    """Tests for ScriptTagPolicy.sanitize."""

    def test_removes_script_block(self) -> None:
        policy = ScriptTagPolicy()

        assert policy.sanitize("Hello <script>alert(1)</script>world") == "Hello world"

    def test_case_insensitive(self) -> None:
        assert ScriptTagPolicy().sanitize("a<SCRIPT type='x'>bad()</ScRiPt>b") == "ab"

    def test_multiple_blocks_removed_individually(self) -> None:
        """Shortest match: text between two blocks survives."""
        text = "<script>one()</script>keep<script>two()</script>"

        assert ScriptTagPolicy().sanitize(text) == "keep"

    def test_trims_whitespace(self) -> None:
        assert ScriptTagPolicy().sanitize("   spaced out  \n") == "spaced out"

    def test_other_markup_is_left_alone(self) -> None:
        assert ScriptTagPolicy().sanitize("<b>bold</b>") == "<b>bold</b>"

    def test_none_and_empty(self) -> None:
        assert ScriptTagPolicy().sanitize(None) == ""
        assert ScriptTagPolicy().sanitize("") == ""

    def test_default_policy(self) -> None:
        assert DEFAULT_SANITIZATION_POLICY.name == "script-tag"
        assert isinstance(DEFAULT_SANITIZATION_POLICY, ScriptTagPolicy)


class UppercasePolicy:
    """Stand-in policy used to prove the policy is swappable."""

    name = "upper"

    def sanitize(self, text: str | None) -> str:
        return (text or "").upper()


class TestPolicyProtocol:
    """Any object with name and sanitize() works as a policy."""

    def test_custom_policy_satisfies_protocol(self) -> None:
        policy: TextSanitizerProtocol = UppercasePolicy()

        assert policy.sanitize("abc") == "ABC"
