"""Text sanitization policy for free-text report fields.

The policy is a named rule set applied to title, description and location
before a report or draft is stored. It is the baseline: script blocks are
removed and surrounding whitespace trimmed. It is not a general HTML
sanitizer; any implementation of TextSanitizerProtocol can replace it.

Rules (ScriptTagPolicy):
1. Remove every <script ...>...</script> block, case-insensitive,
   shortest match.
2. Trim leading and trailing whitespace.
"""

from __future__ import annotations

import re
from typing import Protocol

SCRIPT_BLOCK_PATTERN = re.compile(
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>",
    re.IGNORECASE,
)


class TextSanitizerProtocol(Protocol):
    """Contract for free-text sanitizers."""

    name: str

    def sanitize(self, text: str | None) -> str:
        """Return the sanitized text; None becomes an empty string."""
        ...


class ScriptTagPolicy:
    """Strip script blocks, then trim.

    Attributes:
        name: Policy name, recorded in logs.
    """

    name = "script-tag"

    def sanitize(self, text: str | None) -> str:
        """Apply the script-tag rules.

        Args:
            text: Raw text from the form.

        Returns:
            Text with script blocks removed and whitespace trimmed.
        """
        if not text:
            return ""
        return SCRIPT_BLOCK_PATTERN.sub("", text).strip()


DEFAULT_SANITIZATION_POLICY: TextSanitizerProtocol = ScriptTagPolicy()
