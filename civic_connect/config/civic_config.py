"""CivicConnect configuration.

Configuration for the local snapshot, the simulated review timeline and
validation strictness, with environment variable overrides.

Environment Variables:
- CIVIC_SNAPSHOT_PATH: Snapshot file (default: ~/.civic_connect/snapshot.json)
- CIVIC_REVIEW_DELAY_SECONDS: Delay before a new report's first advance (default: 2.0)
- CIVIC_ADVANCE_STAGGER_SECONDS: Spacing between staggered advances (default: 10.0)
- CIVIC_WORKER_POLL_SECONDS: Advance worker poll interval (default: 1.0)
- CIVIC_STRICT_CATEGORIES: Reject unknown categories (default: false)
- CIVIC_SEED_DEMO_DATA: Seed sample reports into an empty store (default: false)
- CIVIC_SIMULATE_ON_START: Schedule advances for pending reports on start (default: true)
- CIVIC_ENVIRONMENT: development or production (default: development)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENVIRONMENTS: frozenset[str] = frozenset({"development", "production"})

DEFAULT_SNAPSHOT_PATH = Path("~/.civic_connect/snapshot.json")

_TRUE_VALUES: frozenset[str] = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES: frozenset[str] = frozenset({"0", "false", "no", "off"})


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed float value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_bool_env(key: str, default: bool) -> bool:
    """Get boolean environment variable with default.

    Accepts 1/0, true/false, yes/no, on/off (case-insensitive). Anything
    else falls back to the default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


@dataclass(frozen=True)
class CivicConnectConfig:
    """Configuration for a CivicConnect session.

    Attributes:
        snapshot_path: Where the JSON snapshot lives. "~" is expanded.
        review_delay_seconds: Delay between submission and the first
            automatic advance. Default: 2.0 seconds.
        advance_stagger_seconds: Spacing between the advances scheduled by
            one schedule_advances round. Default: 10.0 seconds.
        worker_poll_seconds: How often the advance worker checks for due
            jobs. Default: 1.0 second.
        strict_categories: Reject categories outside the known set.
            Default: False, unknown categories route to General
            Administration.
        seed_demo_data: Seed two sample reports into an empty store on
            start. Default: False.
        simulate_on_start: Schedule a staggered advance round for pending
            reports on start. Default: True.
        environment: "development" (console logs) or "production" (JSON).
    """

    snapshot_path: Path = DEFAULT_SNAPSHOT_PATH
    review_delay_seconds: float = 2.0
    advance_stagger_seconds: float = 10.0
    worker_poll_seconds: float = 1.0
    strict_categories: bool = False
    seed_demo_data: bool = False
    simulate_on_start: bool = True
    environment: str = "development"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.review_delay_seconds < 0:
            raise ValueError(
                f"review_delay_seconds must be non-negative, got {self.review_delay_seconds}"
            )
        if self.advance_stagger_seconds <= 0:
            raise ValueError(
                f"advance_stagger_seconds must be positive, got {self.advance_stagger_seconds}"
            )
        if self.worker_poll_seconds <= 0:
            raise ValueError(
                f"worker_poll_seconds must be positive, got {self.worker_poll_seconds}"
            )
        if self.environment not in ENVIRONMENTS:
            raise ValueError(
                f"environment must be one of {sorted(ENVIRONMENTS)}, got {self.environment!r}"
            )

    @property
    def resolved_snapshot_path(self) -> Path:
        """Snapshot path with the user directory expanded."""
        return Path(self.snapshot_path).expanduser()

    @classmethod
    def from_environment(cls) -> "CivicConnectConfig":
        """Create config from environment variables with defaults.

        Returns:
            CivicConnectConfig with values from environment or defaults.
        """
        environment = os.environ.get("CIVIC_ENVIRONMENT", "development").strip().lower()
        if environment not in ENVIRONMENTS:
            environment = "development"
        return cls(
            snapshot_path=Path(
                os.environ.get("CIVIC_SNAPSHOT_PATH", str(DEFAULT_SNAPSHOT_PATH))
            ),
            review_delay_seconds=max(
                0.0, _get_float_env("CIVIC_REVIEW_DELAY_SECONDS", 2.0)
            ),
            advance_stagger_seconds=_positive_or_default(
                _get_float_env("CIVIC_ADVANCE_STAGGER_SECONDS", 10.0), 10.0
            ),
            worker_poll_seconds=_positive_or_default(
                _get_float_env("CIVIC_WORKER_POLL_SECONDS", 1.0), 1.0
            ),
            strict_categories=_get_bool_env("CIVIC_STRICT_CATEGORIES", False),
            seed_demo_data=_get_bool_env("CIVIC_SEED_DEMO_DATA", False),
            simulate_on_start=_get_bool_env("CIVIC_SIMULATE_ON_START", True),
            environment=environment,
        )


def _positive_or_default(value: float, default: float) -> float:
    return value if value > 0 else default


# Pre-defined configurations for common use cases

# Default config
DEFAULT_CIVIC_CONFIG = CivicConnectConfig()

# Testing config: no seeding and no start-up simulation round
TEST_CIVIC_CONFIG = CivicConnectConfig(
    snapshot_path=Path("civic_connect_test_snapshot.json"),
    review_delay_seconds=2.0,
    advance_stagger_seconds=10.0,
    worker_poll_seconds=0.01,
    seed_demo_data=False,
    simulate_on_start=False,
)
