"""Configuration for CivicConnect."""

from civic_connect.config.civic_config import (
    DEFAULT_CIVIC_CONFIG,
    TEST_CIVIC_CONFIG,
    CivicConnectConfig,
)

__all__ = [
    "DEFAULT_CIVIC_CONFIG",
    "TEST_CIVIC_CONFIG",
    "CivicConnectConfig",
]
