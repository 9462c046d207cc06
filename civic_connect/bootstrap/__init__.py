"""Bootstrap wiring for CivicConnect."""

from civic_connect.bootstrap.app import CivicConnectApp, create_app
from civic_connect.bootstrap.logging import configure_structlog

__all__ = ["CivicConnectApp", "configure_structlog", "create_app"]
