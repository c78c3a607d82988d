"""Logging setup (structlog + Logfire)."""

from spot_swap_sync.logging.config import configure_logging

__all__ = ["configure_logging"]
