"""Dependency injection."""

from spot_swap_sync.DI.container import Container, build_engine_config

__all__ = ["Container", "build_engine_config"]
