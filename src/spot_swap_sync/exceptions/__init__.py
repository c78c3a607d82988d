"""Exceptions subpackage."""

from spot_swap_sync.exceptions.exceptions import (
    ChainDataSourceError,
    MissingRequiredConfigError,
    RateLimitError,
    SpotSyncError,
    UnsupportedChainOperationError,
)

__all__ = [
    "ChainDataSourceError",
    "MissingRequiredConfigError",
    "RateLimitError",
    "SpotSyncError",
    "UnsupportedChainOperationError",
]
