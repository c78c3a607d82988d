"""Persistence layer (repositories, etc.)."""

from spot_swap_sync.persistence.repositories import (
    InMemorySeenTradeRepository,
    InMemorySyncStateRepository,
    ISeenTradeRepository,
    ISyncStateRepository,
)

__all__ = [
    "ISeenTradeRepository",
    "ISyncStateRepository",
    "InMemorySeenTradeRepository",
    "InMemorySyncStateRepository",
]
