"""In-memory repository implementations."""

from spot_swap_sync.persistence.repositories.in_memory.seen_trade_repository import (
    InMemorySeenTradeRepository,
)
from spot_swap_sync.persistence.repositories.in_memory.sync_state_repository import (
    InMemorySyncStateRepository,
)

__all__ = [
    "InMemorySeenTradeRepository",
    "InMemorySyncStateRepository",
]
