# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory, etc.)."""

from spot_swap_sync.persistence.repositories.in_memory import (
    InMemorySeenTradeRepository,
    InMemorySyncStateRepository,
)
from spot_swap_sync.persistence.repositories.interfaces import (
    ISeenTradeRepository,
    ISyncStateRepository,
)

__all__ = [
    "ISeenTradeRepository",
    "ISyncStateRepository",
    "InMemorySeenTradeRepository",
    "InMemorySyncStateRepository",
]
