# -*- coding: utf-8 -*-
"""Repository interfaces (abstractions). Implementations live in in_memory/, sql/, etc."""

from spot_swap_sync.persistence.repositories.interfaces.seen_trade_repository import (
    ISeenTradeRepository,
)
from spot_swap_sync.persistence.repositories.interfaces.sync_state_repository import (
    ISyncStateRepository,
)

__all__ = [
    "ISeenTradeRepository",
    "ISyncStateRepository",
]
