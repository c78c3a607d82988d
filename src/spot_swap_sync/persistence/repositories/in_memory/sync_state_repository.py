# -*- coding: utf-8 -*-
"""In-memory sync state repository (keyed by (wallet, chain))."""

from __future__ import annotations

import asyncio

from spot_swap_sync.models.sync_state import SyncState
from spot_swap_sync.persistence.repositories.interfaces.sync_state_repository import (
    ISyncStateRepository,
)


def _key(wallet: str, chain: str) -> tuple[str, str]:
    return (wallet.strip().lower(), chain.strip().lower())


class InMemorySyncStateRepository(ISyncStateRepository):
    """In-memory implementation of ISyncStateRepository."""

    def __init__(self) -> None:
        self._store: dict[tuple[str, str], SyncState] = {}
        self._lock = asyncio.Lock()

    async def get(self, wallet: str, chain: str) -> SyncState | None:
        return self._store.get(_key(wallet, chain))

    async def upsert(self, wallet: str, chain: str, last_scanned_block: int) -> SyncState:
        """Store the higher of the current and the new block."""
        k = _key(wallet, chain)
        async with self._lock:
            current = self._store.get(k)
            if current is None:
                state = SyncState.create(k[0], k[1], max(0, last_scanned_block))
            else:
                state = current.advanced_to(last_scanned_block)
            self._store[k] = state
            return state
