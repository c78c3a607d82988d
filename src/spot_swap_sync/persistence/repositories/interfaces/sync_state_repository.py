"""Abstract interface for per-(wallet, chain) sync cursors."""

from __future__ import annotations

from abc import ABC, abstractmethod

from spot_swap_sync.models.sync_state import SyncState


class ISyncStateRepository(ABC):
    """Interface for persisting the highest scanned block per (wallet, chain)."""

    @abstractmethod
    async def get(self, wallet: str, chain: str) -> SyncState | None:
        """Return the state for (wallet, chain), or None before the first sync."""
        ...

    @abstractmethod
    async def upsert(self, wallet: str, chain: str, last_scanned_block: int) -> SyncState:
        """Store max(stored, last_scanned_block) and return the resulting state.

        The stored block never decreases.
        """
        ...
