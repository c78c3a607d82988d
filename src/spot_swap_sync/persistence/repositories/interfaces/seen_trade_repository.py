"""Storage contract for emitted-swap markers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from spot_swap_sync.models.seen_trade import SeenTrade


class ISeenTradeRepository(ABC):
    """Remembers which "tx:<hash>" keys were already emitted per wallet.

    Lookups match wallet and key case-insensitively, since hashes arrive in
    mixed case from different RPC providers.
    """

    @abstractmethod
    async def contains(self, wallet: str, trade_key: str) -> bool:
        """True when the swap in this transaction was already emitted for the wallet."""
        ...

    @abstractmethod
    async def add(self, seen_trade: SeenTrade) -> None:
        """Store a marker; the first record for a key wins."""
        ...

    async def add_batch(self, seen_trades: list[SeenTrade]) -> None:
        for st in seen_trades:
            await self.add(st)
