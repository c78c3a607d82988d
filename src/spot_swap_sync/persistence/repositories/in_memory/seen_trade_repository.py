# -*- coding: utf-8 -*-
"""Process-local emitted-swap markers; lost on restart, so a fresh process re-emits its first window."""

from __future__ import annotations

from spot_swap_sync.models.seen_trade import SeenTrade
from spot_swap_sync.persistence.repositories.interfaces.seen_trade_repository import (
    ISeenTradeRepository,
)


class InMemorySeenTradeRepository(ISeenTradeRepository):
    """Dict of wallet -> {trade_key: SeenTrade}."""

    def __init__(self) -> None:
        self._by_wallet: dict[str, dict[str, SeenTrade]] = {}

    async def contains(self, wallet: str, trade_key: str) -> bool:
        keys = self._by_wallet.get(wallet.strip().lower())
        return keys is not None and trade_key.strip().lower() in keys

    async def add(self, seen_trade: SeenTrade) -> None:
        keys = self._by_wallet.setdefault(seen_trade.wallet.strip().lower(), {})
        keys.setdefault(seen_trade.trade_key.strip().lower(), seen_trade)

    def count(self, wallet: str) -> int:
        """Number of swaps emitted so far for a wallet."""
        return len(self._by_wallet.get(wallet.strip().lower(), {}))
