"""Deduplication key for detected trades."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spot_swap_sync.models.trade import Trade


def trade_key(trade: Trade) -> str:
    """Return a stable key identifying a trade for one wallet.

    A transaction yields at most one trade per wallet, so the lower-cased hash is enough.
    """
    return f"tx:{trade.tx_hash.strip().lower()}"
