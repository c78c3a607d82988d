"""SeenTrade: a swap already emitted for a wallet.

Retry windows and overlapping block ranges make the sync rescan the same
transactions; a SeenTrade per (wallet, "tx:<hash>") keeps each swap emitted once.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from spot_swap_sync.utils.dedupe import trade_key as make_trade_key

if TYPE_CHECKING:
    from spot_swap_sync.models.trade import Trade


@dataclass(frozen=True, slots=True)
class SeenTrade:
    """Emitted swap marker. Identity: (wallet, trade_key); chain and block are informational."""

    wallet: str
    trade_key: str
    """"tx:" plus the lower-cased transaction hash (one trade per transaction)."""
    seen_at: datetime
    chain: str | None = None
    block_number: int | None = None

    @classmethod
    def create(
        cls,
        wallet: str,
        trade_key: str,
        *,
        seen_at: datetime | None = None,
        chain: str | None = None,
        block_number: int | None = None,
    ) -> SeenTrade:
        """Build a record with wallet and key lower-cased; both must be non-empty."""
        wallet = wallet.strip().lower()
        trade_key = trade_key.strip().lower()
        if not wallet or not trade_key:
            raise ValueError("wallet and trade_key must be non-empty")
        return cls(
            wallet=wallet,
            trade_key=trade_key,
            seen_at=seen_at or datetime.now(UTC),
            chain=chain.strip().lower() if chain else None,
            block_number=block_number,
        )

    @classmethod
    def for_trade(cls, wallet: str, trade: Trade, *, seen_at: datetime | None = None) -> SeenTrade:
        return cls.create(
            wallet,
            make_trade_key(trade),
            seen_at=seen_at,
            chain=trade.chain,
            block_number=trade.block_number,
        )
