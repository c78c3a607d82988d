"""SyncState: highest block scanned for a (wallet, chain) pair."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass(frozen=True, slots=True)
class SyncState:
    """Cursor for incremental sync. last_scanned_block only moves forward."""

    wallet: str
    chain: str
    last_scanned_block: int
    updated_at: datetime

    @classmethod
    def create(
        cls,
        wallet: str,
        chain: str,
        last_scanned_block: int,
        *,
        updated_at: datetime | None = None,
    ) -> SyncState:
        """Create a new SyncState."""
        wallet = wallet.strip().lower()
        chain = chain.strip().lower()
        if not wallet or not chain:
            raise ValueError("wallet and chain must be non-empty")
        if last_scanned_block < 0:
            raise ValueError("last_scanned_block must be >= 0")
        return cls(
            wallet=wallet,
            chain=chain,
            last_scanned_block=last_scanned_block,
            updated_at=updated_at or datetime.now(UTC),
        )

    def advanced_to(self, block: int, *, updated_at: datetime | None = None) -> SyncState:
        """Return a copy at max(current, block)."""
        return SyncState(
            wallet=self.wallet,
            chain=self.chain,
            last_scanned_block=max(self.last_scanned_block, block),
            updated_at=updated_at or datetime.now(UTC),
        )
