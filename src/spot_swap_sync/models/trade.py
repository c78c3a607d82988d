"""Swap models: DetectedSwap (resolver output) and Trade (emitted record)."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal

UNKNOWN_PROTOCOL = "Unknown"


@dataclass(frozen=True, slots=True)
class DetectedSwap:
    """A swap resolved from receipt logs or from the transfer pattern, before gas enrichment."""

    tx_hash: str
    block_number: int
    timestamp: datetime
    from_token: str
    """Input token contract, or the zero address for the native asset."""
    to_token: str
    from_amount: Decimal
    to_amount: Decimal
    protocol: str = UNKNOWN_PROTOCOL

    def with_protocol(self, protocol: str) -> DetectedSwap:
        """Return a copy labeled with protocol."""
        return replace(self, protocol=protocol)


@dataclass(frozen=True, slots=True)
class Trade:
    """On-chain swap for one wallet. Identity: (tx_hash, wallet); at most one per transaction."""

    tx_hash: str
    chain: str
    block_number: int
    timestamp: datetime
    from_token: str
    to_token: str
    from_amount: Decimal
    to_amount: Decimal
    protocol: str = UNKNOWN_PROTOCOL
    gas_used: int = 0
    gas_price: int = 0
    """Effective gas price in wei."""
