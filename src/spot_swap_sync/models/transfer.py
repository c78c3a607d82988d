"""Transfer: a deposit or withdrawal leg that is not part of a swap."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class TransferType(str, Enum):
    """Direction of a non-swap transfer from the wallet's point of view."""

    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"


@dataclass(frozen=True, slots=True)
class Transfer:
    """One non-swap leg. Every leg of a deposit/withdraw transaction becomes its own record."""

    type: TransferType
    token_address: str
    amount: Decimal
    from_address: str
    to_address: str
    chain: str
    timestamp: datetime
    tx_hash: str
    """Upstream hash, or a synthesized fallback when upstream has none."""
    block_number: int
