"""RawTransfer: one leg of value movement reported by the transfer-history source."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from spot_swap_sync.models.chain import NATIVE_TOKEN_ADDRESS


class TransferCategory(str, Enum):
    """Upstream transfer category. EXTERNAL and INTERNAL are native-asset movements."""

    EXTERNAL = "external"
    """Top-level native value transfer."""
    INTERNAL = "internal"
    """Native value moved by a contract call."""
    ERC20 = "erc20"
    """Token transfer; always carries a contract address."""


NATIVE_CATEGORIES = frozenset({TransferCategory.EXTERNAL, TransferCategory.INTERNAL})


@dataclass(frozen=True, slots=True)
class RawTransfer:
    """Immutable transfer leg. Addresses and hash are stored lower-cased.

    Nativeness comes from the category tag, never from a missing contract address.
    """

    tx_hash: str
    chain: str
    block_number: int
    timestamp: datetime
    from_address: str
    to_address: str
    asset: str
    """Symbol reported upstream (e.g. ETH, USDC)."""
    contract_address: str | None
    """Token contract; None for native legs."""
    amount: Decimal
    """Decimal-adjusted amount."""
    category: TransferCategory

    def __post_init__(self) -> None:
        if self.category is TransferCategory.ERC20 and not self.contract_address:
            raise ValueError(f"ERC20 transfer without contract address (tx {self.tx_hash!r})")

    @property
    def is_native(self) -> bool:
        """True for EXTERNAL/INTERNAL legs."""
        return self.category in NATIVE_CATEGORIES

    @property
    def token_address(self) -> str:
        """Contract address for tokens, the zero address for native legs."""
        if self.is_native:
            return NATIVE_TOKEN_ADDRESS
        return (self.contract_address or "").lower()
