"""Chain data source abstraction consumed by the swap engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from spot_swap_sync.models.raw_transfer import RawTransfer
from spot_swap_sync.models.receipt import TransactionInfo, TransactionReceipt


@dataclass(frozen=True, slots=True)
class AssetTransfersPage:
    """One page of transfers touching an address. page_key is None on the last page."""

    transfers: tuple[RawTransfer, ...] = field(default_factory=tuple)
    page_key: str | None = None


class IChainDataSource(ABC):
    """Per-chain access to transfer history, receipts, block height and balances."""

    @abstractmethod
    async def get_asset_transfers(
        self,
        address: str,
        chain: str,
        from_block: int,
        to_block: int | None = None,
        page_key: str | None = None,
    ) -> AssetTransfersPage:
        """Return transfers sent or received by address in [from_block, to_block]."""
        ...

    @abstractmethod
    async def get_transaction_receipt(self, tx_hash: str, chain: str) -> TransactionReceipt | None:
        """Return the receipt, or None when it is not available yet."""
        ...

    @abstractmethod
    async def get_transaction(self, tx_hash: str, chain: str) -> TransactionInfo | None:
        ...

    @abstractmethod
    async def get_block_number(self, chain: str) -> int:
        ...

    @abstractmethod
    async def get_balance(self, address: str, chain: str) -> str:
        """Return the native balance as a decimal string.

        Raises:
            UnsupportedChainOperationError: If chain is not an EVM chain.
        """
        ...

    @abstractmethod
    def get_name(self) -> str:
        ...

    @abstractmethod
    async def is_healthy(self) -> bool:
        ...
