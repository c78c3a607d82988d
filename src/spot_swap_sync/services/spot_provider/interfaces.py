"""Spot data provider contract and the immutable engine configuration."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar

from spot_swap_sync.models.chain import DEFAULT_CHAIN_CONFIGS, ChainConfig
from spot_swap_sync.models.protocol_filter import ProtocolFilter
from spot_swap_sync.models.trade import Trade
from spot_swap_sync.models.transfer import Transfer
from spot_swap_sync.services.cursor.block_cursor_resolver import Since
from spot_swap_sync.services.spot_provider.skip_tracker import MAX_SKIP_AGE_BLOCKS


@dataclass(frozen=True, slots=True)
class SpotEngineConfig:
    """Plain data handed to the engine at construction. Never re-read from settings."""

    protocol_filters: tuple[ProtocolFilter, ...] = ()
    chain_configs: Mapping[str, ChainConfig] = field(default_factory=lambda: DEFAULT_CHAIN_CONFIGS)
    max_skip_age_blocks: int = MAX_SKIP_AGE_BLOCKS
    receipt_concurrency: int = 8
    max_transfer_pages: int = 200
    transfer_cache_ttl_seconds: float = 30.0
    """How long fetched legs are reused by later calls for the same range; 0 disables."""
    transfer_cache_size: int = 256

    def __post_init__(self) -> None:
        if not isinstance(self.chain_configs, MappingProxyType):
            object.__setattr__(self, "chain_configs", MappingProxyType(dict(self.chain_configs)))


@dataclass(frozen=True, slots=True)
class TradesResult:
    """Trades of one call plus the retry cursor.

    lowest_skipped_block is the minimum over all chains; skipped_blocks_by_chain
    holds the per-chain values (chains without a tracked skip are absent).
    failed_chains lists chains that raised and returned nothing; their range was
    not scanned.
    """

    trades: tuple[Trade, ...] = ()
    lowest_skipped_block: int | None = None
    skipped_blocks_by_chain: Mapping[str, int] = field(default_factory=dict)
    failed_chains: tuple[str, ...] = ()


class ISpotDataProvider(ABC):
    """Source of spot trades and transfers for a wallet."""

    supports_transfer_history: ClassVar[bool] = False
    """True if get_transfer_history is implemented."""

    @abstractmethod
    async def get_trades_since(
        self,
        wallet: str,
        since: Since,
        chains: Sequence[str],
        to_block: int | None = None,
    ) -> TradesResult:
        ...

    async def get_transfer_history(
        self,
        wallet: str,
        since: Since,
        chains: Sequence[str],
        to_block: int | None = None,
    ) -> list[Transfer]:
        raise NotImplementedError(f"{type(self).__name__} does not provide transfer history")

    @abstractmethod
    async def get_native_balance(self, wallet: str, chain: str) -> str:
        ...

    @abstractmethod
    async def get_current_block(self, chain: str) -> int:
        ...

    @abstractmethod
    def get_name(self) -> str:
        ...

    @abstractmethod
    async def is_healthy(self) -> bool:
        ...
