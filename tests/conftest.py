# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from typing import Any

import pytest

from spot_swap_sync.clients.interfaces import AssetTransfersPage, IChainDataSource
from spot_swap_sync.exceptions import ChainDataSourceError, UnsupportedChainOperationError
from spot_swap_sync.models.chain import NATIVE_TOKEN_ADDRESS
from spot_swap_sync.models.raw_transfer import RawTransfer, TransferCategory
from spot_swap_sync.models.receipt import ReceiptLog, TransactionInfo, TransactionReceipt
from spot_swap_sync.persistence.repositories.in_memory import (
    InMemorySeenTradeRepository,
    InMemorySyncStateRepository,
)
from spot_swap_sync.utils.evm import ERC20_TRANSFER_TOPIC

USDC = "0x833589fcd6edb6e08f4c7c32d4f71b54bda02913"
AERO = "0x940181a94a35a4569e4529a3cdfb74e38fd98631"
WETH = "0x4200000000000000000000000000000000000006"
ROUTER = "0x6131b5fae19ea4f9d964eac0408e4408b66337b5"
POOL = "0xcdac0d6c6c59727a65f871236188350531885c43"
SWAP_TOPIC = "0xd78ad95fa46c994b6551d0da85fc275fe613ce37657fb8d5e3d130840159d822"


def _topic(address: str) -> str:
    return "0x" + "0" * 24 + address.lower()[2:]


class FakeChainDataSource(IChainDataSource):
    """In-test chain data source driven by plain dicts.

    pages[chain] is the list of pages returned in order; receipts and
    transactions map (chain, tx_hash) to a value, None, or an exception to
    raise. block_numbers values may be exceptions too.
    """

    def __init__(self) -> None:
        self.pages: dict[str, list[list[RawTransfer]]] = {}
        self.receipts: dict[tuple[str, str], Any] = {}
        self.transactions: dict[tuple[str, str], Any] = {}
        self.block_numbers: dict[str, Any] = {}
        self.balances: dict[tuple[str, str], str] = {}
        self.transfer_errors: dict[str, Exception] = {}
        self.healthy = True
        self.transfer_calls: list[tuple[str, str, int, int | None, str | None]] = []
        self.receipt_calls: list[tuple[str, str]] = []
        self.transaction_calls: list[tuple[str, str]] = []

    async def get_asset_transfers(
        self,
        address: str,
        chain: str,
        from_block: int,
        to_block: int | None = None,
        page_key: str | None = None,
    ) -> AssetTransfersPage:
        self.transfer_calls.append((address, chain, from_block, to_block, page_key))
        if chain in self.transfer_errors:
            raise self.transfer_errors[chain]
        pages = self.pages.get(chain, [])
        index = int(page_key) if page_key else 0
        if index >= len(pages):
            return AssetTransfersPage()
        next_key = str(index + 1) if index + 1 < len(pages) else None
        return AssetTransfersPage(transfers=tuple(pages[index]), page_key=next_key)

    async def get_transaction_receipt(self, tx_hash: str, chain: str) -> TransactionReceipt | None:
        self.receipt_calls.append((tx_hash, chain))
        value = self.receipts.get((chain, tx_hash))
        if isinstance(value, Exception):
            raise value
        return value

    async def get_transaction(self, tx_hash: str, chain: str) -> TransactionInfo | None:
        self.transaction_calls.append((tx_hash, chain))
        value = self.transactions.get((chain, tx_hash))
        if isinstance(value, Exception):
            raise value
        return value

    async def get_block_number(self, chain: str) -> int:
        if chain == "svm":
            raise UnsupportedChainOperationError("get_block_number", chain)
        if chain not in self.block_numbers:
            raise ChainDataSourceError(f"no block number for {chain}")
        value = self.block_numbers[chain]
        if isinstance(value, Exception):
            raise value
        return value

    async def get_balance(self, address: str, chain: str) -> str:
        return self.balances.get((chain, address), "0")

    def get_name(self) -> str:
        return "Fake"

    async def is_healthy(self) -> bool:
        return self.healthy


@pytest.fixture
def tokens() -> SimpleNamespace:
    """Token, router and event constants (Base mainnet addresses)."""
    return SimpleNamespace(
        usdc=USDC,
        aero=AERO,
        weth=WETH,
        native=NATIVE_TOKEN_ADDRESS,
        router=ROUTER,
        pool=POOL,
        swap_topic=SWAP_TOPIC,
    )


@pytest.fixture
def wallet() -> str:
    """Default synced wallet used by tests."""
    return "0x2d27b6e21b3d4d7c9a43fdf58f12345678907706"


@pytest.fixture
def counterparty() -> str:
    return "0x1111111111111111111111111111111111111111"


@pytest.fixture
def now_utc() -> datetime:
    """Stable UTC timestamp for deterministic assertions."""
    return datetime(2026, 2, 13, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def D() -> Callable[[Any], Decimal]:
    """Decimal helper: D('1.23') -> Decimal('1.23')."""
    return lambda value: Decimal(str(value))


@pytest.fixture
def raw_transfer_factory(
    now_utc: datetime,
    D: Callable[[Any], Decimal],
) -> Callable[..., RawTransfer]:
    """Build RawTransfer legs. token=None builds a native EXTERNAL leg."""

    def _build(**overrides: Any) -> RawTransfer:
        token = overrides.pop("token", USDC)
        category = overrides.pop(
            "category",
            TransferCategory.ERC20 if token else TransferCategory.EXTERNAL,
        )
        return RawTransfer(
            tx_hash=overrides.pop("tx_hash", "0xt1"),
            chain=overrides.pop("chain", "base"),
            block_number=overrides.pop("block_number", 1000),
            timestamp=overrides.pop("timestamp", now_utc),
            from_address=overrides.pop("from_address"),
            to_address=overrides.pop("to_address"),
            asset=overrides.pop("asset", "USDC" if token else "ETH"),
            contract_address=token,
            amount=D(overrides.pop("amount", "1")),
            category=category,
        )

    return _build


@pytest.fixture
def transfer_log() -> Callable[..., ReceiptLog]:
    """Build an ERC20 Transfer log: transfer_log(token, from, to, value, log_index)."""

    def _build(
        token: str,
        from_address: str,
        to_address: str,
        value: int,
        log_index: int | None,
    ) -> ReceiptLog:
        return ReceiptLog(
            address=token,
            topics=(ERC20_TRANSFER_TOPIC, _topic(from_address), _topic(to_address)),
            data=hex(value),
            log_index=log_index,
        )

    return _build


@pytest.fixture
def receipt_factory() -> Callable[..., TransactionReceipt]:
    def _build(**overrides: Any) -> TransactionReceipt:
        return TransactionReceipt(
            tx_hash=overrides.pop("tx_hash", "0xt1"),
            block_number=overrides.pop("block_number", 1000),
            status=overrides.pop("status", True),
            gas_used=overrides.pop("gas_used", 150_000),
            effective_gas_price=overrides.pop("effective_gas_price", 1_000_000),
            to=overrides.pop("to", ROUTER),
            from_address=overrides.pop("from_address", None),
            logs=tuple(overrides.pop("logs", ())),
        )

    return _build


@pytest.fixture
def fake_source() -> FakeChainDataSource:
    """Fresh fake chain data source per test."""
    return FakeChainDataSource()


@pytest.fixture
def sync_state_repo() -> InMemorySyncStateRepository:
    return InMemorySyncStateRepository()


@pytest.fixture
def seen_trade_repo() -> InMemorySeenTradeRepository:
    return InMemorySeenTradeRepository()
