# -*- coding: utf-8 -*-
"""Unit tests for SpotSyncService (cursor, retry window, dedupe, transfer violations)."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace
from typing import Any

import pytest

from spot_swap_sync.config import Settings
from spot_swap_sync.exceptions import ChainDataSourceError
from spot_swap_sync.models.receipt import ReceiptLog, TransactionReceipt
from spot_swap_sync.models.trade import Trade
from spot_swap_sync.services.spot_provider import RpcSpotProvider
from spot_swap_sync.services.sync.spot_sync_service import (
    SpotSyncService,
    incremental_start_block,
    safe_highest_block,
)


@pytest.fixture
def settings() -> Settings:
    return Settings.from_env(sync={"retry_window_blocks": 10})


@pytest.fixture
def add_swap(
    fake_source: Any,
    wallet: str,
    tokens: SimpleNamespace,
    raw_transfer_factory: Callable[..., Any],
    transfer_log: Callable[..., ReceiptLog],
    receipt_factory: Callable[..., TransactionReceipt],
) -> Callable[..., None]:
    """Register an AERO -> USDC swap on base; receipt=False leaves the receipt missing."""

    def _add(tx_hash: str, block: int, receipt: bool = True) -> None:
        page = fake_source.pages.setdefault("base", [[]])[0]
        page.append(
            raw_transfer_factory(
                tx_hash=tx_hash, block_number=block, token=tokens.aero,
                amount="10", from_address=wallet, to_address=tokens.pool,
            )
        )
        page.append(
            raw_transfer_factory(
                tx_hash=tx_hash, block_number=block, token=tokens.usdc,
                amount="5", from_address=tokens.pool, to_address=wallet,
            )
        )
        if receipt:
            fake_source.receipts[("base", tx_hash)] = receipt_factory(
                tx_hash=tx_hash,
                block_number=block,
                logs=[
                    transfer_log(tokens.aero, wallet, tokens.pool, 10 * 10**18, 0),
                    transfer_log(tokens.usdc, tokens.pool, wallet, 5_000_000, 1),
                ],
            )

    return _add


@pytest.fixture
def service(
    fake_source: Any,
    sync_state_repo: Any,
    seen_trade_repo: Any,
    settings: Settings,
) -> SpotSyncService:
    return SpotSyncService(RpcSpotProvider(fake_source), sync_state_repo, seen_trade_repo, settings)


def _trade(block: int, now_utc: datetime) -> Trade:
    return Trade(
        tx_hash=f"0x{block}",
        chain="base",
        block_number=block,
        timestamp=now_utc,
        from_token="0xa",
        to_token="0xb",
        from_amount=Decimal(1),
        to_amount=Decimal(1),
    )


def test_incremental_start_covers_retry_window() -> None:
    assert incremental_start_block(1000, 10) == 991
    assert incremental_start_block(1000, 1) == 1000
    assert incremental_start_block(3, 10) == 0


def test_safe_highest_block(now_utc: datetime) -> None:
    trades = [_trade(1010, now_utc), _trade(1020, now_utc)]

    assert safe_highest_block(trades, 5000, None) == 1020
    assert safe_highest_block(trades, 5000, 1005) == 1004
    assert safe_highest_block([], 5000, None) == 5000
    assert safe_highest_block([], 5000, 0) == 0


async def test_first_sync_without_period_starts_at_chain_tip(
    service: SpotSyncService,
    fake_source: Any,
    sync_state_repo: Any,
    wallet: str,
    add_swap: Callable[..., None],
) -> None:
    fake_source.block_numbers["base"] = 1000
    add_swap("0xa", 1000)

    result = await service.sync_wallet(wallet, ["base"])

    assert result.success
    assert [t.tx_hash for t in result.new_trades] == ["0xa"]
    assert fake_source.transfer_calls[0][2] == 1000
    state = await sync_state_repo.get(wallet, "base")
    assert state is not None and state.last_scanned_block == 1000


async def test_later_sync_rescans_retry_window_and_dedupes(
    service: SpotSyncService,
    fake_source: Any,
    sync_state_repo: Any,
    wallet: str,
    add_swap: Callable[..., None],
) -> None:
    fake_source.block_numbers["base"] = 1000
    add_swap("0xa", 1000)
    await service.sync_wallet(wallet, ["base"])
    fake_source.transfer_calls.clear()

    second = await service.sync_wallet(wallet, ["base"])

    assert second.new_trades == ()
    assert fake_source.transfer_calls[0][2] == 991


async def test_cursor_stays_below_unresolved_transaction(
    service: SpotSyncService,
    fake_source: Any,
    sync_state_repo: Any,
    wallet: str,
    add_swap: Callable[..., None],
) -> None:
    await sync_state_repo.upsert(wallet, "base", 990)
    fake_source.block_numbers["base"] = 1100
    add_swap("0xa", 1000)
    add_swap("0xb", 1005, receipt=False)
    add_swap("0xc", 1010)

    result = await service.sync_wallet(wallet, ["base"])

    assert [t.tx_hash for t in result.new_trades] == ["0xa", "0xc"]
    assert result.chains[0].lowest_skipped_block == 1005
    state = await sync_state_repo.get(wallet, "base")
    assert state.last_scanned_block == 1004


async def test_sync_without_trades_advances_to_tip(
    service: SpotSyncService,
    fake_source: Any,
    sync_state_repo: Any,
    wallet: str,
) -> None:
    await sync_state_repo.upsert(wallet, "base", 500)
    fake_source.block_numbers["base"] = 800

    result = await service.sync_wallet(wallet, ["base"])

    assert result.chains[0].synced_to_block == 800


async def test_failed_chain_keeps_cursor_and_reports_error(
    service: SpotSyncService,
    fake_source: Any,
    sync_state_repo: Any,
    wallet: str,
) -> None:
    await sync_state_repo.upsert(wallet, "base", 500)
    fake_source.block_numbers.update({"base": 800, "eth": 800})
    fake_source.transfer_errors["base"] = ChainDataSourceError("upstream down")

    result = await service.sync_wallet(wallet, ["base", "eth"])

    assert not result.success
    assert set(result.errors) == {"base"}
    assert (await sync_state_repo.get(wallet, "base")).last_scanned_block == 500
    assert (await sync_state_repo.get(wallet, "eth")).last_scanned_block == 800


async def test_transfers_after_period_start_are_violations(
    service: SpotSyncService,
    fake_source: Any,
    wallet: str,
    counterparty: str,
    now_utc: datetime,
    raw_transfer_factory: Callable[..., Any],
) -> None:
    fake_source.block_numbers["base"] = 1_000_000
    fake_source.pages["base"] = [
        [
            raw_transfer_factory(tx_hash="0xin", timestamp=now_utc, from_address=counterparty, to_address=wallet),
            raw_transfer_factory(
                tx_hash="0xold",
                timestamp=now_utc - timedelta(hours=2),
                from_address=wallet,
                to_address=counterparty,
            ),
        ]
    ]

    result = await service.sync_wallet(wallet, ["base"], period_start=now_utc - timedelta(hours=1))

    assert {t.tx_hash for t in result.transfers} == {"0xin", "0xold"}
    assert [t.tx_hash for t in result.transfer_violations] == ["0xin"]


async def test_no_chains_returns_empty_result(service: SpotSyncService, wallet: str) -> None:
    result = await service.sync_wallet(wallet, [])

    assert result.success
    assert result.chains == ()
