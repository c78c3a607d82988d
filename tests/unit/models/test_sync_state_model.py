# -*- coding: utf-8 -*-
"""Unit tests for SyncState, SeenTrade and ProtocolFilter models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from spot_swap_sync.models.protocol_filter import ProtocolFilter
from spot_swap_sync.models.seen_trade import SeenTrade
from spot_swap_sync.models.sync_state import SyncState
from spot_swap_sync.models.trade import Trade


def test_sync_state_create_normalizes_and_validates() -> None:
    state = SyncState.create(" 0xABC ", "BASE", 10)

    assert (state.wallet, state.chain, state.last_scanned_block) == ("0xabc", "base", 10)
    with pytest.raises(ValueError):
        SyncState.create("0xabc", "base", -1)
    with pytest.raises(ValueError):
        SyncState.create("", "base", 1)


def test_sync_state_never_moves_back() -> None:
    state = SyncState.create("0xabc", "base", 100)

    assert state.advanced_to(50).last_scanned_block == 100
    assert state.advanced_to(150).last_scanned_block == 150


def test_seen_trade_create() -> None:
    seen = SeenTrade.create("0xABC", " TX:0xAB ")

    assert (seen.wallet, seen.trade_key) == ("0xabc", "tx:0xab")
    assert (seen.chain, seen.block_number) == (None, None)
    assert seen.seen_at.tzinfo is not None
    with pytest.raises(ValueError):
        SeenTrade.create("0xabc", "  ")


def test_protocol_filter_create_normalizes() -> None:
    f = ProtocolFilter.create(
        protocol=" Aerodrome ",
        chain="Base",
        router_address="0xROUTER",
        swap_event_signature="0xSIG",
        factory_address="0xFACTORY",
    )

    assert (f.protocol, f.chain, f.router_address, f.swap_event_signature, f.factory_address) == (
        "Aerodrome",
        "base",
        "0xrouter",
        "0xsig",
        "0xfactory",
    )
    with pytest.raises(ValueError):
        ProtocolFilter.create(protocol="", chain="base", router_address="0x1", swap_event_signature="0x2")


def test_seen_trade_for_trade_keys_on_the_transaction_hash(now_utc: datetime) -> None:
    trade = Trade(
        tx_hash="0xABC",
        chain="base",
        block_number=42,
        timestamp=now_utc,
        from_token="0xa",
        to_token="0xb",
        from_amount=Decimal(1),
        to_amount=Decimal(2),
    )

    seen = SeenTrade.for_trade("0xWALLET", trade, seen_at=now_utc)

    assert seen == SeenTrade("0xwallet", "tx:0xabc", now_utc, "base", 42)
