# -*- coding: utf-8 -*-
"""Unit tests for TransferPatternResolver (swap detection from transfer legs)."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from itertools import permutations
from types import SimpleNamespace
from typing import Any

from spot_swap_sync.services.grouping import group_transfers_by_transaction
from spot_swap_sync.services.swap_detection.fallback_resolver import TransferPatternResolver


def test_native_outbound_and_token_inbound_maps_native_to_zero_address(
    wallet: str,
    tokens: SimpleNamespace,
    raw_transfer_factory: Callable[..., Any],
) -> None:
    legs = [
        raw_transfer_factory(token=None, amount="1.0", from_address=wallet, to_address=tokens.router),
        raw_transfer_factory(token=tokens.usdc, amount="2000", from_address=tokens.pool, to_address=wallet),
    ]

    swap = TransferPatternResolver().resolve(group_transfers_by_transaction(legs, wallet)[0])

    assert swap is not None
    assert swap.from_token == tokens.native
    assert swap.to_token == tokens.usdc
    assert swap.from_amount == Decimal("1.0")
    assert swap.to_amount == Decimal("2000")


def test_token_outbound_and_native_inbound(
    wallet: str,
    tokens: SimpleNamespace,
    raw_transfer_factory: Callable[..., Any],
) -> None:
    legs = [
        raw_transfer_factory(token=tokens.usdc, amount="100", from_address=wallet, to_address=tokens.pool),
        raw_transfer_factory(token=None, amount="0.05", from_address=tokens.router, to_address=wallet),
    ]

    swap = TransferPatternResolver().resolve(group_transfers_by_transaction(legs, wallet)[0])

    assert swap is not None
    assert (swap.from_token, swap.to_token) == (tokens.usdc, tokens.native)


def test_inbound_legs_of_one_token_are_summed_and_refunds_ignored(
    wallet: str,
    tokens: SimpleNamespace,
    raw_transfer_factory: Callable[..., Any],
) -> None:
    legs = [
        raw_transfer_factory(token=None, amount="1.0", from_address=wallet, to_address=tokens.router),
        raw_transfer_factory(token=None, amount="0.01", from_address=tokens.router, to_address=wallet),
        raw_transfer_factory(token=tokens.usdc, amount="1500", from_address=tokens.pool, to_address=wallet),
        raw_transfer_factory(token=tokens.usdc, amount="500", from_address=tokens.router, to_address=wallet),
    ]

    swap = TransferPatternResolver().resolve(group_transfers_by_transaction(legs, wallet)[0])

    assert swap is not None
    assert swap.to_token == tokens.usdc
    assert swap.to_amount == Decimal("2000")


def test_several_outbound_legs_are_not_resolved(
    wallet: str,
    tokens: SimpleNamespace,
    raw_transfer_factory: Callable[..., Any],
) -> None:
    legs = [
        raw_transfer_factory(token=None, amount="1.0", from_address=wallet, to_address=tokens.router),
        raw_transfer_factory(token=tokens.aero, amount="3", from_address=wallet, to_address=tokens.pool),
        raw_transfer_factory(token=tokens.usdc, amount="2000", from_address=tokens.pool, to_address=wallet),
    ]

    assert TransferPatternResolver().resolve(group_transfers_by_transaction(legs, wallet)[0]) is None


def test_mixed_inbound_tokens_are_not_resolved(
    wallet: str,
    tokens: SimpleNamespace,
    raw_transfer_factory: Callable[..., Any],
) -> None:
    legs = [
        raw_transfer_factory(token=None, amount="1.0", from_address=wallet, to_address=tokens.router),
        raw_transfer_factory(token=tokens.usdc, amount="2000", from_address=tokens.pool, to_address=wallet),
        raw_transfer_factory(token=tokens.aero, amount="7", from_address=tokens.pool, to_address=wallet),
    ]

    assert TransferPatternResolver().resolve(group_transfers_by_transaction(legs, wallet)[0]) is None


def test_zero_outbound_amount_is_not_a_swap(
    wallet: str,
    tokens: SimpleNamespace,
    raw_transfer_factory: Callable[..., Any],
) -> None:
    legs = [
        raw_transfer_factory(token=None, amount="0", from_address=wallet, to_address=tokens.router),
        raw_transfer_factory(token=tokens.usdc, amount="10", from_address=tokens.pool, to_address=wallet),
    ]

    assert TransferPatternResolver().resolve(group_transfers_by_transaction(legs, wallet)[0]) is None


def test_only_refund_inbound_is_not_a_swap(
    wallet: str,
    tokens: SimpleNamespace,
    raw_transfer_factory: Callable[..., Any],
) -> None:
    legs = [
        raw_transfer_factory(token=None, amount="1.0", from_address=wallet, to_address=tokens.router),
        raw_transfer_factory(token=None, amount="0.2", from_address=tokens.router, to_address=wallet),
    ]

    assert TransferPatternResolver().resolve(group_transfers_by_transaction(legs, wallet)[0]) is None


def test_leg_order_does_not_change_the_result(
    wallet: str,
    tokens: SimpleNamespace,
    raw_transfer_factory: Callable[..., Any],
) -> None:
    legs = [
        raw_transfer_factory(token=None, amount="1.0", from_address=wallet, to_address=tokens.router),
        raw_transfer_factory(token=None, amount="0.01", from_address=tokens.router, to_address=wallet),
        raw_transfer_factory(token=tokens.usdc, amount="1500.125", from_address=tokens.pool, to_address=wallet),
        raw_transfer_factory(token=tokens.usdc, amount="499.875", from_address=tokens.router, to_address=wallet),
    ]
    resolver = TransferPatternResolver()

    swaps = {
        resolver.resolve(group_transfers_by_transaction(list(order), wallet)[0])
        for order in permutations(legs)
    }

    assert len(swaps) == 1
    (swap,) = swaps
    assert swap is not None
    assert (swap.from_token, swap.to_token) == (tokens.native, tokens.usdc)
    assert (swap.from_amount, swap.to_amount) == (Decimal("1.0"), Decimal("2000.000"))
