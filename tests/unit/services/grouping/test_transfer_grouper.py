"""Unit tests for group_transfers_by_transaction."""

from __future__ import annotations

from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

from spot_swap_sync.services.grouping import group_transfers_by_transaction


def test_groups_by_hash_case_insensitively_in_first_seen_order(
    wallet: str,
    tokens: SimpleNamespace,
    raw_transfer_factory: Callable[..., Any],
) -> None:
    legs = [
        raw_transfer_factory(tx_hash="0xBB", from_address=wallet, to_address=tokens.pool),
        raw_transfer_factory(tx_hash="0xaa", from_address=tokens.pool, to_address=wallet),
        raw_transfer_factory(tx_hash="0xbb", from_address=tokens.pool, to_address=wallet.upper().replace("0X", "0x")),
    ]

    groups = group_transfers_by_transaction(legs, wallet)

    assert [g.tx_hash for g in groups] == ["0xbb", "0xaa"]
    assert groups[0].is_swap_candidate
    assert groups[1].is_deposit_candidate


def test_legs_not_touching_wallet_are_dropped(
    wallet: str,
    counterparty: str,
    tokens: SimpleNamespace,
    raw_transfer_factory: Callable[..., Any],
) -> None:
    legs = [
        raw_transfer_factory(from_address=wallet, to_address=tokens.pool),
        raw_transfer_factory(from_address=tokens.pool, to_address=counterparty),
    ]

    groups = group_transfers_by_transaction(legs, wallet)

    assert len(groups) == 1
    assert groups[0].is_withdrawal_candidate
    assert len(groups[0].legs) == 1


def test_hashless_legs_each_form_their_own_group(
    wallet: str,
    counterparty: str,
    raw_transfer_factory: Callable[..., Any],
) -> None:
    legs = [
        raw_transfer_factory(tx_hash="", from_address=counterparty, to_address=wallet),
        raw_transfer_factory(tx_hash="", from_address=wallet, to_address=counterparty),
    ]

    groups = group_transfers_by_transaction(legs, wallet)

    assert len(groups) == 2
    assert all(g.tx_hash == "" for g in groups)
    assert not any(g.is_swap_candidate for g in groups)


def test_self_transfer_is_counted_once(wallet: str, raw_transfer_factory: Callable[..., Any]) -> None:
    leg = raw_transfer_factory(from_address=wallet, to_address=wallet)

    group = group_transfers_by_transaction([leg], wallet)[0]

    assert group.outbound == group.inbound == (leg,)
    assert group.legs == (leg,)
