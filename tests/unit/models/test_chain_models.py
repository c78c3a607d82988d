"""Unit tests for the per-chain constant table."""

from __future__ import annotations

from types import MappingProxyType

from spot_swap_sync.models.chain import (
    DEFAULT_CHAIN_CONFIGS,
    NATIVE_TOKEN_ADDRESS,
    ChainConfig,
    get_chain_config,
    is_native_token,
    token_address_for_price_lookup,
)


def test_zero_address_maps_to_wrapped_native_per_chain() -> None:
    assert token_address_for_price_lookup(NATIVE_TOKEN_ADDRESS, "eth") == (
        "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"
    )
    assert token_address_for_price_lookup(NATIVE_TOKEN_ADDRESS, "polygon") == (
        "0x0d500b1d8e8ef31e21c99d1db9a6444d3adf1270"
    )
    assert token_address_for_price_lookup("0xabc", "eth") == "0xabc"


def test_zero_address_is_kept_without_wrapped_token() -> None:
    assert token_address_for_price_lookup(NATIVE_TOKEN_ADDRESS, "svm") == NATIVE_TOKEN_ADDRESS
    assert token_address_for_price_lookup(NATIVE_TOKEN_ADDRESS, "unknown-chain") == NATIVE_TOKEN_ADDRESS


def test_injected_table_overrides_defaults() -> None:
    configs = MappingProxyType({"eth": ChainConfig(5, "0xwrapped")})

    assert token_address_for_price_lookup(NATIVE_TOKEN_ADDRESS, "eth", configs) == "0xwrapped"
    assert get_chain_config("eth", configs).seconds_per_block == 5


def test_defaults() -> None:
    assert get_chain_config("unknown-chain").seconds_per_block == 12
    assert get_chain_config("svm", DEFAULT_CHAIN_CONFIGS).is_evm is False
    assert is_native_token(" 0x" + "0" * 40 + " ")
