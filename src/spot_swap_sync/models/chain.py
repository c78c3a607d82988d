"""Chain identifiers and static per-chain constants.

The tables here are plain immutable data. Components receive them through
SpotEngineConfig rather than importing them as globals, so tests can inject
their own values.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal

SpecificChain = Literal[
    "eth",
    "base",
    "arbitrum",
    "optimism",
    "polygon",
    "avalanche",
    "bsc",
    "linea",
    "zksync",
    "scroll",
    "mantle",
    "svm",
]

NATIVE_TOKEN_ADDRESS = "0x0000000000000000000000000000000000000000"
"""Token identifier used for native-asset legs (ETH, MATIC, ...)."""

DEFAULT_SECONDS_PER_BLOCK = 12.0


@dataclass(frozen=True, slots=True)
class ChainConfig:
    """Static facts about one chain."""

    seconds_per_block: float
    """Approximate block time, used to turn a date into a starting block."""
    wrapped_native_address: str | None
    """Wrapped native token used for price lookups of the zero address."""
    native_symbol: str = "ETH"
    is_evm: bool = True


DEFAULT_CHAIN_CONFIGS: Mapping[str, ChainConfig] = MappingProxyType(
    {
        "eth": ChainConfig(12, "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"),
        "base": ChainConfig(2, "0x4200000000000000000000000000000000000006"),
        "arbitrum": ChainConfig(0.25, "0x82af49447d8a07e3bd95bd0d56f35241523fbab1"),
        "optimism": ChainConfig(2, "0x4200000000000000000000000000000000000006"),
        "polygon": ChainConfig(2, "0x0d500b1d8e8ef31e21c99d1db9a6444d3adf1270", "MATIC"),
        "avalanche": ChainConfig(2, "0xb31f66aa3c1e785363f0875a1b74e27b85fd66c7", "AVAX"),
        "bsc": ChainConfig(3, "0xbb4cdb9cbd36b01bd1cbaebf2de08d9173bc095c", "BNB"),
        "linea": ChainConfig(3, "0xe5d7c2a44ffddf6b295a15c148167daaaf5cf34f"),
        "zksync": ChainConfig(1, "0x5aea5775959fbc2557cc8789bc1bf90a239d9a91"),
        "scroll": ChainConfig(3, "0x5300000000000000000000000000000000000004"),
        "mantle": ChainConfig(3, "0x78c1b0c915c4faa5fffa6cabf0219da63d7f4cb8", "MNT"),
        "svm": ChainConfig(0.4, None, "SOL", is_evm=False),
    }
)


def get_chain_config(
    chain: str,
    configs: Mapping[str, ChainConfig] = DEFAULT_CHAIN_CONFIGS,
) -> ChainConfig:
    """Return the config for chain; unknown chains get Ethereum-like defaults."""
    config = configs.get(chain)
    if config is None:
        return ChainConfig(DEFAULT_SECONDS_PER_BLOCK, None)
    return config


def is_native_token(token_address: str) -> bool:
    """Return True if token_address is the native-asset zero address."""
    return token_address.strip().lower() == NATIVE_TOKEN_ADDRESS


def token_address_for_price_lookup(
    token_address: str,
    chain: str,
    configs: Mapping[str, ChainConfig] = DEFAULT_CHAIN_CONFIGS,
) -> str:
    """Map the zero address to the chain's wrapped native token; other tokens pass through.

    When no wrapped token is configured the zero address is returned unchanged.
    """
    if is_native_token(token_address):
        wrapped = get_chain_config(chain, configs).wrapped_native_address
        if wrapped:
            return wrapped
    return token_address
