# -*- coding: utf-8 -*-
"""Utility modules."""

from spot_swap_sync.utils.dedupe import trade_key
from spot_swap_sync.utils.evm import (
    ERC20_TRANSFER_TOPIC,
    hex_to_int,
    to_hex_block,
    topic_to_address,
)
from spot_swap_sync.utils.validation import (
    is_hex_address,
    is_tx_hash,
    mask_address,
    normalize_address,
)

__all__ = [
    "ERC20_TRANSFER_TOPIC",
    "hex_to_int",
    "is_hex_address",
    "is_tx_hash",
    "mask_address",
    "normalize_address",
    "to_hex_block",
    "topic_to_address",
    "trade_key",
]
