# -*- coding: utf-8 -*-
"""Domain models."""

from spot_swap_sync.models.chain import (
    DEFAULT_CHAIN_CONFIGS,
    NATIVE_TOKEN_ADDRESS,
    ChainConfig,
    SpecificChain,
    get_chain_config,
    is_native_token,
    token_address_for_price_lookup,
)
from spot_swap_sync.models.protocol_filter import ProtocolFilter
from spot_swap_sync.models.raw_transfer import RawTransfer, TransferCategory
from spot_swap_sync.models.receipt import ReceiptLog, TransactionInfo, TransactionReceipt
from spot_swap_sync.models.seen_trade import SeenTrade
from spot_swap_sync.models.sync_state import SyncState
from spot_swap_sync.models.trade import UNKNOWN_PROTOCOL, DetectedSwap, Trade
from spot_swap_sync.models.transfer import Transfer, TransferType
from spot_swap_sync.models.transfer_group import TransferGroup

__all__ = [
    "DEFAULT_CHAIN_CONFIGS",
    "NATIVE_TOKEN_ADDRESS",
    "UNKNOWN_PROTOCOL",
    "ChainConfig",
    "DetectedSwap",
    "ProtocolFilter",
    "RawTransfer",
    "ReceiptLog",
    "SeenTrade",
    "SpecificChain",
    "SyncState",
    "Trade",
    "TransactionInfo",
    "TransactionReceipt",
    "Transfer",
    "TransferCategory",
    "TransferGroup",
    "TransferType",
    "get_chain_config",
    "is_native_token",
    "token_address_for_price_lookup",
]
