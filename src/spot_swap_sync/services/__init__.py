# -*- coding: utf-8 -*-
"""Application services."""

from spot_swap_sync.services.classification import TransferClassifier, transfers_after
from spot_swap_sync.services.cursor import BlockCursorResolver
from spot_swap_sync.services.grouping import group_transfers_by_transaction
from spot_swap_sync.services.swap_detection import (
    GasEnricher,
    ProtocolFilterService,
    ReceiptSwapResolver,
    TransferPatternResolver,
)
from spot_swap_sync.services.spot_provider import (
    ISpotDataProvider,
    RpcSpotProvider,
    SkipTracker,
    SpotEngineConfig,
    TradesResult,
)
from spot_swap_sync.services.sync import SpotSyncService, SyncRunner, WalletSyncResult

__all__ = [
    "BlockCursorResolver",
    "GasEnricher",
    "ISpotDataProvider",
    "ProtocolFilterService",
    "ReceiptSwapResolver",
    "RpcSpotProvider",
    "SkipTracker",
    "SpotEngineConfig",
    "SpotSyncService",
    "SyncRunner",
    "TradesResult",
    "TransferClassifier",
    "TransferPatternResolver",
    "WalletSyncResult",
    "group_transfers_by_transaction",
    "transfers_after",
]
