"""Incremental wallet sync: per-chain cursor, dedupe and polling."""

from spot_swap_sync.services.sync.spot_sync_service import (
    ChainSyncResult,
    SpotSyncService,
    WalletSyncResult,
    incremental_start_block,
    safe_highest_block,
)
from spot_swap_sync.services.sync.sync_runner import SyncRunner

__all__ = [
    "ChainSyncResult",
    "SpotSyncService",
    "SyncRunner",
    "WalletSyncResult",
    "incremental_start_block",
    "safe_highest_block",
]
