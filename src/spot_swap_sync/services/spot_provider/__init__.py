# -*- coding: utf-8 -*-
"""Spot data provider: the swap detection and transfer classification engine."""

from spot_swap_sync.services.spot_provider.interfaces import (
    ISpotDataProvider,
    SpotEngineConfig,
    TradesResult,
)
from spot_swap_sync.services.spot_provider.rpc_spot_provider import RpcSpotProvider
from spot_swap_sync.services.spot_provider.skip_tracker import MAX_SKIP_AGE_BLOCKS, SkipTracker

__all__ = [
    "ISpotDataProvider",
    "MAX_SKIP_AGE_BLOCKS",
    "RpcSpotProvider",
    "SkipTracker",
    "SpotEngineConfig",
    "TradesResult",
]
