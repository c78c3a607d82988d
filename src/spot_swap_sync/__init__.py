"""Spot swap sync: swap detection and transfer classification for on-chain wallets."""

from spot_swap_sync.clients import AlchemyRpcClient, AsyncHttpClient
from spot_swap_sync.config import get_settings
from spot_swap_sync.DI import Container
from spot_swap_sync.services import RpcSpotProvider, SpotSyncService

__version__ = "0.0.1"
__all__ = [
    "AlchemyRpcClient",
    "AsyncHttpClient",
    "Container",
    "RpcSpotProvider",
    "SpotSyncService",
    "get_settings",
]
