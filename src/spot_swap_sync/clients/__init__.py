# -*- coding: utf-8 -*-
"""Clients for chain data (HTTP transport, JSON-RPC data sources)."""

from spot_swap_sync.clients.alchemy_rpc import AlchemyRpcClient
from spot_swap_sync.clients.http import AsyncHttpClient
from spot_swap_sync.clients.interfaces import AssetTransfersPage, IChainDataSource

__all__ = [
    "AlchemyRpcClient",
    "AssetTransfersPage",
    "AsyncHttpClient",
    "IChainDataSource",
]
