"""Alchemy JSON-RPC client."""

from spot_swap_sync.clients.alchemy_rpc.alchemy_rpc import (
    ALCHEMY_NETWORKS,
    AlchemyRpcClient,
    join_page_key,
    parse_asset_transfer,
    split_page_key,
)

__all__ = [
    "ALCHEMY_NETWORKS",
    "AlchemyRpcClient",
    "join_page_key",
    "parse_asset_transfer",
    "split_page_key",
]
