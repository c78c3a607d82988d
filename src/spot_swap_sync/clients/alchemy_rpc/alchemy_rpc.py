# -*- coding: utf-8 -*-
"""Alchemy JSON-RPC client: asset transfers, receipts, block height and balances."""

from __future__ import annotations

import itertools
import structlog
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, Callable, Optional, cast
from cachetools import LRUCache
from structlog.contextvars import bound_contextvars

from spot_swap_sync.clients.alchemy_rpc.schema import (
    AssetTransferSchema,
    AssetTransfersResultSchema,
    JsonRpcResponseSchema,
)
from spot_swap_sync.clients.interfaces import AssetTransfersPage, IChainDataSource
from spot_swap_sync.exceptions import (
    ChainDataSourceError,
    MissingRequiredConfigError,
    UnsupportedChainOperationError,
)
from spot_swap_sync.models.chain import DEFAULT_CHAIN_CONFIGS, ChainConfig, get_chain_config
from spot_swap_sync.models.raw_transfer import RawTransfer, TransferCategory
from spot_swap_sync.models.receipt import TransactionInfo, TransactionReceipt
from spot_swap_sync.utils.evm import hex_to_int, to_hex_block
from spot_swap_sync.utils.validation import mask_address, normalize_address

if TYPE_CHECKING:
    from spot_swap_sync.clients.http import AsyncHttpClient
    from spot_swap_sync.config import Settings

ALCHEMY_NETWORKS: Mapping[str, str] = {
    "eth": "eth-mainnet",
    "base": "base-mainnet",
    "arbitrum": "arb-mainnet",
    "optimism": "opt-mainnet",
    "polygon": "polygon-mainnet",
    "avalanche": "avax-mainnet",
    "bsc": "bnb-mainnet",
    "linea": "linea-mainnet",
    "zksync": "zksync-mainnet",
    "scroll": "scroll-mainnet",
    "mantle": "mantle-mainnet",
}

# Alchemy only indexes internal (trace) transfers on these networks.
INTERNAL_TRANSFER_CHAINS = frozenset({"eth", "polygon"})

MAX_TRANSFERS_PER_REQUEST = 1000
PAGE_KEY_SEPARATOR = "|"

_CATEGORIES: Mapping[str, TransferCategory] = {
    "external": TransferCategory.EXTERNAL,
    "internal": TransferCategory.INTERNAL,
    "erc20": TransferCategory.ERC20,
}


def split_page_key(page_key: str | None) -> tuple[str | None, str | None]:
    """Split a composite key into (outbound, inbound) keys. Empty halves are exhausted."""
    if page_key is None:
        return None, None
    out_key, _, in_key = page_key.partition(PAGE_KEY_SEPARATOR)
    return out_key or None, in_key or None


def join_page_key(out_key: str | None, in_key: str | None) -> str | None:
    """Join per-direction keys; None once both directions are exhausted."""
    if not out_key and not in_key:
        return None
    return f"{out_key or ''}{PAGE_KEY_SEPARATOR}{in_key or ''}"


def _parse_amount(item: AssetTransferSchema) -> Decimal | None:
    raw = item.get("rawContract") or {}
    raw_value = raw.get("value")
    raw_decimals = raw.get("decimal")
    if raw_value and raw_decimals:
        return Decimal(hex_to_int(raw_value)).scaleb(-hex_to_int(raw_decimals))
    value = item.get("value")
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


def _parse_timestamp(item: AssetTransferSchema) -> datetime | None:
    raw = (item.get("metadata") or {}).get("blockTimestamp")
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None


def parse_asset_transfer(item: AssetTransferSchema, chain: str) -> RawTransfer | None:
    """Map one alchemy_getAssetTransfers item to a RawTransfer.

    Returns None for categories this engine does not handle (NFTs) and for items
    missing a timestamp or amount.

    Raises:
        ValueError: If an erc20 item has no contract address.
    """
    category = _CATEGORIES.get(str(item.get("category") or "").lower())
    if category is None:
        return None
    timestamp = _parse_timestamp(item)
    amount = _parse_amount(item)
    if timestamp is None or amount is None:
        return None
    raw = item.get("rawContract") or {}
    contract = raw.get("address") if category is TransferCategory.ERC20 else None
    return RawTransfer(
        tx_hash=normalize_address(item.get("hash")),
        chain=chain,
        block_number=hex_to_int(item.get("blockNum")),
        timestamp=timestamp,
        from_address=normalize_address(cast(dict[str, Any], item).get("from")),
        to_address=normalize_address(item.get("to")),
        asset=str(item.get("asset") or ""),
        contract_address=contract.lower() if contract else None,
        amount=amount,
        category=category,
    )


class AlchemyRpcClient(IChainDataSource):
    """IChainDataSource over Alchemy's per-network JSON-RPC endpoints."""

    def __init__(
        self,
        http_client: AsyncHttpClient,
        settings: Settings,
        *,
        chain_configs: Mapping[str, ChainConfig] = DEFAULT_CHAIN_CONFIGS,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: HTTP client for POST requests (JSON-RPC).
            settings: Configuration (uses settings.api.alchemy_* and receipt_cache_size).
            chain_configs: Per-chain constants (non-EVM chains are refused).
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._chain_configs = chain_configs
        self._receipts: LRUCache[tuple[str, str], TransactionReceipt] = LRUCache(
            maxsize=max(1, settings.api.receipt_cache_size)
        )
        self._request_ids = itertools.count(1)
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def get_name(self) -> str:
        return "Alchemy"

    def _network(self, chain: str, operation: str) -> str:
        if not get_chain_config(chain, self._chain_configs).is_evm:
            raise UnsupportedChainOperationError(operation, chain)
        network = ALCHEMY_NETWORKS.get(chain)
        if network is None:
            raise UnsupportedChainOperationError(
                operation, chain, "no Alchemy network is configured for this chain"
            )
        return network

    def _urls(self, network: str) -> tuple[str, str]:
        """Return (request URL, URL safe for logs)."""
        api_key = self._settings.api.alchemy_api_key
        if not api_key:
            raise MissingRequiredConfigError("API__ALCHEMY_API_KEY is required")
        template = self._settings.api.alchemy_url_template
        return (
            template.format(network=network, api_key=api_key),
            template.format(network=network, api_key="***"),
        )

    async def _call(self, chain: str, operation: str, method: str, params: list[Any]) -> Any:
        """Send one JSON-RPC request and return its result.

        Raises:
            UnsupportedChainOperationError: If chain has no EVM endpoint.
            ChainDataSourceError: On transport failure or a JSON-RPC error object.
        """
        url, log_url = self._urls(self._network(chain, operation))
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._request_ids),
            "method": method,
            "params": params,
        }
        response = await self._http.post(url, json=payload, log_url=log_url)
        if not isinstance(response, dict):
            raise ChainDataSourceError(
                f"Unexpected RPC response type for {method}: {type(response).__name__}",
                url=log_url,
            )
        body = cast(JsonRpcResponseSchema, response)
        error = body.get("error")
        if error:
            message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            raise ChainDataSourceError(f"RPC error ({method}): {message}", url=log_url)
        return body.get("result")

    async def _transfers_direction(
        self,
        chain: str,
        direction: str,
        address: str,
        from_block: int,
        to_block: int | None,
        page_key: str | None,
    ) -> AssetTransfersResultSchema:
        categories = ["external", "erc20"]
        if chain in INTERNAL_TRANSFER_CHAINS:
            categories.append("internal")
        params: dict[str, Any] = {
            "fromBlock": to_hex_block(from_block),
            "toBlock": to_hex_block(to_block) if to_block is not None else "latest",
            direction: address,
            "category": categories,
            "withMetadata": True,
            "excludeZeroValue": False,
            "maxCount": hex(MAX_TRANSFERS_PER_REQUEST),
            "order": "asc",
        }
        if page_key:
            params["pageKey"] = page_key
        result = await self._call(chain, "get_asset_transfers", "alchemy_getAssetTransfers", [params])
        return cast(AssetTransfersResultSchema, result or {})

    async def get_asset_transfers(
        self,
        address: str,
        chain: str,
        from_block: int,
        to_block: int | None = None,
        page_key: str | None = None,
    ) -> AssetTransfersPage:
        """Return one page of outbound and inbound transfers for address.

        Outbound and inbound queries paginate independently; their cursors travel
        together in one composite page key. A direction whose cursor is exhausted
        is not queried again.
        """
        address = normalize_address(address)
        out_key, in_key = split_page_key(page_key)
        first_page = page_key is None
        with bound_contextvars(chain=chain, wallet_masked=mask_address(address)):
            results: list[tuple[str, AssetTransfersResultSchema]] = []
            if first_page or out_key:
                results.append(
                    (
                        "out",
                        await self._transfers_direction(
                            chain, "fromAddress", address, from_block, to_block, out_key
                        ),
                    )
                )
            if first_page or in_key:
                results.append(
                    (
                        "in",
                        await self._transfers_direction(
                            chain, "toAddress", address, from_block, to_block, in_key
                        ),
                    )
                )

            next_keys: dict[str, str | None] = {"out": None, "in": None}
            transfers: list[RawTransfer] = []
            for direction, result in results:
                next_keys[direction] = result.get("pageKey") or None
                for item in result.get("transfers") or []:
                    try:
                        transfer = parse_asset_transfer(item, chain)
                    except ValueError as e:
                        self._logger.warning(
                            "asset_transfer_malformed",
                            tx_hash=item.get("hash"),
                            error_message=str(e),
                        )
                        continue
                    if transfer is not None:
                        transfers.append(transfer)

            next_page_key = join_page_key(next_keys["out"], next_keys["in"])
            self._logger.debug(
                "asset_transfers_fetched",
                from_block=from_block,
                to_block=to_block,
                transfer_count=len(transfers),
                has_next_page=next_page_key is not None,
            )
            return AssetTransfersPage(transfers=tuple(transfers), page_key=next_page_key)

    async def get_transaction_receipt(self, tx_hash: str, chain: str) -> TransactionReceipt | None:
        """Return the receipt for tx_hash, or None if it is not mined yet.

        Mined receipts are cached; a None result is never cached.
        """
        cache_key = (chain, tx_hash.lower())
        cached = self._receipts.get(cache_key)
        if cached is not None:
            return cached
        result = await self._call(
            chain, "get_transaction_receipt", "eth_getTransactionReceipt", [tx_hash]
        )
        if not result:
            return None
        receipt = TransactionReceipt.from_response(result)
        self._receipts[cache_key] = receipt
        return receipt

    async def get_transaction(self, tx_hash: str, chain: str) -> TransactionInfo | None:
        result = await self._call(
            chain, "get_transaction", "eth_getTransactionByHash", [tx_hash]
        )
        if not result:
            return None
        return TransactionInfo.from_response(result)

    async def get_block_number(self, chain: str) -> int:
        result = await self._call(chain, "get_block_number", "eth_blockNumber", [])
        if result is None:
            raise ChainDataSourceError(f"eth_blockNumber returned no result for {chain}")
        return hex_to_int(result)

    async def get_balance(self, address: str, chain: str) -> str:
        """Return the native balance in wei as a base-10 string.

        Raises:
            UnsupportedChainOperationError: If chain is not an EVM chain.
        """
        result = await self._call(
            chain, "get_balance", "eth_getBalance", [normalize_address(address), "latest"]
        )
        return str(hex_to_int(result))

    async def is_healthy(self) -> bool:
        """Return True if the first configured chain answers eth_blockNumber."""
        if not self._settings.api.alchemy_api_key:
            return False
        chains = [c for c in self._settings.sync.chains if c in ALCHEMY_NETWORKS] or ["eth"]
        try:
            await self.get_block_number(chains[0])
        except (ChainDataSourceError, UnsupportedChainOperationError) as e:
            self._logger.warning(
                "alchemy_health_check_failed",
                chain=chains[0],
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False
        return True
