"""Alchemy JSON-RPC response types. Keys match the wire format (camelCase)."""

from __future__ import annotations

from typing import Any, Literal, TypedDict


class RawContractSchema(TypedDict, total=False):
    """rawContract of an alchemy_getAssetTransfers item."""

    value: str | None
    """Raw amount as a hex quantity."""
    address: str | None
    decimal: str | None
    """Token decimals as a hex quantity."""


class TransferMetadataSchema(TypedDict, total=False):
    blockTimestamp: str


class AssetTransferSchema(TypedDict, total=False):
    """alchemy_getAssetTransfers result.transfers item."""

    blockNum: str
    uniqueId: str
    hash: str | None
    # "from" is a reserved word; read it with item.get("from").
    to: str | None
    value: float | None
    asset: str | None
    category: Literal["external", "internal", "erc20", "erc721", "erc1155", "specialnft"]
    rawContract: RawContractSchema
    metadata: TransferMetadataSchema


class AssetTransfersResultSchema(TypedDict, total=False):
    transfers: list[AssetTransferSchema]
    pageKey: str


class ReceiptLogSchema(TypedDict, total=False):
    address: str
    topics: list[str]
    data: str
    logIndex: str


class TransactionReceiptSchema(TypedDict, total=False):
    """eth_getTransactionReceipt result."""

    transactionHash: str
    blockNumber: str
    status: str
    gasUsed: str
    effectiveGasPrice: str
    to: str | None
    logs: list[ReceiptLogSchema]


class JsonRpcErrorSchema(TypedDict, total=False):
    code: int
    message: str
    data: Any


class JsonRpcResponseSchema(TypedDict, total=False):
    jsonrpc: str
    id: int
    result: Any
    error: JsonRpcErrorSchema
