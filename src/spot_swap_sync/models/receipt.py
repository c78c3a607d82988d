"""Transaction receipt and transaction models (mapped from JSON-RPC responses)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from spot_swap_sync.utils.evm import hex_to_int


@dataclass(frozen=True, slots=True)
class ReceiptLog:
    """One event log of a receipt. log_index orders legs within a transaction."""

    address: str
    topics: tuple[str, ...]
    data: str
    log_index: int | None = None

    @property
    def first_topic(self) -> str | None:
        """Event signature (topic 0), lower-cased."""
        return self.topics[0].lower() if self.topics else None

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> ReceiptLog:
        """Build from a raw receipt log item (hex quantities)."""
        raw_index = response.get("logIndex")
        return cls(
            address=str(response.get("address") or "").lower(),
            topics=tuple(str(t) for t in (response.get("topics") or [])),
            data=str(response.get("data") or "0x"),
            log_index=hex_to_int(raw_index) if raw_index is not None else None,
        )


@dataclass(frozen=True, slots=True)
class TransactionReceipt:
    """Mined transaction receipt."""

    tx_hash: str
    block_number: int
    status: bool
    """True if the transaction succeeded, False if it reverted."""
    gas_used: int = 0
    effective_gas_price: int = 0
    to: str | None = None
    from_address: str | None = None
    logs: tuple[ReceiptLog, ...] = field(default_factory=tuple)

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> TransactionReceipt:
        """Build from a raw eth_getTransactionReceipt result."""
        to = response.get("to")
        sender = response.get("from")
        return cls(
            tx_hash=str(response.get("transactionHash") or "").lower(),
            block_number=hex_to_int(response.get("blockNumber")),
            # Pre-Byzantium receipts have no status field; treat them as successful.
            status=hex_to_int(response.get("status"), default=1) == 1,
            gas_used=hex_to_int(response.get("gasUsed")),
            effective_gas_price=hex_to_int(response.get("effectiveGasPrice")),
            to=str(to).lower() if to else None,
            from_address=str(sender).lower() if sender else None,
            logs=tuple(
                ReceiptLog.from_response(item)
                for item in (response.get("logs") or [])
                if isinstance(item, dict)
            ),
        )


@dataclass(frozen=True, slots=True)
class TransactionInfo:
    """Minimal transaction data used for router matching."""

    tx_hash: str
    from_address: str
    to: str | None

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> TransactionInfo:
        """Build from a raw eth_getTransactionByHash result."""
        to = response.get("to")
        return cls(
            tx_hash=str(response.get("hash") or "").lower(),
            from_address=str(response.get("from") or "").lower(),
            to=str(to).lower() if to else None,
        )
