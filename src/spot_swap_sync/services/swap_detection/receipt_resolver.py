# -*- coding: utf-8 -*-
"""ReceiptSwapResolver: pick input and output tokens from receipt logs by log index.

No I/O. The receipt decides which tokens were exchanged; the transfer legs decide
how much of each.
"""

from __future__ import annotations

import structlog
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Optional

from spot_swap_sync.models.raw_transfer import RawTransfer
from spot_swap_sync.models.receipt import ReceiptLog, TransactionReceipt
from spot_swap_sync.models.trade import DetectedSwap
from spot_swap_sync.models.transfer_group import TransferGroup
from spot_swap_sync.utils.evm import ERC20_TRANSFER_TOPIC, hex_to_int, topic_to_address


class ResolutionStatus(str, Enum):
    RESOLVED = "resolved"
    INCONCLUSIVE = "inconclusive"
    """No usable wallet-attributed pattern in the logs; the fallback may try."""
    ZERO_OUTBOUND = "zero_outbound"
    """Input leg moved no value; never a swap and never retried."""


@dataclass(frozen=True, slots=True)
class ReceiptResolution:
    status: ResolutionStatus
    swap: DetectedSwap | None = None
    reason: str = ""


@dataclass(frozen=True, slots=True)
class TransferLog:
    """An ERC20 Transfer event decoded from a receipt log."""

    token_address: str
    from_address: str
    to_address: str
    value: int
    log_index: int | None
    position: int
    """Position in the receipt's log array; tiebreaker for logs without an index."""

    @classmethod
    def from_log(cls, log: ReceiptLog, position: int) -> TransferLog | None:
        if log.first_topic != ERC20_TRANSFER_TOPIC or len(log.topics) < 3:
            return None
        return cls(
            token_address=log.address.lower(),
            from_address=topic_to_address(log.topics[1]),
            to_address=topic_to_address(log.topics[2]),
            value=hex_to_int(log.data),
            log_index=log.log_index,
            position=position,
        )

    def sort_key(self) -> tuple[int, int, int]:
        # Logs without an index sort after indexed ones, then by array position.
        if self.log_index is None:
            return (1, 0, self.position)
        return (0, self.log_index, self.position)


def decode_transfer_logs(receipt: TransactionReceipt) -> list[TransferLog]:
    """Return the receipt's ERC20 Transfer events in execution order."""
    decoded = [TransferLog.from_log(log, i) for i, log in enumerate(receipt.logs)]
    return sorted((t for t in decoded if t is not None), key=TransferLog.sort_key)


def sum_amounts(legs: tuple[RawTransfer, ...], token_address: str) -> Decimal | None:
    """Sum the legs of token_address; None when no leg carries that token."""
    matching = [leg.amount for leg in legs if leg.token_address == token_address]
    if not matching:
        return None
    return sum(matching, Decimal(0))


class ReceiptSwapResolver:
    """Resolves a swap candidate from its receipt.

    Input token: first Transfer log sent by the wallet. Output token: last
    Transfer log received by the wallet. Intermediate router hops never carry
    the wallet on either side, so multi-hop routes collapse to A -> C.
    """

    def __init__(
        self,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def resolve(self, group: TransferGroup, receipt: TransactionReceipt) -> ReceiptResolution:
        """Return the resolution for group using receipt logs.

        Args:
            group: Swap candidate for one wallet.
            receipt: Mined receipt of the same transaction.

        Returns:
            RESOLVED with the swap; ZERO_OUTBOUND when the input leg is worthless;
            INCONCLUSIVE when the logs (or the legs) cannot name both sides.
        """
        wallet = group.wallet
        logs = decode_transfer_logs(receipt)
        outbound = next((t for t in logs if t.from_address == wallet), None)
        inbound = next((t for t in reversed(logs) if t.to_address == wallet), None)

        if outbound is None:
            return ReceiptResolution(ResolutionStatus.INCONCLUSIVE, reason="no outbound transfer log")
        if inbound is None:
            return ReceiptResolution(ResolutionStatus.INCONCLUSIVE, reason="no inbound transfer log")

        if outbound.value == 0:
            self._logger.warning(
                "receipt_swap_zero_outbound_value",
                tx_hash=group.tx_hash,
                chain=group.chain,
                from_token=outbound.token_address,
                transfer_log_count=len(logs),
            )
            return ReceiptResolution(ResolutionStatus.ZERO_OUTBOUND, reason="zero outbound log value")

        if outbound.token_address == inbound.token_address:
            return ReceiptResolution(
                ResolutionStatus.INCONCLUSIVE, reason="input and output token are the same"
            )

        from_amount = sum_amounts(group.outbound, outbound.token_address)
        to_amount = sum_amounts(group.inbound, inbound.token_address)
        if from_amount is None or to_amount is None:
            return ReceiptResolution(
                ResolutionStatus.INCONCLUSIVE, reason="no transfer leg for a selected token"
            )
        if from_amount == 0:
            self._logger.warning(
                "receipt_swap_zero_outbound_amount",
                tx_hash=group.tx_hash,
                chain=group.chain,
                from_token=outbound.token_address,
            )
            return ReceiptResolution(ResolutionStatus.ZERO_OUTBOUND, reason="zero outbound amount")

        swap = DetectedSwap(
            tx_hash=group.tx_hash,
            block_number=receipt.block_number or group.block_number,
            timestamp=group.timestamp,
            from_token=outbound.token_address,
            to_token=inbound.token_address,
            from_amount=from_amount,
            to_amount=to_amount,
        )
        return ReceiptResolution(ResolutionStatus.RESOLVED, swap=swap)
