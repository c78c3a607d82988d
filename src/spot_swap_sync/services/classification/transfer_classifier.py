# -*- coding: utf-8 -*-
"""TransferClassifier: deposits and withdrawals from groups that are not swap candidates."""

from __future__ import annotations

import hashlib
import time
import structlog
from collections.abc import Iterable
from datetime import datetime
from typing import Any, Callable, Optional

from spot_swap_sync.models.raw_transfer import RawTransfer
from spot_swap_sync.models.transfer import Transfer, TransferType
from spot_swap_sync.models.transfer_group import TransferGroup
from spot_swap_sync.utils.validation import normalize_address


def fallback_tx_hash(
    wallet: str,
    timestamp: datetime,
    transfer_type: TransferType,
    amount: Any,
    index: int,
    salt: Any,
) -> str:
    """Synthesize a hash for a leg that arrived without one."""
    material = "|".join(
        [wallet.lower(), timestamp.isoformat(), transfer_type.value, str(amount), str(index), str(salt)]
    )
    return "0x" + hashlib.sha256(material.encode("utf-8")).hexdigest()


def transfers_after(transfers: Iterable[Transfer], start: datetime) -> list[Transfer]:
    """Return transfers strictly after start. A transfer exactly at start is not included."""
    return [t for t in transfers if t.timestamp > start]


class TransferClassifier:
    """Turns deposit/withdrawal candidate groups into one Transfer per non-zero leg.

    Swap candidates (both directions present) are never classified here.
    """

    def __init__(
        self,
        *,
        salt_factory: Callable[[], Any] = time.time_ns,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._salt_factory = salt_factory
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def classify(self, groups: Iterable[TransferGroup], wallet: str, chain: str) -> list[Transfer]:
        wallet_norm = normalize_address(wallet)
        transfers: list[Transfer] = []
        index = 0
        for group in groups:
            if group.is_swap_candidate:
                continue
            for leg in group.legs:
                if leg.amount == 0:
                    continue
                transfer = self._to_transfer(leg, wallet_norm, chain, index)
                if transfer is not None:
                    transfers.append(transfer)
                    index += 1
        self._logger.debug("transfers_classified", chain=chain, transfer_count=len(transfers))
        return transfers

    def _to_transfer(
        self,
        leg: RawTransfer,
        wallet: str,
        chain: str,
        index: int,
    ) -> Transfer | None:
        if normalize_address(leg.to_address) == wallet:
            transfer_type = TransferType.DEPOSIT
        elif normalize_address(leg.from_address) == wallet:
            transfer_type = TransferType.WITHDRAW
        else:
            return None

        tx_hash = normalize_address(leg.tx_hash)
        if not tx_hash:
            tx_hash = fallback_tx_hash(
                wallet, leg.timestamp, transfer_type, leg.amount, index, self._salt_factory()
            )
            self._logger.debug("transfer_fallback_hash", chain=chain, tx_hash=tx_hash)

        return Transfer(
            type=transfer_type,
            token_address=leg.token_address,
            amount=leg.amount,
            from_address=normalize_address(leg.from_address),
            to_address=normalize_address(leg.to_address),
            chain=chain,
            timestamp=leg.timestamp,
            tx_hash=tx_hash,
            block_number=leg.block_number,
        )
