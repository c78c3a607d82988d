# -*- coding: utf-8 -*-
"""ProtocolFilterService: accept swaps only from allow-listed routers emitting a known swap event."""

from __future__ import annotations

import structlog
from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Optional

from spot_swap_sync.clients.interfaces import IChainDataSource
from spot_swap_sync.models.protocol_filter import ProtocolFilter
from spot_swap_sync.models.receipt import TransactionReceipt
from spot_swap_sync.models.trade import UNKNOWN_PROTOCOL


@dataclass(frozen=True, slots=True)
class FilterDecision:
    allowed: bool
    protocol: str | None = None


def group_filters_by_chain(
    filters: Iterable[ProtocolFilter],
) -> Mapping[str, tuple[ProtocolFilter, ...]]:
    """Index filters by chain. The result is read-only."""
    grouped: dict[str, list[ProtocolFilter]] = defaultdict(list)
    for f in filters:
        grouped[f.chain].append(f)
    return MappingProxyType({chain: tuple(items) for chain, items in grouped.items()})


def match_filters(
    receipt: TransactionReceipt,
    tx_to: str | None,
    chain_filters: Iterable[ProtocolFilter],
) -> FilterDecision:
    """Match tx_to against each router, then the receipt topics against its swap event."""
    if not tx_to:
        return FilterDecision(allowed=False)
    target = tx_to.lower()
    topics = {log.first_topic for log in receipt.logs if log.first_topic}
    for f in chain_filters:
        if target != f.router_address:
            continue
        if f.swap_event_signature in topics:
            return FilterDecision(allowed=True, protocol=f.protocol)
    return FilterDecision(allowed=False)


class ProtocolFilterService:
    """Per-chain allow-list check. Chains without filters run unfiltered."""

    def __init__(
        self,
        filters: Iterable[ProtocolFilter],
        data_source: IChainDataSource,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._filters_by_chain = group_filters_by_chain(filters)
        self._data_source = data_source
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def has_filters(self, chain: str) -> bool:
        return bool(self._filters_by_chain.get(chain))

    async def check(self, chain: str, receipt: TransactionReceipt) -> FilterDecision:
        """Return the decision for a resolved swap on chain.

        The transaction target is read from the receipt and, when the receipt
        does not carry it, from get_transaction. Data-source errors propagate.
        """
        chain_filters = self._filters_by_chain.get(chain)
        if not chain_filters:
            return FilterDecision(allowed=True, protocol=UNKNOWN_PROTOCOL)

        tx_to = receipt.to
        if tx_to is None:
            tx = await self._data_source.get_transaction(receipt.tx_hash, chain)
            tx_to = tx.to if tx is not None else None

        decision = match_filters(receipt, tx_to, chain_filters)
        if not decision.allowed:
            self._logger.debug(
                "protocol_filter_rejected",
                chain=chain,
                tx_hash=receipt.tx_hash,
                tx_to=tx_to,
            )
        return decision
