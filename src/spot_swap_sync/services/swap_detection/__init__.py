# -*- coding: utf-8 -*-
"""Swap detection: receipt resolver, transfer-pattern fallback, protocol filter, gas enrichment."""

from spot_swap_sync.services.swap_detection.fallback_resolver import TransferPatternResolver
from spot_swap_sync.services.swap_detection.gas_enricher import GasEnricher
from spot_swap_sync.services.swap_detection.protocol_filter import (
    FilterDecision,
    ProtocolFilterService,
    group_filters_by_chain,
    match_filters,
)
from spot_swap_sync.services.swap_detection.receipt_resolver import (
    ReceiptResolution,
    ReceiptSwapResolver,
    ResolutionStatus,
    TransferLog,
    decode_transfer_logs,
)

__all__ = [
    "FilterDecision",
    "GasEnricher",
    "ProtocolFilterService",
    "ReceiptResolution",
    "ReceiptSwapResolver",
    "ResolutionStatus",
    "TransferLog",
    "TransferPatternResolver",
    "decode_transfer_logs",
    "group_filters_by_chain",
    "match_filters",
]
