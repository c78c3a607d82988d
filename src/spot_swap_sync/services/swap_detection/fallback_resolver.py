# -*- coding: utf-8 -*-
"""TransferPatternResolver: classify a swap straight from the transfer legs.

Used only when the receipt logs cannot name both sides and a native-asset leg is
present (native value moves emit no Transfer event).
"""

from __future__ import annotations

import structlog
from decimal import Decimal
from typing import Any, Callable, Optional

from spot_swap_sync.models.trade import DetectedSwap
from spot_swap_sync.models.transfer_group import TransferGroup


class TransferPatternResolver:
    """Pure resolver over a TransferGroup. Native legs map to the zero address.

    Rules:
    - exactly one outbound leg;
    - inbound legs of the outbound token are refunds and are ignored;
    - the remaining inbound legs must all carry one token and are summed;
    - a zero outbound amount or identical tokens is not a swap.
    """

    def __init__(
        self,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def resolve(self, group: TransferGroup) -> DetectedSwap | None:
        """Return the swap described by the legs of group, or None."""
        if len(group.outbound) != 1:
            self._logger.debug(
                "fallback_swap_ambiguous_outbound",
                tx_hash=group.tx_hash,
                chain=group.chain,
                outbound_count=len(group.outbound),
            )
            return None

        out_leg = group.outbound[0]
        from_token = out_leg.token_address
        received = [leg for leg in group.inbound if leg.token_address != from_token]
        to_tokens = {leg.token_address for leg in received}
        if len(to_tokens) != 1:
            self._logger.debug(
                "fallback_swap_ambiguous_inbound",
                tx_hash=group.tx_hash,
                chain=group.chain,
                inbound_token_count=len(to_tokens),
            )
            return None

        if out_leg.amount == 0:
            self._logger.warning(
                "fallback_swap_zero_outbound_amount",
                tx_hash=group.tx_hash,
                chain=group.chain,
                from_token=from_token,
            )
            return None

        (to_token,) = to_tokens
        return DetectedSwap(
            tx_hash=group.tx_hash,
            block_number=group.block_number,
            timestamp=group.timestamp,
            from_token=from_token,
            to_token=to_token,
            from_amount=out_leg.amount,
            to_amount=sum((leg.amount for leg in received), Decimal(0)),
        )
