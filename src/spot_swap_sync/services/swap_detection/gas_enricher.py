"""GasEnricher: attach receipt gas data to a resolved swap."""

from __future__ import annotations

from spot_swap_sync.models.receipt import TransactionReceipt
from spot_swap_sync.models.trade import DetectedSwap, Trade


class GasEnricher:
    """Build the emitted Trade; gas fields are zero when no receipt is available."""

    def enrich(self, swap: DetectedSwap, chain: str, receipt: TransactionReceipt | None) -> Trade:
        return Trade(
            tx_hash=swap.tx_hash,
            chain=chain,
            block_number=swap.block_number,
            timestamp=swap.timestamp,
            from_token=swap.from_token,
            to_token=swap.to_token,
            from_amount=swap.from_amount,
            to_amount=swap.to_amount,
            protocol=swap.protocol,
            gas_used=receipt.gas_used if receipt is not None else 0,
            gas_price=receipt.effective_gas_price if receipt is not None else 0,
        )
