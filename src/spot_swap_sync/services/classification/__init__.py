from spot_swap_sync.services.classification.transfer_classifier import (
    TransferClassifier,
    fallback_tx_hash,
    transfers_after,
)

__all__ = ["TransferClassifier", "fallback_tx_hash", "transfers_after"]
