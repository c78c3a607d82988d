"""Group a flat transfer list by transaction hash, split by direction for one wallet.

Pure functions, no I/O. No swap/transfer decision is made here.
"""

from __future__ import annotations

from collections.abc import Iterable

from spot_swap_sync.models.raw_transfer import RawTransfer
from spot_swap_sync.models.transfer_group import TransferGroup
from spot_swap_sync.utils.validation import normalize_address


def group_transfers_by_transaction(
    transfers: Iterable[RawTransfer],
    wallet: str,
) -> list[TransferGroup]:
    """Return one TransferGroup per transaction hash, in first-seen order.

    Hashes and addresses are compared case-insensitively. A leg without a hash
    forms its own group. Legs that touch neither side of the wallet are dropped.
    """
    wallet_norm = normalize_address(wallet)
    buckets: dict[str, tuple[list[RawTransfer], list[RawTransfer]]] = {}
    chains: dict[str, str] = {}
    for index, transfer in enumerate(transfers):
        tx_hash = normalize_address(transfer.tx_hash)
        key = tx_hash or f"#nohash:{index}"
        is_out = normalize_address(transfer.from_address) == wallet_norm
        is_in = normalize_address(transfer.to_address) == wallet_norm
        if not is_out and not is_in:
            continue
        outbound, inbound = buckets.setdefault(key, ([], []))
        chains.setdefault(key, transfer.chain)
        if is_out:
            outbound.append(transfer)
        if is_in:
            inbound.append(transfer)

    return [
        TransferGroup(
            tx_hash="" if key.startswith("#nohash:") else key,
            chain=chains[key],
            wallet=wallet_norm,
            outbound=tuple(outbound),
            inbound=tuple(inbound),
        )
        for key, (outbound, inbound) in buckets.items()
    ]
