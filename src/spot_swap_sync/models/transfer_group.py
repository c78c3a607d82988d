"""TransferGroup: all legs of one transaction, partitioned by direction for one wallet."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from spot_swap_sync.models.raw_transfer import RawTransfer


@dataclass(frozen=True, slots=True)
class TransferGroup:
    """Legs sharing one transaction hash.

    outbound holds legs sent by the wallet, inbound legs received by it. A leg that is
    both (self-transfer) appears in both. Built per poll cycle, never persisted.
    """

    tx_hash: str
    chain: str
    wallet: str
    outbound: tuple[RawTransfer, ...]
    inbound: tuple[RawTransfer, ...]

    @property
    def legs(self) -> tuple[RawTransfer, ...]:
        """Distinct legs of the transaction (self-transfers counted once)."""
        seen_ids: set[int] = set()
        legs: list[RawTransfer] = []
        for leg in self.outbound + self.inbound:
            if id(leg) not in seen_ids:
                seen_ids.add(id(leg))
                legs.append(leg)
        return tuple(legs)

    @property
    def is_swap_candidate(self) -> bool:
        return bool(self.outbound) and bool(self.inbound)

    @property
    def is_deposit_candidate(self) -> bool:
        return bool(self.inbound) and not self.outbound

    @property
    def is_withdrawal_candidate(self) -> bool:
        return bool(self.outbound) and not self.inbound

    @property
    def has_native_leg(self) -> bool:
        return any(leg.is_native for leg in self.legs)

    @property
    def block_number(self) -> int:
        """Lowest block among the legs (all legs normally share one block)."""
        return min(leg.block_number for leg in self.legs)

    @property
    def timestamp(self) -> datetime:
        return min(leg.timestamp for leg in self.legs)
