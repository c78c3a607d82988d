"""ProtocolFilter: one allow-listed (router, swap event) pair for a chain."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ProtocolFilter:
    """Static allow-list entry. Addresses and signature are stored lower-cased."""

    protocol: str
    chain: str
    router_address: str
    swap_event_signature: str
    factory_address: str | None = None

    @classmethod
    def create(
        cls,
        *,
        protocol: str,
        chain: str,
        router_address: str,
        swap_event_signature: str,
        factory_address: str | None = None,
    ) -> ProtocolFilter:
        """Create a normalized filter."""
        protocol = protocol.strip()
        router = router_address.strip().lower()
        signature = swap_event_signature.strip().lower()
        if not protocol or not router or not signature:
            raise ValueError("protocol, router_address and swap_event_signature must be non-empty")
        return cls(
            protocol=protocol,
            chain=chain.strip().lower(),
            router_address=router,
            swap_event_signature=signature,
            factory_address=factory_address.strip().lower() if factory_address else None,
        )
