"""Hex helpers for raw EVM JSON-RPC values and event logs."""

from __future__ import annotations

from typing import Any

# keccak256("Transfer(address,address,uint256)")
ERC20_TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"


def hex_to_int(value: Any, default: int = 0) -> int:
    """Parse a 0x-prefixed quantity ("0x1a") or a plain int; empty/"0x" gives default."""
    if value is None:
        return default
    if isinstance(value, int):
        return value
    s = str(value).strip()
    if not s or s == "0x":
        return default
    return int(s, 16) if s.startswith(("0x", "0X")) else int(s)


def to_hex_block(block: int) -> str:
    """Encode a block number as a JSON-RPC quantity."""
    return hex(max(0, block))


def topic_to_address(topic: str | None) -> str:
    """Return the lower-cased address held in the last 20 bytes of a 32-byte topic."""
    if not topic:
        return ""
    return "0x" + topic[-40:].lower()
