# -*- coding: utf-8 -*-
"""SkipTracker: lowest unresolved block of one chain's poll cycle."""

from __future__ import annotations

import structlog
from typing import Any, Callable, Optional

MAX_SKIP_AGE_BLOCKS = 1800


class SkipTracker:
    """Tracks the lowest block holding a transaction that could not be resolved.

    A skip is tracked while its age (current_block - block) is at most
    max_age_blocks. Older skips are logged and dropped so the cursor can move on.
    One tracker per chain per cycle; nothing is kept between cycles.
    """

    def __init__(
        self,
        chain: str,
        current_block: int,
        max_age_blocks: int = MAX_SKIP_AGE_BLOCKS,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._chain = chain
        self._current_block = current_block
        self._max_age_blocks = max_age_blocks
        self._lowest: int | None = None
        self._skipped: dict[str, int] = {}
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def lowest_skipped_block(self) -> int | None:
        return self._lowest

    @property
    def skipped(self) -> dict[str, int]:
        """tx_hash -> block of every tracked skip."""
        return dict(self._skipped)

    def record(self, tx_hash: str, block: int, reason: str) -> bool:
        """Record an unresolved transaction. Returns True if it was tracked for retry."""
        age = self._current_block - block
        if age > self._max_age_blocks:
            self._logger.error(
                "skip_too_old_not_retried",
                chain=self._chain,
                tx_hash=tx_hash,
                block=block,
                block_age=age,
                max_age_blocks=self._max_age_blocks,
                reason=reason,
            )
            return False
        self._skipped[tx_hash] = block
        if self._lowest is None or block < self._lowest:
            self._lowest = block
        self._logger.warning(
            "skip_tracked_for_retry",
            chain=self._chain,
            tx_hash=tx_hash,
            block=block,
            block_age=age,
            reason=reason,
        )
        return True
