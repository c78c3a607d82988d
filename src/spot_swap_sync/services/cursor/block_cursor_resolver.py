# -*- coding: utf-8 -*-
"""BlockCursorResolver: turn a date or block "since" cursor into a starting block per chain."""

from __future__ import annotations

import math
import structlog
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any, Callable, Optional

from spot_swap_sync.clients.interfaces import IChainDataSource
from spot_swap_sync.exceptions import UnsupportedChainOperationError
from spot_swap_sync.models.chain import DEFAULT_CHAIN_CONFIGS, ChainConfig, get_chain_config

Since = datetime | int


def estimate_start_block(current_block: int, seconds_ago: float, seconds_per_block: float) -> int:
    """Return max(0, current - floor(seconds_ago / seconds_per_block))."""
    if seconds_ago <= 0:
        return current_block
    return max(0, current_block - math.floor(seconds_ago / seconds_per_block))


class BlockCursorResolver:
    """Resolves the first block to scan on each chain.

    Dates are converted with a fixed seconds-per-block estimate against the
    current height of each chain; block numbers pass through unchanged.
    """

    def __init__(
        self,
        data_source: IChainDataSource,
        *,
        chain_configs: Mapping[str, ChainConfig] = DEFAULT_CHAIN_CONFIGS,
        now: Callable[[], datetime] = lambda: datetime.now(UTC),
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._data_source = data_source
        self._chain_configs = chain_configs
        self._now = now
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def resolve(self, since: Since, chains: Sequence[str]) -> dict[str, int]:
        """Return {chain: start_block}. Chains whose height query fails are omitted.

        Args:
            since: Naive datetimes are taken as UTC. Integers are block numbers.
            chains: Target chains; an empty list logs a warning and returns {}.
        """
        if not chains:
            self._logger.warning("cursor_resolve_no_chains")
            return {}

        if not isinstance(since, datetime):
            return {chain: max(0, int(since)) for chain in chains}

        since_utc = since if since.tzinfo else since.replace(tzinfo=UTC)
        seconds_ago = (self._now() - since_utc).total_seconds()
        resolved: dict[str, int] = {}
        for chain in chains:
            try:
                current = await self._data_source.get_block_number(chain)
            except UnsupportedChainOperationError as e:
                self._logger.warning(
                    "cursor_resolve_chain_unsupported",
                    chain=chain,
                    error_message=str(e),
                )
                continue
            except Exception as e:
                self._logger.exception(
                    "cursor_resolve_block_number_failed",
                    chain=chain,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                continue
            seconds_per_block = get_chain_config(chain, self._chain_configs).seconds_per_block
            resolved[chain] = estimate_start_block(current, seconds_ago, seconds_per_block)
            self._logger.debug(
                "cursor_resolved",
                chain=chain,
                current_block=current,
                start_block=resolved[chain],
                seconds_ago=seconds_ago,
            )
        return resolved
