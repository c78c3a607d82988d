# -*- coding: utf-8 -*-
"""SpotSyncService: incremental, resumable sync of one wallet's swaps and transfers."""

from __future__ import annotations

import structlog
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Callable, Optional
from structlog.contextvars import bound_contextvars

from spot_swap_sync.config import Settings
from spot_swap_sync.models.seen_trade import SeenTrade
from spot_swap_sync.models.trade import Trade
from spot_swap_sync.models.transfer import Transfer
from spot_swap_sync.persistence.repositories.interfaces import (
    ISeenTradeRepository,
    ISyncStateRepository,
)
from spot_swap_sync.services.classification.transfer_classifier import transfers_after
from spot_swap_sync.services.cursor.block_cursor_resolver import Since
from spot_swap_sync.services.spot_provider.interfaces import ISpotDataProvider, TradesResult
from spot_swap_sync.utils.dedupe import trade_key
from spot_swap_sync.utils.validation import mask_address, normalize_address


def incremental_start_block(last_scanned_block: int, retry_window_blocks: int) -> int:
    """Re-scan the last retry_window_blocks blocks (inclusive of last_scanned_block)."""
    return max(last_scanned_block - (retry_window_blocks - 1), 0)


def safe_highest_block(
    trades: Sequence[Trade],
    chain_tip: int,
    lowest_skipped_block: int | None,
) -> int:
    """Highest block the cursor may advance to.

    The highest traded block (or the chain tip when there were no trades),
    held below the lowest skipped block so that block is scanned again.
    """
    highest = max((t.block_number for t in trades), default=chain_tip)
    if lowest_skipped_block is not None:
        highest = min(highest, lowest_skipped_block - 1)
    return max(highest, 0)


@dataclass(frozen=True)
class ChainSyncResult:
    chain: str
    start: Since
    new_trades: tuple[Trade, ...] = ()
    transfers: tuple[Transfer, ...] = ()
    synced_to_block: int | None = None
    lowest_skipped_block: int | None = None
    error: str | None = None


@dataclass(frozen=True)
class WalletSyncResult:
    """Outcome of one sync cycle for one wallet.

    transfer_violations are transfers strictly after the period start.
    """

    wallet: str
    chains: tuple[ChainSyncResult, ...] = ()
    new_trades: tuple[Trade, ...] = ()
    transfers: tuple[Transfer, ...] = ()
    transfer_violations: tuple[Transfer, ...] = ()
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.errors


class SpotSyncService:
    """Runs one sync cycle per call: trades, cursor update, then transfers."""

    def __init__(
        self,
        provider: ISpotDataProvider,
        sync_state_repository: ISyncStateRepository,
        seen_trade_repository: ISeenTradeRepository,
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the service.

        Args:
            provider: Spot data provider (trades, transfers, current block).
            sync_state_repository: Highest scanned block per (wallet, chain).
            seen_trade_repository: Dedupe store for emitted trades.
            settings: Application settings (uses settings.sync.retry_window_blocks).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._provider = provider
        self._sync_state = sync_state_repository
        self._seen = seen_trade_repository
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def sync_wallet(
        self,
        wallet: str,
        chains: Sequence[str],
        period_start: datetime | None = None,
    ) -> WalletSyncResult:
        """Sync wallet on each chain independently.

        First sync of a chain starts at period_start (or the chain tip when no
        period is set); later syncs start retry_window_blocks behind the last
        scanned block. One chain failing does not stop the others.
        """
        wallet_norm = normalize_address(wallet)
        results: list[ChainSyncResult] = []
        with bound_contextvars(wallet_masked=mask_address(wallet_norm)):
            if not chains:
                self._logger.warning("sync_wallet_no_chains")
                return WalletSyncResult(wallet=wallet_norm)
            for chain in chains:
                with bound_contextvars(chain=chain):
                    results.append(await self._sync_chain(wallet_norm, chain, period_start))

            new_trades = tuple(t for r in results for t in r.new_trades)
            transfers = tuple(t for r in results for t in r.transfers)
            violations: tuple[Transfer, ...] = ()
            if period_start is not None:
                violations = tuple(transfers_after(transfers, _as_utc(period_start)))
                if violations:
                    self._logger.warning(
                        "sync_transfer_violations_found",
                        violation_count=len(violations),
                        period_start=period_start.isoformat(),
                    )
            errors = {r.chain: r.error for r in results if r.error}
            self._logger.info(
                "sync_wallet_completed",
                new_trade_count=len(new_trades),
                transfer_count=len(transfers),
                violation_count=len(violations),
                failed_chains=sorted(errors),
            )
            return WalletSyncResult(
                wallet=wallet_norm,
                chains=tuple(results),
                new_trades=new_trades,
                transfers=transfers,
                transfer_violations=violations,
                errors=errors,
            )

    async def _start_for(self, wallet: str, chain: str, period_start: datetime | None) -> Since:
        state = await self._sync_state.get(wallet, chain)
        if state is not None:
            return incremental_start_block(
                state.last_scanned_block, self._settings.sync.retry_window_blocks
            )
        if period_start is not None:
            return _as_utc(period_start)
        return await self._provider.get_current_block(chain)

    async def _sync_chain(
        self,
        wallet: str,
        chain: str,
        period_start: datetime | None,
    ) -> ChainSyncResult:
        try:
            start = await self._start_for(wallet, chain, period_start)
            result = await self._provider.get_trades_since(wallet, start, [chain])
        except Exception as e:
            self._logger.exception(
                "sync_chain_failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return ChainSyncResult(chain=chain, start=0, error=str(e))

        if chain in result.failed_chains:
            return ChainSyncResult(chain=chain, start=start, error="trade scan failed")

        new_trades = await self._record_new_trades(wallet, result)
        lowest_skipped = result.skipped_blocks_by_chain.get(chain, result.lowest_skipped_block)

        try:
            tip = 0 if result.trades else await self._provider.get_current_block(chain)
            synced_to = safe_highest_block(result.trades, tip, lowest_skipped)
            state = await self._sync_state.upsert(wallet, chain, synced_to)
        except Exception as e:
            self._logger.exception(
                "sync_state_update_failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return ChainSyncResult(
                chain=chain,
                start=start,
                new_trades=new_trades,
                lowest_skipped_block=lowest_skipped,
                error=str(e),
            )
        if lowest_skipped is not None:
            self._logger.warning(
                "sync_state_limited_by_skip",
                lowest_skipped_block=lowest_skipped,
                synced_to_block=synced_to,
            )

        transfers: tuple[Transfer, ...] = ()
        if self._provider.supports_transfer_history:
            try:
                transfers = tuple(await self._provider.get_transfer_history(wallet, start, [chain]))
            except Exception as e:
                self._logger.exception(
                    "sync_transfer_history_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )

        self._logger.debug(
            "sync_chain_completed",
            new_trade_count=len(new_trades),
            transfer_count=len(transfers),
            synced_to_block=state.last_scanned_block,
        )
        return ChainSyncResult(
            chain=chain,
            start=start,
            new_trades=new_trades,
            transfers=transfers,
            synced_to_block=state.last_scanned_block,
            lowest_skipped_block=lowest_skipped,
        )

    async def _record_new_trades(self, wallet: str, result: TradesResult) -> tuple[Trade, ...]:
        new_trades: list[Trade] = []
        seen: list[SeenTrade] = []
        keys: set[str] = set()
        for trade in result.trades:
            key = trade_key(trade)
            if key in keys or await self._seen.contains(wallet, key):
                continue
            keys.add(key)
            new_trades.append(trade)
            seen.append(SeenTrade.for_trade(wallet, trade))
        if seen:
            await self._seen.add_batch(seen)
        return tuple(new_trades)


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=UTC)
