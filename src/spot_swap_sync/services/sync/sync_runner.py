"""Orchestrator: polls SpotSyncService for every wallet until shutdown (signal or CancelledError)."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import Any

import structlog

from spot_swap_sync.config import Settings
from spot_swap_sync.services.sync.spot_sync_service import SpotSyncService
from spot_swap_sync.utils.validation import mask_address


class SyncRunner:
    """Runs one sync cycle per wallet every poll_seconds until shutdown_event or CancelledError."""

    def __init__(
        self,
        sync_service: SpotSyncService,
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            sync_service: Injected SpotSyncService.
            settings: Application settings (uses settings.sync for poll_seconds and period_start).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._sync_service = sync_service
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def run_cycle(self, wallets: Sequence[str], chains: Sequence[str]) -> int:
        """Sync every wallet once. Returns the number of new trades found."""
        period_start = self._settings.sync.period_start
        new_trades = 0
        for wallet in wallets:
            try:
                result = await self._sync_service.sync_wallet(wallet, chains, period_start)
            except Exception as e:
                self._logger.exception(
                    "sync_runner_wallet_failed",
                    wallet_masked=mask_address(wallet),
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                continue
            new_trades += len(result.new_trades)
        return new_trades

    async def run(
        self,
        wallets: Sequence[str],
        chains: Sequence[str],
        shutdown_event: asyncio.Event,
    ) -> None:
        """Poll until shutdown_event is set; re-raise CancelledError after logging.

        Args:
            wallets: 0x wallet addresses to sync.
            chains: Chains to sync for every wallet.
            shutdown_event: When set, the runner returns after the current cycle.
        """
        poll_seconds = self._settings.sync.poll_seconds
        self._logger.info(
            "sync_runner_started",
            sync_wallets_count=len(wallets),
            sync_chains=list(chains),
            sync_poll_seconds=poll_seconds,
        )
        try:
            while not shutdown_event.is_set():
                new_trades = await self.run_cycle(wallets, chains)
                self._logger.info("sync_runner_cycle_completed", new_trade_count=new_trades)
                try:
                    await asyncio.wait_for(shutdown_event.wait(), timeout=poll_seconds)
                except asyncio.TimeoutError:
                    pass
        except asyncio.CancelledError:
            self._logger.info(
                "sync_runner_shutdown_cancelled",
                message="Kernel or task cancelled; stopping sync",
            )
            raise
        self._logger.info("sync_runner_shutdown_completed")
