# -*- coding: utf-8 -*-
"""
Entry point for the spot swap sync service.

Orchestrates: logging, settings, container, sync runner, shutdown (SIGINT or CancelledError).
Each cycle: for every wallet and chain, fetch trades since the stored cursor,
dedupe, advance the cursor, then classify deposits and withdrawals.

Run with: python -m spot_swap_sync.main

Notebook usage:
    from spot_swap_sync.main import run
    await run()  # Interrupt kernel to stop; system will shut down on CancelledError.
"""
from __future__ import annotations

import asyncio
import signal
import structlog

from spot_swap_sync.DI import Container
from spot_swap_sync.config import Settings, get_settings
from spot_swap_sync.exceptions import MissingRequiredConfigError
from spot_swap_sync.logging.config import configure_logging
from spot_swap_sync.utils import is_hex_address, mask_address


def _setup_sigint(shutdown_event: asyncio.Event) -> None:
    try:
        loop = asyncio.get_running_loop()
        loop.add_signal_handler(
            signal.SIGINT,
            lambda: shutdown_event.set(),
        )
    except NotImplementedError:
        pass  # Windows has no add_signal_handler


def validate_settings(settings: Settings) -> list[str]:
    """Return the wallets to sync.

    Raises:
        MissingRequiredConfigError: If no valid wallet, no chain or no API key is configured.
    """
    logger = structlog.get_logger("main")
    wallets = [w.lower() for w in settings.sync.wallets if is_hex_address(w)]
    invalid = [w for w in settings.sync.wallets if not is_hex_address(w)]
    if invalid:
        logger.warning("main_invalid_wallets_ignored", invalid_wallets=invalid)
    if not wallets:
        logger.error("main_missing_wallets", message="SYNC__WALLETS is not set")
        raise MissingRequiredConfigError("SYNC__WALLETS")
    if not settings.sync.chains:
        logger.error("main_missing_chains", message="SYNC__CHAINS is empty")
        raise MissingRequiredConfigError("SYNC__CHAINS")
    if not settings.api.alchemy_api_key:
        logger.error("main_missing_api_key", message="API__ALCHEMY_API_KEY is not set")
        raise MissingRequiredConfigError("API__ALCHEMY_API_KEY")
    return wallets


async def run() -> None:
    configure_logging()
    logger = structlog.get_logger("main")
    settings = get_settings()
    wallets = validate_settings(settings)
    chains = settings.sync.chains

    container = Container()
    runner = container.sync_runner()
    http_client = container.http_client()
    shutdown_event = asyncio.Event()
    try:
        _setup_sigint(shutdown_event)
        logger.info(
            "main_sync_started",
            wallets=[mask_address(w) for w in wallets],
            chains=chains,
            period_start=settings.sync.period_start.isoformat() if settings.sync.period_start else None,
            provider=container.spot_provider().get_name(),
        )
        await runner.run(wallets, chains, shutdown_event)
    finally:
        await http_client.aclose()
        logger.info("main_shutdown_complete")


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main", "validate_settings"]

if __name__ == "__main__":
    main()
