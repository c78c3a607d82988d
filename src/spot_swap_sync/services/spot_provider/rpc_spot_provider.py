# -*- coding: utf-8 -*-
"""RpcSpotProvider: swaps and transfers of a wallet, read directly from a chain data source.

Per chain: resolve the starting block, fetch every transfer page, group legs by
transaction, resolve swap candidates through the receipt (then the transfer
pattern when a native leg is involved), apply the protocol filter and attach gas.
Groups with a single direction become deposits or withdrawals.
"""

from __future__ import annotations

import asyncio
import structlog
from collections.abc import Sequence
from typing import Any, Callable, Optional
from cachetools import TTLCache
from structlog.contextvars import bound_contextvars

from spot_swap_sync.clients.interfaces import IChainDataSource
from spot_swap_sync.exceptions import UnsupportedChainOperationError
from spot_swap_sync.models.chain import get_chain_config
from spot_swap_sync.models.raw_transfer import RawTransfer
from spot_swap_sync.models.trade import Trade
from spot_swap_sync.models.transfer import Transfer
from spot_swap_sync.models.transfer_group import TransferGroup
from spot_swap_sync.services.classification.transfer_classifier import TransferClassifier
from spot_swap_sync.services.cursor.block_cursor_resolver import BlockCursorResolver, Since
from spot_swap_sync.services.grouping.transfer_grouper import group_transfers_by_transaction
from spot_swap_sync.services.spot_provider.interfaces import (
    ISpotDataProvider,
    SpotEngineConfig,
    TradesResult,
)
from spot_swap_sync.services.spot_provider.skip_tracker import SkipTracker
from spot_swap_sync.services.swap_detection.fallback_resolver import TransferPatternResolver
from spot_swap_sync.services.swap_detection.gas_enricher import GasEnricher
from spot_swap_sync.services.swap_detection.protocol_filter import ProtocolFilterService
from spot_swap_sync.services.swap_detection.receipt_resolver import (
    ReceiptSwapResolver,
    ResolutionStatus,
)
from spot_swap_sync.utils.validation import mask_address, normalize_address


class RpcSpotProvider(ISpotDataProvider):
    """ISpotDataProvider backed by an IChainDataSource.

    Stateless between calls: skip bookkeeping is returned to the caller, and the
    only shared state is the read-only engine configuration.
    """

    supports_transfer_history = True

    def __init__(
        self,
        data_source: IChainDataSource,
        config: SpotEngineConfig | None = None,
        *,
        cursor_resolver: BlockCursorResolver | None = None,
        receipt_resolver: ReceiptSwapResolver | None = None,
        fallback_resolver: TransferPatternResolver | None = None,
        protocol_filter: ProtocolFilterService | None = None,
        gas_enricher: GasEnricher | None = None,
        transfer_classifier: TransferClassifier | None = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the provider.

        Args:
            data_source: Per-chain transfers, receipts, heights and balances.
            config: Engine configuration (filters, chain table, limits).
            cursor_resolver: Optional override; built from config when None.
            receipt_resolver: Optional override.
            fallback_resolver: Optional override.
            protocol_filter: Optional override; built from config.protocol_filters when None.
            gas_enricher: Optional override.
            transfer_classifier: Optional override.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._data_source = data_source
        self._config = config or SpotEngineConfig()
        self._cursor = cursor_resolver or BlockCursorResolver(
            data_source, chain_configs=self._config.chain_configs, get_logger=get_logger
        )
        self._receipt_resolver = receipt_resolver or ReceiptSwapResolver(get_logger=get_logger)
        self._fallback_resolver = fallback_resolver or TransferPatternResolver(get_logger=get_logger)
        self._protocol_filter = protocol_filter or ProtocolFilterService(
            self._config.protocol_filters, data_source, get_logger=get_logger
        )
        self._gas_enricher = gas_enricher or GasEnricher()
        self._classifier = transfer_classifier or TransferClassifier(get_logger=get_logger)
        # (wallet, chain, from_block, to_block) -> legs; shared by trades and transfer history
        self._transfer_cache: TTLCache[tuple[str, str, int, int | None], list[RawTransfer]] | None = None
        if self._config.transfer_cache_ttl_seconds > 0:
            self._transfer_cache = TTLCache(
                maxsize=max(1, self._config.transfer_cache_size),
                ttl=self._config.transfer_cache_ttl_seconds,
            )
        self._get_logger = get_logger
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def get_name(self) -> str:
        return f"RPC Direct ({self._data_source.get_name()})"

    async def is_healthy(self) -> bool:
        return await self._data_source.is_healthy()

    async def get_current_block(self, chain: str) -> int:
        return await self._data_source.get_block_number(chain)

    async def get_native_balance(self, wallet: str, chain: str) -> str:
        """Return the wallet's native balance on chain.

        Raises:
            UnsupportedChainOperationError: If chain is not an EVM chain.
        """
        if not get_chain_config(chain, self._config.chain_configs).is_evm:
            raise UnsupportedChainOperationError("get_native_balance", chain)
        return await self._data_source.get_balance(wallet, chain)

    # ---- trades ----

    async def get_trades_since(
        self,
        wallet: str,
        since: Since,
        chains: Sequence[str],
        to_block: int | None = None,
    ) -> TradesResult:
        """Return swaps of wallet on chains since a date or block.

        A failing chain is logged and contributes nothing; the other chains are
        returned. lowest_skipped_block is the lowest retryable block over all chains.
        """
        wallet_norm = normalize_address(wallet)
        with bound_contextvars(wallet_masked=mask_address(wallet_norm)):
            if not chains:
                self._logger.warning("get_trades_no_chains")
                return TradesResult()

            starts = await self._cursor.resolve(since, chains)
            failed = [chain for chain in chains if chain not in starts]
            results = await asyncio.gather(
                *(
                    self._trades_for_chain_safe(wallet_norm, chain, starts[chain], to_block)
                    for chain in chains
                    if chain in starts
                )
            )

            trades: list[Trade] = []
            skipped_by_chain: dict[str, int] = {}
            for chain, outcome in results:
                if outcome is None:
                    failed.append(chain)
                    continue
                chain_trades, lowest = outcome
                trades.extend(chain_trades)
                if lowest is not None:
                    skipped_by_chain[chain] = lowest

            self._logger.info(
                "get_trades_completed",
                chains=list(chains),
                trade_count=len(trades),
                skipped_blocks_by_chain=skipped_by_chain,
                failed_chains=failed,
            )
            return TradesResult(
                trades=tuple(trades),
                lowest_skipped_block=min(skipped_by_chain.values()) if skipped_by_chain else None,
                skipped_blocks_by_chain=skipped_by_chain,
                failed_chains=tuple(failed),
            )

    async def _trades_for_chain_safe(
        self,
        wallet: str,
        chain: str,
        from_block: int,
        to_block: int | None,
    ) -> tuple[str, tuple[list[Trade], int | None] | None]:
        """Run one chain; the outcome is None when the chain raised."""
        with bound_contextvars(chain=chain):
            try:
                outcome = await self._trades_for_chain(wallet, chain, from_block, to_block)
            except UnsupportedChainOperationError as e:
                self._logger.warning("get_trades_chain_unsupported", error_message=str(e))
                return chain, None
            except Exception as e:
                self._logger.exception(
                    "get_trades_chain_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                return chain, None
            return chain, outcome

    async def _trades_for_chain(
        self,
        wallet: str,
        chain: str,
        from_block: int,
        to_block: int | None,
    ) -> tuple[list[Trade], int | None]:
        if not get_chain_config(chain, self._config.chain_configs).is_evm:
            raise UnsupportedChainOperationError("get_trades_since", chain)

        current_block = await self._data_source.get_block_number(chain)
        transfers = await self._fetch_transfers(wallet, chain, from_block, to_block)
        groups = group_transfers_by_transaction(transfers, wallet)
        candidates = [g for g in groups if g.is_swap_candidate]

        tracker = SkipTracker(
            chain,
            current_block,
            self._config.max_skip_age_blocks,
            get_logger=self._get_logger,
        )
        semaphore = asyncio.Semaphore(max(1, self._config.receipt_concurrency))
        resolved = await asyncio.gather(
            *(self._resolve_candidate(g, chain, tracker, semaphore) for g in candidates)
        )
        trades = sorted(
            (t for t in resolved if t is not None),
            key=lambda t: (t.block_number, t.tx_hash),
        )
        self._logger.debug(
            "chain_trades_resolved",
            from_block=from_block,
            to_block=to_block,
            transfer_count=len(transfers),
            candidate_count=len(candidates),
            trade_count=len(trades),
            lowest_skipped_block=tracker.lowest_skipped_block,
        )
        return trades, tracker.lowest_skipped_block

    async def _resolve_candidate(
        self,
        group: TransferGroup,
        chain: str,
        tracker: SkipTracker,
        semaphore: asyncio.Semaphore,
    ) -> Trade | None:
        if not group.tx_hash:
            return None
        with bound_contextvars(tx_hash=group.tx_hash):
            async with semaphore:
                try:
                    receipt = await self._data_source.get_transaction_receipt(group.tx_hash, chain)
                except Exception as e:
                    self._logger.exception(
                        "receipt_fetch_failed",
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
                    tracker.record(group.tx_hash, group.block_number, "receipt_fetch_failed")
                    return None

            if receipt is None:
                tracker.record(group.tx_hash, group.block_number, "receipt_not_found")
                return None
            if not receipt.status:
                self._logger.info("swap_reverted_skipped", block=receipt.block_number)
                return None

            resolution = self._receipt_resolver.resolve(group, receipt)
            swap = resolution.swap
            if resolution.status is ResolutionStatus.INCONCLUSIVE and group.has_native_leg:
                swap = self._fallback_resolver.resolve(group)
            if swap is None:
                self._logger.debug(
                    "swap_not_detected",
                    resolution_status=resolution.status.value,
                    resolution_reason=resolution.reason,
                )
                return None

            if self._protocol_filter.has_filters(chain):
                try:
                    decision = await self._protocol_filter.check(chain, receipt)
                except Exception as e:
                    self._logger.exception(
                        "protocol_filter_lookup_failed",
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
                    return None
                if not decision.allowed or decision.protocol is None:
                    return None
                swap = swap.with_protocol(decision.protocol)

            return self._gas_enricher.enrich(swap, chain, receipt)

    # ---- transfers ----

    async def get_transfer_history(
        self,
        wallet: str,
        since: Since,
        chains: Sequence[str],
        to_block: int | None = None,
    ) -> list[Transfer]:
        """Return deposits and withdrawals of wallet on chains since a date or block.

        Raises:
            UnsupportedChainOperationError: If any chain is not an EVM chain.
        """
        for chain in chains:
            if not get_chain_config(chain, self._config.chain_configs).is_evm:
                raise UnsupportedChainOperationError("get_transfer_history", chain)

        wallet_norm = normalize_address(wallet)
        with bound_contextvars(wallet_masked=mask_address(wallet_norm)):
            if not chains:
                self._logger.warning("get_transfer_history_no_chains")
                return []

            starts = await self._cursor.resolve(since, chains)
            transfers: list[Transfer] = []
            for chain in chains:
                if chain not in starts:
                    continue
                with bound_contextvars(chain=chain):
                    try:
                        raw = await self._fetch_transfers(wallet_norm, chain, starts[chain], to_block)
                    except Exception as e:
                        self._logger.exception(
                            "get_transfer_history_chain_failed",
                            error_type=type(e).__name__,
                            error_message=str(e),
                        )
                        continue
                    groups = group_transfers_by_transaction(raw, wallet_norm)
                    transfers.extend(self._classifier.classify(groups, wallet_norm, chain))

            return sorted(transfers, key=lambda t: (t.timestamp, t.chain, t.block_number, t.tx_hash))

    async def _fetch_transfers(
        self,
        wallet: str,
        chain: str,
        from_block: int,
        to_block: int | None,
    ) -> list[RawTransfer]:
        """Return the legs of wallet on chain, reusing a recent fetch of the same range."""
        cache_key = (wallet, chain, from_block, to_block)
        if self._transfer_cache is not None:
            cached = self._transfer_cache.get(cache_key)
            if cached is not None:
                self._logger.debug("asset_transfers_cache_hit", transfer_count=len(cached))
                return list(cached)
        transfers = await self._fetch_transfer_pages(wallet, chain, from_block, to_block)
        if self._transfer_cache is not None:
            self._transfer_cache[cache_key] = list(transfers)
        return transfers

    async def _fetch_transfer_pages(
        self,
        wallet: str,
        chain: str,
        from_block: int,
        to_block: int | None,
    ) -> list[RawTransfer]:
        """Follow page keys until exhausted or max_transfer_pages is reached."""
        transfers: list[RawTransfer] = []
        page_key: str | None = None
        for _ in range(self._config.max_transfer_pages):
            result = await self._data_source.get_asset_transfers(
                wallet, chain, from_block, to_block, page_key
            )
            transfers.extend(result.transfers)
            page_key = result.page_key
            if page_key is None:
                return transfers
        self._logger.warning(
            "asset_transfers_page_limit_reached",
            max_transfer_pages=self._config.max_transfer_pages,
            transfer_count=len(transfers),
        )
        return transfers
