# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from spot_swap_sync.config import Settings, get_settings
from spot_swap_sync.clients.alchemy_rpc import AlchemyRpcClient
from spot_swap_sync.clients.http import AsyncHttpClient
from spot_swap_sync.models.chain import DEFAULT_CHAIN_CONFIGS
from spot_swap_sync.models.protocol_filter import ProtocolFilter
from spot_swap_sync.persistence.repositories.in_memory import (
    InMemorySeenTradeRepository,
    InMemorySyncStateRepository,
)
from spot_swap_sync.services.spot_provider import RpcSpotProvider, SpotEngineConfig
from spot_swap_sync.services.sync import SpotSyncService, SyncRunner


def build_engine_config(settings: Settings) -> SpotEngineConfig:
    """Turn settings into the immutable configuration the engine is built with."""
    filters = tuple(
        ProtocolFilter.create(
            protocol=f.protocol,
            chain=f.chain,
            router_address=f.router_address,
            swap_event_signature=f.swap_event_signature,
            factory_address=f.factory_address,
        )
        for f in settings.protocol_filters
    )
    return SpotEngineConfig(
        protocol_filters=filters,
        chain_configs=DEFAULT_CHAIN_CONFIGS,
        max_skip_age_blocks=settings.sync.max_skip_age_blocks,
        receipt_concurrency=settings.sync.receipt_concurrency,
        max_transfer_pages=settings.sync.max_transfer_pages,
        # Never reuse a range across poll cycles.
        transfer_cache_ttl_seconds=min(
            settings.sync.transfer_cache_ttl_seconds, settings.sync.poll_seconds / 2
        ),
    )


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, HTTP client, data source, engine and sync."""

    config = providers.Callable(get_settings)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    chain_data_source = providers.Singleton(
        AlchemyRpcClient,
        http_client=http_client,
        settings=config,
    )

    engine_config = providers.Singleton(build_engine_config, config)

    spot_provider = providers.Singleton(
        RpcSpotProvider,
        data_source=chain_data_source,
        config=engine_config,
    )

    sync_state_repository = providers.Singleton(InMemorySyncStateRepository)

    seen_trade_repository = providers.Singleton(InMemorySeenTradeRepository)

    spot_sync_service = providers.Singleton(
        SpotSyncService,
        provider=spot_provider,
        sync_state_repository=sync_state_repository,
        seen_trade_repository=seen_trade_repository,
        settings=config,
    )

    sync_runner = providers.Singleton(
        SyncRunner,
        sync_service=spot_sync_service,
        settings=config,
    )
