# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, SYNC__CHAINS.
"""

from __future__ import annotations

from datetime import datetime
from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "spot-swap-sync"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/spot_swap_sync.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class ApiSettings(BaseSettings):
    """Configuration for the Alchemy JSON-RPC endpoints (HTTP)."""

    model_config = SettingsConfigDict(extra="ignore")

    alchemy_api_key: Optional[str] = Field(default=None, description="Alchemy API key.")
    alchemy_url_template: str = Field(
        default="https://{network}.g.alchemy.com/v2/{api_key}",
        description="Per-network RPC URL; {network} and {api_key} are substituted.",
    )
    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="HTTP request timeout in seconds.",
    )
    max_retries: int = Field(
        default=4,
        ge=1,
        le=20,
        description="Maximum number of attempts for a failed request.",
    )
    receipt_cache_size: int = Field(
        default=4096,
        ge=1,
        le=100_000,
        description="Number of mined receipts kept in memory (LRU).",
    )


class SyncSettings(BaseSettings):
    """Configuration for incremental wallet synchronization (polling)."""

    model_config = SettingsConfigDict(extra="ignore")

    # Raw strings from env so pydantic-settings does not try to JSON-decode them.
    wallets_raw: str = Field(
        default="",
        description="Wallet addresses to sync, comma-separated. Env: SYNC__WALLETS.",
        validation_alias="wallets",
    )
    chains_raw: str = Field(
        default="base",
        description="Chains to sync, comma-separated. Env: SYNC__CHAINS.",
        validation_alias="chains",
    )
    period_start: Optional[datetime] = Field(
        default=None,
        description="Start of the monitored period; first sync scans from here.",
    )
    poll_seconds: float = Field(default=60.0, ge=1.0, le=3600.0)
    max_skip_age_blocks: int = Field(
        default=1800,
        ge=0,
        description="Unresolved transactions older than this many blocks are not retried.",
    )
    retry_window_blocks: int = Field(
        default=10,
        ge=1,
        le=10_000,
        description="Blocks re-scanned behind the last scanned block on each cycle.",
    )
    max_transfer_pages: int = Field(default=200, ge=1, le=10_000)
    transfer_cache_ttl_seconds: float = Field(
        default=30.0,
        ge=0.0,
        le=3600.0,
        description="Seconds a fetched transfer range is reused within a cycle (0 disables).",
    )
    receipt_concurrency: int = Field(default=8, ge=1, le=64)

    @computed_field
    @property
    def wallets(self) -> list[str]:
        """Parse comma-separated wallets_raw into list of stripped strings."""
        if not self.wallets_raw or not self.wallets_raw.strip():
            return []
        return [s.strip() for s in self.wallets_raw.split(",") if s.strip()]

    @computed_field
    @property
    def chains(self) -> list[str]:
        """Parse comma-separated chains_raw into lowercase chain names."""
        return [s.strip().lower() for s in self.chains_raw.split(",") if s.strip()]


class ProtocolFilterSettings(BaseModel):
    """One allow-listed (router, swap event) pair. Env: PROTOCOL_FILTERS as a JSON list."""

    protocol: str
    chain: str
    router_address: str
    swap_event_signature: str
    factory_address: Optional[str] = None


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, SYNC__POLL_SECONDS.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    sync: SyncSettings = Field(default_factory=SyncSettings)
    protocol_filters: list[ProtocolFilterSettings] = Field(default_factory=list)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as flat keys or nested dicts, e.g.:
        - from_env(api__timeout_seconds=30)
        - from_env(sync={"poll_seconds": 30})

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from spot_swap_sync.config import get_settings

        settings = get_settings()
        max_age = settings.sync.max_skip_age_blocks
    """
    return Settings()
