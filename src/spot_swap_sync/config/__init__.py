"""Configuration subpackage."""

from spot_swap_sync.config.config import (
    ApiSettings,
    AppSettings,
    LoggingSettings,
    ProtocolFilterSettings,
    Settings,
    SyncSettings,
    get_settings,
)

__all__ = [
    "ApiSettings",
    "AppSettings",
    "LoggingSettings",
    "ProtocolFilterSettings",
    "Settings",
    "SyncSettings",
    "get_settings",
]
