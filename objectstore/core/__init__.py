"""Core: settings and their cached accessors."""

from objectstore.core.config import (
    Settings,
    StorageSettings,
    get_settings,
    get_storage_settings,
    reset_storage_config_cache,
)

__all__ = [
    "Settings",
    "StorageSettings",
    "get_settings",
    "get_storage_settings",
    "reset_storage_config_cache",
]
