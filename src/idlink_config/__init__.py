"""Shared application configuration package."""

from .settings import (
    MIN_PASSWORD_HASH_ROUNDS,
    Settings,
    clear_settings_cache,
    get_config_dir,
    get_settings,
)

__all__ = [
    "MIN_PASSWORD_HASH_ROUNDS",
    "Settings",
    "clear_settings_cache",
    "get_config_dir",
    "get_settings",
]
