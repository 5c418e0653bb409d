"""Configuration helpers for the CLI and API."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from src.providers import PositionDataProvider, create_provider

from .loader import AppSettings, get_settings, reset_settings_cache

DEFAULT_POSITIONS_PROVIDER = "file"


@lru_cache(maxsize=None)
def _get_position_provider(provider: Optional[str]) -> PositionDataProvider:
    name = (provider or os.getenv("POSITIONS_PROVIDER", DEFAULT_POSITIONS_PROVIDER)).strip().lower()
    try:
        return create_provider(name)
    except KeyError as exc:
        raise ValueError(f"Unsupported position data provider: {name}") from exc


def get_position_provider(provider: Optional[str] = None) -> PositionDataProvider:
    """Return a position data provider instance based on configuration."""

    return _get_position_provider(provider)


def provider_from_settings(settings: AppSettings) -> PositionDataProvider:
    """Build the provider described by ``settings``; ``POSITIONS_PROVIDER`` still wins."""

    override = os.getenv("POSITIONS_PROVIDER")
    if override:
        return get_position_provider(override)
    try:
        return create_provider(settings.provider.name, **settings.provider.settings)
    except KeyError as exc:
        raise ValueError(f"Unsupported position data provider: {settings.provider.name}") from exc


def reset_position_provider_cache() -> None:
    """Clear the cached provider instance (useful for tests)."""

    _get_position_provider.cache_clear()


__all__ = [
    "AppSettings",
    "DEFAULT_POSITIONS_PROVIDER",
    "get_position_provider",
    "get_settings",
    "provider_from_settings",
    "reset_position_provider_cache",
    "reset_settings_cache",
]
