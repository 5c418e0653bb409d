"""Position data providers feeding raw trade rows to the engine."""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Type

from .base import DataNotAvailable, PositionDataProvider, ProviderError

_PROVIDER_REGISTRY: Dict[str, str] = {
    "file": "src.providers.json_file:JsonFilePositionProvider",
    "http": "src.providers.http:HttpPositionProvider",
}


def create_provider(provider: str, **settings: Any) -> PositionDataProvider:
    """Instantiate a position data provider by name.

    Args:
        provider: The name of the provider to load.
        **settings: Keyword arguments forwarded to the provider constructor.

    Returns:
        An instance of the requested provider implementation.

    Raises:
        KeyError: If the provider name is unknown.
    """

    normalized = provider.strip().lower()
    try:
        dotted_path = _PROVIDER_REGISTRY[normalized]
    except KeyError as exc:
        raise KeyError(f"Unknown position data provider: {provider}") from exc

    module_name, class_name = dotted_path.split(":", 1)
    module = import_module(module_name)
    provider_cls: Type[PositionDataProvider] = getattr(module, class_name)
    return provider_cls(**settings)


__all__ = ["DataNotAvailable", "PositionDataProvider", "ProviderError", "create_provider"]
