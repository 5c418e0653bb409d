"""Core abstractions for position data providers."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List


class ProviderError(Exception):
    """Base exception raised for provider related failures."""


class DataNotAvailable(ProviderError):
    """Raised when the position export does not exist at the source."""


def decode_records(payload: str, source: str) -> List[Dict[str, Any]]:
    """Decode a JSON array of trade rows, rejecting anything else."""

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise ProviderError(f"Malformed JSON in {source}: {exc}") from exc
    if not isinstance(data, list):
        raise ProviderError(f"Expected a JSON array of trade records in {source}")
    return data


class PositionDataProvider(ABC):
    """Interface implemented by concrete position sources."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider identifier."""

    @abstractmethod
    def load_records(self) -> List[Dict[str, Any]]:
        """Return the raw trade rows as a materialized list."""


__all__ = ["DataNotAvailable", "PositionDataProvider", "ProviderError", "decode_records"]
