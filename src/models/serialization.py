"""Serialization helpers shared between the CLI and the API."""

from __future__ import annotations

from typing import Any, Dict

from .position import Position
from .signal import Signal, SignalBatch


def serialize_position(position: Position) -> Dict[str, Any]:
    """Return a JSON-compatible representation of a position."""

    payload = position.model_dump(mode="json")
    payload["notional"] = position.notional
    return payload


def serialize_signal(signal: Signal) -> Dict[str, Any]:
    """Return a JSON-compatible representation of a signal."""

    payload = signal.model_dump(mode="json")
    payload["total_notional"] = signal.total_notional
    return payload


def serialize_batch(batch: SignalBatch) -> Dict[str, Any]:
    """Return a JSON-compatible payload for a ranked signal batch."""

    payload = batch.model_dump(mode="json")
    payload["signals"] = [serialize_signal(signal) for signal in batch.signals]
    return payload


__all__ = [
    "serialize_batch",
    "serialize_position",
    "serialize_signal",
]
