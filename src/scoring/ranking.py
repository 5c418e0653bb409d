from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from src.models.signal import Badge, Signal


@dataclass(frozen=True)
class BadgeThresholds:
    strong: float = 150_000.0
    notable: float = 75_000.0

    def badge_for(self, score: float) -> Badge:
        # Strictly greater-than: a score sitting on a threshold takes the lower tier.
        if score > self.strong:
            return Badge.STRONG
        if score > self.notable:
            return Badge.NOTABLE
        return Badge.WATCH


def rank_signals(signals: Sequence[Signal]) -> List[Signal]:
    """Sort by score, highest first. The sort is stable so ties keep input order."""

    return sorted(signals, key=lambda signal: signal.score, reverse=True)


def cap_and_badge(ranked: Sequence[Signal], limit: int, thresholds: BadgeThresholds) -> List[Signal]:
    return [signal.with_badge(thresholds.badge_for(signal.score)) for signal in ranked[: max(limit, 0)]]


__all__ = ["BadgeThresholds", "cap_and_badge", "rank_signals"]
