"""Temporal confluence between sold puts and bought calls on one ticker."""

from __future__ import annotations

from typing import Optional

from src.models.position import TickerGroup
from src.models.signal import ConfluenceMatch

DEFAULT_WINDOW_DAYS = 7


def has_confluence(group: TickerGroup, window_days: int = DEFAULT_WINDOW_DAYS) -> bool:
    """True when any put/call pair was traded within ``window_days`` of each other.

    The window is inclusive. Per-ticker position counts stay small, so the
    full put x call scan is fine.
    """

    for put in group.puts:
        for call in group.calls:
            if abs((put.trade_date - call.trade_date).days) <= window_days:
                return True
    return False


def closest_pair(group: TickerGroup) -> Optional[ConfluenceMatch]:
    """Locate the put/call pair with the smallest trade-date gap.

    Among equally close pairs the one with the earlier anchor date wins; the
    anchor is the earlier of the pair's two trade dates.
    """

    best: Optional[ConfluenceMatch] = None
    for put in group.puts:
        for call in group.calls:
            gap = abs((put.trade_date - call.trade_date).days)
            anchor = min(put.trade_date, call.trade_date)
            if best is None or (gap, anchor) < (best.gap_days, best.anchor_date):
                best = ConfluenceMatch(
                    put_trade_date=put.trade_date,
                    call_trade_date=call.trade_date,
                    gap_days=gap,
                    anchor_date=anchor,
                )
    return best


__all__ = ["DEFAULT_WINDOW_DAYS", "closest_pair", "has_confluence"]
