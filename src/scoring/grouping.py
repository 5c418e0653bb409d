from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from src.models.position import Position, TickerGroup


def group_by_ticker(positions: Iterable[Position]) -> Dict[str, TickerGroup]:
    """Partition positions into one group per ticker, keeping first-seen ticker order.

    Positions with a blank ticker are dropped. Within a group, puts and calls
    keep their input order.
    """

    buckets: Dict[str, Tuple[List[Position], List[Position]]] = {}
    for position in positions:
        ticker = position.ticker.strip().upper()
        if not ticker:
            continue
        puts, calls = buckets.setdefault(ticker, ([], []))
        (puts if position.is_put else calls).append(position)

    return {ticker: TickerGroup(ticker=ticker, puts=puts, calls=calls) for ticker, (puts, calls) in buckets.items()}


__all__ = ["group_by_ticker"]
