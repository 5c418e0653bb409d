from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any, Dict, List, Optional

from src.models.position import Position, TickerGroup
from src.models.signal import Rejection, Signal, SignalBatch

from .config import DEFAULT_ENGINE_CONFIG, merge_config
from .confluence import closest_pair
from .eligibility import EligibilityRules, evaluate
from .grouping import group_by_ticker
from .normalize import RecordLike, RecordNormalizer
from .ranking import BadgeThresholds, cap_and_badge, rank_signals
from .weights import call_score, put_score

logger = logging.getLogger(__name__)


def _ensure_records(records: Any) -> Iterable[RecordLike]:
    if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
        raise TypeError(f"Expected an iterable of trade records, got {type(records).__name__}")
    return records


class ConvictionScoringEngine:
    """Filters, scores and ranks tickers showing put-sold / call-bought confluence.

    Every call to :meth:`run` reprocesses the whole record set from scratch and
    keeps no state between calls.
    """

    def __init__(self, config: Dict[str, object] | None = None, base: Dict[str, object] | None = None):
        self.config = merge_config(config, base)
        self.rules = EligibilityRules(
            confluence_window_days=int(self.config["confluence_window_days"]),  # type: ignore[arg-type]
            min_distinct_trade_days=int(self.config["min_distinct_trade_days"]),  # type: ignore[arg-type]
            min_put_dte=int(self.config["min_put_dte"]),  # type: ignore[arg-type]
        )
        thresholds: Dict[str, Any] = dict(self.config["badge_thresholds"])  # type: ignore[call-overload]
        self.thresholds = BadgeThresholds(
            strong=float(thresholds["strong"]),
            notable=float(thresholds["notable"]),
        )
        self.multiplier = float(self.config["confluence_multiplier"])  # type: ignore[arg-type]
        self.max_signals = int(self.config["max_signals"])  # type: ignore[arg-type]

        overrides = config or {}
        if (
            self.multiplier != DEFAULT_ENGINE_CONFIG["confluence_multiplier"]
            and "badge_thresholds" not in overrides
        ):
            logger.warning(
                "confluence_multiplier changed to %s without retuning badge_thresholds", self.multiplier
            )

    def score_group(self, group: TickerGroup, today: date) -> Signal:
        """Score a group that has already passed the eligibility gate."""

        puts_total = put_score(group.puts, today)
        calls_total = call_score(group.calls)
        raw_score = puts_total + calls_total
        min_trade_date = min(position.trade_date for position in group.positions)
        max_expiry = max(position.expiry for position in group.positions)

        total_put_contracts = sum(put.contracts for put in group.puts)
        total_call_contracts = sum(call.contracts for call in group.calls)
        return Signal(
            ticker=group.ticker,
            total_put_contracts=total_put_contracts,
            total_call_contracts=total_call_contracts,
            total_contracts=total_put_contracts + total_call_contracts,
            put_score=puts_total,
            call_score=calls_total,
            raw_score=raw_score,
            score=raw_score * self.multiplier,
            days_active=max(1, (today - min_trade_date).days),
            distinct_trade_days=group.distinct_trade_days(),
            min_trade_date=min_trade_date,
            max_expiry=max_expiry,
            put_notional=sum(put.notional for put in group.puts),
            call_notional=sum(call.notional for call in group.calls),
            confluence=closest_pair(group),
            puts=list(group.puts),
            calls=list(group.calls),
        )

    def run(self, records: Iterable[RecordLike], today: Optional[date] = None) -> SignalBatch:
        """Run the full pipeline over ``records`` and return the ranked, badged batch."""

        normalizer = RecordNormalizer(today)
        anchor = normalizer.today
        positions = normalizer.normalize_active(_ensure_records(records))
        groups = group_by_ticker(positions)

        scored: List[Signal] = []
        rejections: List[Rejection] = []
        candidates = 0
        for ticker, group in groups.items():
            result = evaluate(group, anchor, self.rules)
            if result.is_candidate:
                candidates += 1
            if not result.eligible:
                logger.debug("Ticker %s rejected: %s", ticker, result.failed)
                rejections.append(Rejection(ticker=ticker, criterion=result.failed))  # type: ignore[arg-type]
                continue
            scored.append(self.score_group(group, anchor))

        ranked = rank_signals(scored)
        signals = cap_and_badge(ranked, self.max_signals, self.thresholds)
        logger.info(
            "Conviction scan as of %s: %d qualified of %d candidates (%d tracked), %d emitted",
            anchor.isoformat(),
            len(ranked),
            candidates,
            len(groups),
            len(signals),
        )
        return SignalBatch(
            as_of=anchor,
            signals=signals,
            qualified_count=len(ranked),
            candidate_count=candidates,
            tracked_count=len(groups),
            rejections=rejections,
        )


def positions_for_ticker(records: Iterable[RecordLike], ticker: str, today: Optional[date] = None) -> List[Position]:
    """Active positions of one ticker, in input order, for chart overlays."""

    wanted = ticker.strip().upper()
    if not wanted:
        return []
    normalizer = RecordNormalizer(today)
    return [position for position in normalizer.normalize_active(_ensure_records(records)) if position.ticker == wanted]


__all__ = ["ConvictionScoringEngine", "positions_for_ticker"]
