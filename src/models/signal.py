from __future__ import annotations

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .position import Position


class Badge(str, Enum):
    STRONG = "STRONG"
    NOTABLE = "NOTABLE"
    WATCH = "WATCH"


class EligibilityCriterion(str, Enum):
    """Qualification gates, listed in evaluation order."""

    HAS_BOTH_SIDES = "has_both_sides"
    CONFLUENCE = "confluence"
    MULTI_DAY = "multi_day"
    PUT_TENOR = "put_tenor"


class ConfluenceMatch(BaseModel):
    """Closest put/call pair by trade date for one ticker."""

    model_config = ConfigDict(frozen=True)

    put_trade_date: date
    call_trade_date: date
    gap_days: int
    anchor_date: date


class Signal(BaseModel):
    """Scored conviction signal for one qualifying ticker."""

    model_config = ConfigDict(frozen=True)

    ticker: str
    total_put_contracts: int
    total_call_contracts: int
    total_contracts: int
    put_score: float
    call_score: float
    raw_score: float
    score: float
    days_active: int
    distinct_trade_days: int
    min_trade_date: date
    max_expiry: date
    put_notional: float = 0.0
    call_notional: float = 0.0
    confluence: Optional[ConfluenceMatch] = None
    badge: Optional[Badge] = None
    puts: List[Position] = Field(default_factory=list)
    calls: List[Position] = Field(default_factory=list)

    @property
    def total_notional(self) -> float:
        return self.put_notional + self.call_notional

    def with_badge(self, badge: Badge) -> "Signal":
        return self.model_copy(update={"badge": badge})


class Rejection(BaseModel):
    model_config = ConfigDict(frozen=True)

    ticker: str
    criterion: EligibilityCriterion


class SignalBatch(BaseModel):
    """Ranked, capped signals plus the counts a caller needs for display."""

    model_config = ConfigDict(frozen=True)

    as_of: date
    signals: List[Signal] = Field(default_factory=list)
    qualified_count: int = 0
    candidate_count: int = 0
    tracked_count: int = 0
    rejections: List[Rejection] = Field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.signals

    def get(self, ticker: str) -> Optional[Signal]:
        wanted = ticker.strip().upper()
        return next((signal for signal in self.signals if signal.ticker == wanted), None)

    def summary(self) -> str:
        return f"{self.qualified_count} of {self.candidate_count} tickers qualified ({self.tracked_count} tracked)"


__all__ = [
    "Badge",
    "ConfluenceMatch",
    "EligibilityCriterion",
    "Rejection",
    "Signal",
    "SignalBatch",
]
