"""Hard qualification gate applied before a ticker is scored."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from src.models.position import TickerGroup
from src.models.signal import EligibilityCriterion

from .confluence import has_confluence


@dataclass(frozen=True)
class EligibilityRules:
    confluence_window_days: int = 7
    min_distinct_trade_days: int = 2
    min_put_dte: int = 90


@dataclass(frozen=True)
class EligibilityResult:
    ticker: str
    failed: Optional[EligibilityCriterion] = None

    @property
    def eligible(self) -> bool:
        return self.failed is None

    @property
    def is_candidate(self) -> bool:
        """Whether the group carried both a put and a call."""

        return self.failed is not EligibilityCriterion.HAS_BOTH_SIDES


def evaluate(group: TickerGroup, today: date, rules: EligibilityRules = EligibilityRules()) -> EligibilityResult:
    """Check the criteria in order and stop at the first failure."""

    if not group.has_both_sides:
        return EligibilityResult(group.ticker, EligibilityCriterion.HAS_BOTH_SIDES)
    if not has_confluence(group, rules.confluence_window_days):
        return EligibilityResult(group.ticker, EligibilityCriterion.CONFLUENCE)
    if group.distinct_trade_days() < rules.min_distinct_trade_days:
        return EligibilityResult(group.ticker, EligibilityCriterion.MULTI_DAY)
    if not any(put.days_to_expiry(today) >= rules.min_put_dte for put in group.puts):
        return EligibilityResult(group.ticker, EligibilityCriterion.PUT_TENOR)
    return EligibilityResult(group.ticker)


__all__ = ["EligibilityResult", "EligibilityRules", "evaluate"]
