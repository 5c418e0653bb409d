"""Convenient exports for the conviction scoring pipeline."""

from .config import DEFAULT_ENGINE_CONFIG, merge_config
from .confluence import closest_pair, has_confluence
from .dates import parse_date
from .eligibility import EligibilityResult, EligibilityRules, evaluate
from .engine import ConvictionScoringEngine, positions_for_ticker
from .grouping import group_by_ticker
from .normalize import RecordNormalizer, normalize_record
from .ranking import BadgeThresholds, cap_and_badge, rank_signals
from .weights import call_score, dte_weight, premium_weight, put_score

__all__ = [
    "BadgeThresholds",
    "ConvictionScoringEngine",
    "DEFAULT_ENGINE_CONFIG",
    "EligibilityResult",
    "EligibilityRules",
    "RecordNormalizer",
    "call_score",
    "cap_and_badge",
    "closest_pair",
    "dte_weight",
    "evaluate",
    "group_by_ticker",
    "has_confluence",
    "merge_config",
    "normalize_record",
    "parse_date",
    "positions_for_ticker",
    "premium_weight",
    "put_score",
    "rank_signals",
]
