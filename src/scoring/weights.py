from __future__ import annotations

import math
from datetime import date
from typing import Iterable

from src.models.position import Position

UNOBSERVED_PREMIUM_WEIGHT = 1.5


def dte_weight(dte: int) -> float:
    """Longer-dated puts express a longer accumulation horizon."""

    if dte >= 180:
        return 3.0
    if dte >= 90:
        return 2.0
    if dte >= 30:
        return 1.5
    return 1.0


def premium_weight(premium: float) -> float:
    """Weight a bought call by what was paid for it.

    A missing or zero premium means the price has not been observed yet and
    gets the neutral weight.
    """

    if not math.isfinite(premium) or premium == 0:
        return UNOBSERVED_PREMIUM_WEIGHT
    if premium > 5:
        return 2.0
    if premium >= 1:
        return 1.5
    return 1.0


def put_score(puts: Iterable[Position], today: date) -> float:
    return float(sum(put.contracts * dte_weight(put.days_to_expiry(today)) for put in puts))


def call_score(calls: Iterable[Position]) -> float:
    return float(sum(call.contracts * premium_weight(call.original_premium) for call in calls))


__all__ = ["UNOBSERVED_PREMIUM_WEIGHT", "call_score", "dte_weight", "premium_weight", "put_score"]
