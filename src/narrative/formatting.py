"""Compact number formatting shared by the prompt builder and the CLI table."""

from __future__ import annotations

import math
from datetime import date


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_score(score: float) -> str:
    if score >= 1e6:
        return f"{score / 1e6:.1f}M"
    if score >= 1e3:
        return f"{_round_half_up(score / 1e3)}K"
    return f"{score:g}"


def format_notional(value: float) -> str:
    if value >= 1e6:
        return f"${value / 1e6:.1f}M"
    if value >= 1e3:
        return f"${_round_half_up(value / 1e3)}K"
    return f"${_round_half_up(value)}"


def format_strike(strike: float) -> str:
    return f"{strike:.0f}" if float(strike).is_integer() else f"{strike:.2f}"


def format_date(value: date) -> str:
    return value.strftime("%b %d, %Y")


__all__ = ["format_date", "format_notional", "format_score", "format_strike"]
