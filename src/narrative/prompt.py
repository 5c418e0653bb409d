"""Render a signal into the text prompt handed to the narrative generator.

The generator itself (an LLM behind an HTTP proxy) lives outside this
package; only the prompt shape is defined here.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from src.models.position import Position
from src.models.signal import Signal

from .formatting import format_date, format_notional, format_score, format_strike

NARRATIVE_SYSTEM_PROMPT = (
    "You are an expert options flow analyst. Analyze the following institutional "
    "options flow data and write a concise 3-4 sentence trade narrative in the "
    "style of a professional trader. Focus on: what the flow implies directionally, "
    "key strike levels to watch, any notable patterns (repeat flow, large size, "
    "unusual expiry), and a specific actionable idea. Be direct and confident. "
    "Do not use bullet points. Write in plain conversational trader language."
)


def format_position_line(position: Position, today: date) -> str:
    side = "PUT SOLD" if position.is_put else "CALL BOUGHT"
    suffix = "P" if position.is_put else "C"
    return (
        f"{side} {position.expiry.isoformat()} | {format_strike(position.strike)}{suffix} | "
        f"{position.contracts:,}x | {format_notional(position.notional)} | "
        f"DTE {position.days_to_expiry(today)} | traded {position.trade_date.isoformat()}"
    )


def build_narrative_prompt(signal: Signal, today: Optional[date] = None) -> str:
    """Structured prompt for one signal: header, totals, then one line per position."""

    anchor = today or date.today()
    badge = signal.badge.value if signal.badge else "UNRATED"
    lines: List[str] = [
        f"Ticker: {signal.ticker}",
        f"Conviction: {badge} (score {format_score(signal.score)})",
        "Strategy: PUT SOLD + CALL BOUGHT (bullish)",
        (
            f"Contracts: {signal.total_contracts:,} total "
            f"({signal.total_put_contracts:,} puts / {signal.total_call_contracts:,} calls)"
        ),
        (
            f"Notional: {format_notional(signal.total_notional)} "
            f"(puts {format_notional(signal.put_notional)} / calls {format_notional(signal.call_notional)})"
        ),
        (
            f"Activity: {signal.distinct_trade_days} trade days over {signal.days_active} days, "
            f"{format_date(signal.min_trade_date)} -> {format_date(signal.max_expiry)}"
        ),
    ]
    if signal.confluence is not None:
        lines.append(
            f"Confluence: put and call traded {signal.confluence.gap_days} days apart "
            f"(from {signal.confluence.anchor_date.isoformat()})"
        )
    lines.append("Positions:")
    lines.extend(f"- {format_position_line(position, anchor)}" for position in [*signal.puts, *signal.calls])
    return "\n".join(lines)


__all__ = ["NARRATIVE_SYSTEM_PROMPT", "build_narrative_prompt", "format_position_line"]
