from .formatting import format_date, format_notional, format_score, format_strike
from .prompt import NARRATIVE_SYSTEM_PROMPT, build_narrative_prompt, format_position_line

__all__ = [
    "NARRATIVE_SYSTEM_PROMPT",
    "build_narrative_prompt",
    "format_date",
    "format_notional",
    "format_position_line",
    "format_score",
    "format_strike",
]
