from __future__ import annotations

import copy
from typing import Dict

# Badge thresholds are calibrated against the confluence multiplier and the
# weight tiers in weights.py; retune them together.
DEFAULT_ENGINE_CONFIG: Dict[str, object] = {
    "confluence_window_days": 7,
    "min_distinct_trade_days": 2,
    "min_put_dte": 90,
    "confluence_multiplier": 1.5,
    "max_signals": 8,
    "badge_thresholds": {
        "strong": 150_000.0,
        "notable": 75_000.0,
    },
}


def merge_config(
    overrides: Dict[str, object] | None, base: Dict[str, object] | None = None
) -> Dict[str, object]:
    """Layer ``overrides`` over ``base`` (the defaults when omitted), merging thresholds per key."""

    merged = copy.deepcopy(base if base is not None else DEFAULT_ENGINE_CONFIG)
    if not overrides:
        return merged
    for key, value in overrides.items():
        if key == "badge_thresholds":
            merged["badge_thresholds"] = {
                **merged["badge_thresholds"],  # type: ignore[dict-item]
                **dict(value or {}),  # type: ignore[call-overload]
            }
        else:
            merged[key] = value
    return merged


__all__ = ["DEFAULT_ENGINE_CONFIG", "merge_config"]
