from .position import OptionType, Position, RawTradeRecord, TickerGroup
from .serialization import (
    serialize_batch,
    serialize_position,
    serialize_signal,
)
from .signal import (
    Badge,
    ConfluenceMatch,
    EligibilityCriterion,
    Rejection,
    Signal,
    SignalBatch,
)

__all__ = [
    "Badge",
    "ConfluenceMatch",
    "EligibilityCriterion",
    "OptionType",
    "Position",
    "RawTradeRecord",
    "Rejection",
    "Signal",
    "SignalBatch",
    "TickerGroup",
    "serialize_batch",
    "serialize_position",
    "serialize_signal",
]
