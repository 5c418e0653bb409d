"""Record normalizer: raw trade rows to canonical positions."""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from src.models.position import OptionType, Position, RawTradeRecord

from .dates import parse_date

logger = logging.getLogger(__name__)

PREMIUM_FIELDS = ("original_premium", "current_premium", "premium")

RecordLike = Union[RawTradeRecord, Mapping[str, Any]]


def coerce_float(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or ``None``."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(",", "").lstrip("$")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def coerce_contracts(value: Any) -> Optional[int]:
    number = coerce_float(value)
    if number is None:
        return None
    contracts = int(number)
    return contracts if contracts > 0 else None


def resolve_premium(record: RawTradeRecord) -> Optional[float]:
    """First finite premium among original, current and plain premium."""

    for field in PREMIUM_FIELDS:
        premium = coerce_float(getattr(record, field))
        if premium is not None:
            return premium
    return None


def resolve_option_type(value: Any) -> OptionType:
    if value is None:
        return OptionType.PUT
    if str(value).strip().lower() == OptionType.CALL.value:
        return OptionType.CALL
    return OptionType.PUT


def _as_record(raw: RecordLike) -> Optional[RawTradeRecord]:
    if isinstance(raw, RawTradeRecord):
        return raw
    if isinstance(raw, Mapping):
        try:
            return RawTradeRecord.model_validate(dict(raw))
        except ValidationError:
            return None
    return None


def normalize_record(raw: RecordLike) -> Optional[Position]:
    """Build a :class:`Position` from one raw row, or ``None`` when it is unusable."""

    record = _as_record(raw)
    if record is None:
        return None

    expiry = parse_date(record.expiry)
    trade_date = parse_date(record.trade_date)
    contracts = coerce_contracts(record.contracts)
    premium = resolve_premium(record)
    strike = coerce_float(record.strike)
    if expiry is None or trade_date is None or contracts is None or premium is None or strike is None:
        return None

    try:
        return Position(
            ticker=str(record.symbol if record.symbol is not None else ""),
            option_type=resolve_option_type(record.option_type),
            strike=strike,
            expiry=expiry,
            trade_date=trade_date,
            contracts=contracts,
            original_premium=premium,
        )
    except ValidationError:
        return None


class RecordNormalizer:
    """Turns raw trade rows into active positions relative to one ``today`` anchor."""

    def __init__(self, today: Optional[date] = None):
        self.today = today or date.today()

    def normalize(self, records: Iterable[RecordLike]) -> List[Position]:
        positions: List[Position] = []
        dropped = 0
        for raw in records:
            position = normalize_record(raw)
            if position is None:
                dropped += 1
                continue
            positions.append(position)
        if dropped:
            logger.debug("Dropped %d malformed trade records", dropped)
        return positions

    def active(self, positions: Iterable[Position]) -> List[Position]:
        return [position for position in positions if position.is_active(self.today)]

    def normalize_active(self, records: Iterable[RecordLike]) -> List[Position]:
        return self.active(self.normalize(records))


__all__ = [
    "PREMIUM_FIELDS",
    "RecordNormalizer",
    "coerce_contracts",
    "coerce_float",
    "normalize_record",
    "resolve_option_type",
    "resolve_premium",
]
