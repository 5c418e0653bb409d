from __future__ import annotations

import math
from datetime import date
from enum import Enum
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class OptionType(str, Enum):
    PUT = "put"
    CALL = "call"


class RawTradeRecord(BaseModel):
    """Loosely typed trade row as exported by the position data provider.

    Every field is optional and untyped on purpose: coercion and validation
    happen in the normalizer, which drops rows it cannot use.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    symbol: Any = None
    strike: Any = None
    expiry: Any = None
    contracts: Any = None
    trade_date: Any = Field(default=None, alias="tradeDate")
    original_premium: Any = None
    current_premium: Any = None
    premium: Any = None
    option_type: Any = Field(default=None, alias="type")


class Position(BaseModel):
    """Canonical, validated options trade tied to one ticker."""

    model_config = ConfigDict(frozen=True)

    ticker: str
    option_type: OptionType
    strike: float
    expiry: date
    trade_date: date
    contracts: int
    original_premium: float

    @field_validator("ticker")
    @classmethod
    def normalize_ticker(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("strike")
    @classmethod
    def positive_strike(cls, value: float) -> float:
        if not math.isfinite(value) or value <= 0:
            raise ValueError("strike must be a positive finite number")
        return value

    @field_validator("contracts")
    @classmethod
    def positive_contracts(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("contracts must be positive")
        return value

    @model_validator(mode="after")
    def expiry_after_trade(self) -> "Position":
        if self.expiry <= self.trade_date:
            raise ValueError("expiry must fall after trade_date")
        return self

    @property
    def is_put(self) -> bool:
        return self.option_type is OptionType.PUT

    @property
    def notional(self) -> float:
        # Premium is quoted per share; one contract covers 100 shares.
        if not math.isfinite(self.original_premium):
            return 0.0
        return self.contracts * self.original_premium * 100

    def days_to_expiry(self, today: date) -> int:
        return (self.expiry - today).days

    def is_active(self, today: date) -> bool:
        return self.expiry >= today


class TickerGroup(BaseModel):
    """All active positions of one underlying, split by option type."""

    model_config = ConfigDict(frozen=True)

    ticker: str
    puts: List[Position] = Field(default_factory=list)
    calls: List[Position] = Field(default_factory=list)

    @property
    def positions(self) -> List[Position]:
        return [*self.puts, *self.calls]

    @property
    def has_both_sides(self) -> bool:
        return bool(self.puts) and bool(self.calls)

    def distinct_trade_days(self) -> int:
        return len({position.trade_date for position in self.positions})


__all__ = ["OptionType", "Position", "RawTradeRecord", "TickerGroup"]
