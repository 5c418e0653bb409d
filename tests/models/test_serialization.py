from __future__ import annotations

import json
from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from src.models import OptionType, Position, serialize_batch, serialize_position
from src.scoring import ConvictionScoringEngine

TODAY = date(2025, 1, 15)


def build_position(**overrides) -> Position:
    fields = {
        "ticker": "xyz",
        "option_type": OptionType.CALL,
        "strike": 110.0,
        "expiry": TODAY + timedelta(days=60),
        "trade_date": TODAY - timedelta(days=8),
        "contracts": 300,
        "original_premium": 2.0,
    }
    fields.update(overrides)
    return Position(**fields)


def test_position_is_an_immutable_value_object():
    position = build_position()

    assert position.ticker == "XYZ"
    assert position == build_position()
    with pytest.raises(ValidationError):
        position.contracts = 1


@pytest.mark.parametrize(
    "overrides",
    [
        {"contracts": 0},
        {"strike": -1.0},
        {"strike": float("nan")},
        {"expiry": TODAY - timedelta(days=8)},
    ],
)
def test_position_invariants(overrides):
    with pytest.raises(ValidationError):
        build_position(**overrides)


def test_unobserved_premium_has_no_notional():
    assert build_position(original_premium=float("nan")).notional == 0.0


def test_serialize_position_is_json_ready():
    payload = serialize_position(build_position())

    assert payload["option_type"] == "call"
    assert payload["expiry"] == "2025-03-16"
    assert payload["notional"] == pytest.approx(60_000.0)
    json.dumps(payload)


def test_serialize_batch_round_trips_through_json():
    records = [
        {"symbol": "XYZ", "strike": 100, "expiry": "2025-05-15", "trade_date": "1/5/2025", "contracts": 500, "premium": 3},
        {"symbol": "XYZ", "type": "call", "strike": 110, "expiry": "2025-03-16", "trade_date": "1/7/2025",
         "contracts": 300, "current_premium": 2},
        {"symbol": "ABC", "strike": 50, "expiry": "2025-05-15", "trade_date": "1/5/2025", "contracts": 5, "premium": 1},
    ]
    batch = ConvictionScoringEngine().run(records, today=TODAY)

    payload = json.loads(json.dumps(serialize_batch(batch)))

    assert payload["as_of"] == "2025-01-15"
    assert payload["qualified_count"] == 1
    assert payload["candidate_count"] == 1
    assert payload["tracked_count"] == 2
    assert payload["rejections"] == [{"ticker": "ABC", "criterion": "has_both_sides"}]
    signal = payload["signals"][0]
    assert signal["ticker"] == "XYZ"
    assert signal["badge"] == "WATCH"
    assert signal["score"] == pytest.approx(2175.0)
    assert signal["total_notional"] == pytest.approx(150_000.0 + 60_000.0)
    assert signal["puts"][0]["trade_date"] == "2025-01-05"
    assert batch.summary() == "1 of 1 tickers qualified (2 tracked)"
