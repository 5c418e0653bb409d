from __future__ import annotations

from datetime import date, timedelta

import pytest

from src.models import Badge, EligibilityCriterion
from src.scoring.engine import ConvictionScoringEngine, positions_for_ticker

TODAY = date(2025, 1, 15)


def trade(
    symbol: str,
    kind: str,
    traded_days_ago: int,
    expires_in: int,
    contracts: int,
    premium: float = 2.0,
    strike: float = 100.0,
) -> dict:
    return {
        "symbol": symbol,
        "type": kind,
        "strike": strike,
        "expiry": (TODAY + timedelta(days=expires_in)).isoformat(),
        "trade_date": (TODAY - timedelta(days=traded_days_ago)).isoformat(),
        "contracts": contracts,
        "original_premium": premium,
    }


def qualifying_pair(symbol: str, put_contracts: int = 500, call_contracts: int = 300) -> list:
    return [
        trade(symbol, "put", 10, 120, put_contracts, premium=3.0),
        trade(symbol, "call", 8, 60, call_contracts, premium=2.0, strike=110.0),
    ]


def test_end_to_end_example_scores_and_badges_watch():
    batch = ConvictionScoringEngine().run(qualifying_pair("XYZ"), today=TODAY)

    assert batch.qualified_count == 1
    assert batch.candidate_count == 1
    signal = batch.signals[0]
    assert signal.ticker == "XYZ"
    assert signal.put_score == pytest.approx(1000.0)
    assert signal.call_score == pytest.approx(450.0)
    assert signal.raw_score == pytest.approx(1450.0)
    assert signal.score == pytest.approx(2175.0)
    assert signal.badge is Badge.WATCH
    assert signal.total_put_contracts == 500
    assert signal.total_call_contracts == 300
    assert signal.total_contracts == 800
    assert signal.days_active == 10
    assert signal.distinct_trade_days == 2
    assert signal.min_trade_date == TODAY - timedelta(days=10)
    assert signal.max_expiry == TODAY + timedelta(days=120)
    assert signal.confluence is not None
    assert signal.confluence.gap_days == 2
    assert signal.confluence.anchor_date == TODAY - timedelta(days=10)


def test_pipeline_is_deterministic():
    records = qualifying_pair("AAA") + qualifying_pair("BBB", put_contracts=900) + qualifying_pair("CCC")
    engine = ConvictionScoringEngine()

    first = engine.run(records, today=TODAY)
    second = ConvictionScoringEngine().run(list(records), today=TODAY)

    assert first == second
    assert [signal.ticker for signal in first.signals] == ["BBB", "AAA", "CCC"]


def test_single_sided_tickers_never_qualify():
    records = [
        trade("PUTS", "put", 10, 400, 1_000_000),
        trade("PUTS", "put", 3, 400, 1_000_000),
        trade("CALLS", "call", 10, 400, 1_000_000, premium=9.0),
        trade("CALLS", "call", 3, 400, 1_000_000, premium=9.0),
    ]
    batch = ConvictionScoringEngine().run(records, today=TODAY)

    assert batch.signals == []
    assert batch.empty
    assert batch.candidate_count == 0
    assert batch.tracked_count == 2
    assert {rejection.criterion for rejection in batch.rejections} == {EligibilityCriterion.HAS_BOTH_SIDES}


@pytest.mark.parametrize("call_day, qualifies", [(7, True), (8, False)])
def test_confluence_window_boundary(call_day, qualifies):
    records = [
        trade("EDGE", "put", 20, 200, 100),
        trade("EDGE", "call", 20 - call_day, 60, 100),
    ]
    batch = ConvictionScoringEngine().run(records, today=TODAY)

    assert (batch.qualified_count == 1) is qualifies
    if not qualifies:
        assert batch.rejections[0].criterion is EligibilityCriterion.CONFLUENCE
        assert batch.candidate_count == 1


def test_output_is_capped_at_eight():
    records = []
    for index in range(11):
        records.extend(qualifying_pair(f"T{index:02d}", put_contracts=100 + index))
    batch = ConvictionScoringEngine().run(records, today=TODAY)

    assert batch.qualified_count == 11
    assert len(batch.signals) == 8
    assert batch.signals[0].ticker == "T10"
    scores = [signal.score for signal in batch.signals]
    assert scores == sorted(scores, reverse=True)


def test_fewer_qualifiers_than_cap_are_all_returned():
    batch = ConvictionScoringEngine().run(qualifying_pair("ONE") + qualifying_pair("TWO"), today=TODAY)

    assert len(batch.signals) == min(8, batch.qualified_count) == 2


def test_more_put_contracts_raise_score_and_rank():
    baseline = qualifying_pair("AAA", put_contracts=500) + qualifying_pair("BBB", put_contracts=520)
    boosted = qualifying_pair("AAA", put_contracts=600) + qualifying_pair("BBB", put_contracts=520)
    engine = ConvictionScoringEngine()

    before = engine.run(baseline, today=TODAY)
    after = engine.run(boosted, today=TODAY)

    assert after.get("AAA").score > before.get("AAA").score
    assert after.get("BBB").score == before.get("BBB").score
    assert [signal.ticker for signal in before.signals] == ["BBB", "AAA"]
    assert [signal.ticker for signal in after.signals] == ["AAA", "BBB"]


def test_ties_keep_first_seen_ticker_order():
    records = qualifying_pair("ZZZ") + qualifying_pair("AAA")
    batch = ConvictionScoringEngine().run(records, today=TODAY)

    assert [signal.ticker for signal in batch.signals] == ["ZZZ", "AAA"]


def test_unparseable_record_is_ignored():
    records = qualifying_pair("XYZ")
    bad = trade("XYZ", "put", 2, 400, 1_000_000)
    bad["expiry"] = "not-a-date"
    single_day = [trade("ABC", "put", 5, 200, 100), trade("ABC", "call", 5, 200, 100)]
    bad_other_day = trade("ABC", "call", 1, 200, 100)
    bad_other_day["trade_date"] = "not-a-date"

    clean = ConvictionScoringEngine().run(records + single_day, today=TODAY)
    dirty = ConvictionScoringEngine().run(records + [bad] + single_day + [bad_other_day], today=TODAY)

    assert dirty == clean
    assert dirty.get("XYZ").score == pytest.approx(2175.0)
    assert dirty.get("ABC") is None


def test_expired_positions_are_not_scored():
    records = qualifying_pair("XYZ") + [trade("XYZ", "put", 30, -1, 100_000)]
    batch = ConvictionScoringEngine().run(records, today=TODAY)

    assert batch.get("XYZ").total_put_contracts == 500


def test_badges_follow_absolute_thresholds():
    records = (
        qualifying_pair("BIG", put_contracts=60_000)
        + qualifying_pair("MID", put_contracts=30_000)
        + qualifying_pair("LOW")
    )
    batch = ConvictionScoringEngine().run(records, today=TODAY)

    assert [(signal.ticker, signal.badge) for signal in batch.signals] == [
        ("BIG", Badge.STRONG),
        ("MID", Badge.NOTABLE),
        ("LOW", Badge.WATCH),
    ]


def test_scoring_config_overrides_are_applied():
    records = []
    for index in range(4):
        records.extend(qualifying_pair(f"T{index}"))
    engine = ConvictionScoringEngine({"max_signals": 2, "badge_thresholds": {"notable": 1000}})

    batch = engine.run(records, today=TODAY)

    assert len(batch.signals) == 2
    assert batch.qualified_count == 4
    assert all(signal.badge is Badge.NOTABLE for signal in batch.signals)
    assert engine.thresholds.strong == 150_000.0


def test_partial_thresholds_layer_over_base_config():
    base = ConvictionScoringEngine({"max_signals": 3, "badge_thresholds": {"strong": 2100, "notable": 1000}}).config
    engine = ConvictionScoringEngine({"badge_thresholds": {"notable": 2000}}, base=base)

    assert engine.max_signals == 3
    assert engine.thresholds.strong == 2100
    assert engine.thresholds.notable == 2000
    assert engine.run(qualifying_pair("XYZ"), today=TODAY).signals[0].badge is Badge.STRONG


def test_multiplier_change_without_thresholds_warns(caplog):
    with caplog.at_level("WARNING", logger="src.scoring.engine"):
        engine = ConvictionScoringEngine({"confluence_multiplier": 1.0})

    assert engine.multiplier == 1.0
    assert "badge_thresholds" in caplog.text


def test_empty_input_returns_empty_batch():
    batch = ConvictionScoringEngine().run([], today=TODAY)

    assert batch.signals == []
    assert batch.qualified_count == 0
    assert batch.candidate_count == 0
    assert batch.as_of == TODAY


@pytest.mark.parametrize("bad_input", [None, 42, "records", {"symbol": "XYZ"}])
def test_non_iterable_input_is_a_contract_violation(bad_input):
    with pytest.raises(TypeError):
        ConvictionScoringEngine().run(bad_input, today=TODAY)


def test_positions_for_ticker_returns_active_positions_in_order():
    records = [
        trade("xyz ", "put", 10, 120, 500),
        trade("ABC", "put", 10, 120, 500),
        trade("XYZ", "call", 8, 60, 300),
        trade("XYZ", "put", 40, -5, 300),
    ]

    positions = positions_for_ticker(records, "xyz", today=TODAY)

    assert [position.contracts for position in positions] == [500, 300]
    assert all(position.ticker == "XYZ" for position in positions)
