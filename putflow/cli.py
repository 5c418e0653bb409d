"""Command line interface for the conviction signals engine."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from src.config import get_settings, provider_from_settings
from src.models import SignalBatch, serialize_batch
from src.narrative import build_narrative_prompt, format_date, format_notional, format_score
from src.providers import ProviderError
from src.providers.json_file import JsonFilePositionProvider
from src.scoring import ConvictionScoringEngine

LOGGER = logging.getLogger("putflow.cli")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _parse_today(raw: str) -> date:
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("Expected --today in YYYY-MM-DD format") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rank tickers by put-sold / call-bought conviction")
    parser.add_argument("command", choices=["signals"], help="Command to execute")
    parser.add_argument(
        "--positions",
        type=Path,
        default=None,
        help="Read trade records from this JSON file instead of the configured provider",
    )
    parser.add_argument("--env", type=str, default=None, help="Settings environment (defaults to APP_ENV or dev)")
    parser.add_argument("--today", type=_parse_today, default=None, help="Anchor date, e.g. 2025-01-15")
    parser.add_argument("--json", action="store_true", help="Print the serialized batch as JSON")
    parser.add_argument("--prompt", type=str, default=None, metavar="TICKER", help="Print the narrative prompt")
    parser.add_argument("--log-level", type=str, default=None, help="Override the configured log level")
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def _signal_rows(batch: SignalBatch) -> List[Dict[str, Any]]:
    return [
        {
            "rank": index,
            "ticker": signal.ticker,
            "badge": signal.badge.value if signal.badge else "",
            "score": format_score(signal.score),
            "puts": signal.total_put_contracts,
            "calls": signal.total_call_contracts,
            "notional": format_notional(signal.total_notional),
            "days_active": signal.days_active,
            "window": f"{format_date(signal.min_trade_date)} -> {format_date(signal.max_expiry)}",
        }
        for index, signal in enumerate(batch.signals, start=1)
    ]


def _display(batch: SignalBatch) -> None:
    if batch.empty:
        print("No signals found.")
        print(f"{batch.tracked_count} tickers tracked, none met the conviction criteria.")
        return
    frame = pd.DataFrame(_signal_rows(batch))
    with pd.option_context("display.max_columns", None, "display.width", 160):
        print(frame.to_string(index=False))
    print(f"TOP SIGNALS {batch.as_of.isoformat()}: {batch.summary()}")


def run_from_args(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings(args.env)
    _configure_logging(args.log_level or settings.logging.level)

    provider = JsonFilePositionProvider(args.positions) if args.positions else provider_from_settings(settings)
    try:
        records = provider.load_records()
    except ProviderError as exc:
        LOGGER.error("Could not load positions from %s provider: %s", provider.name, exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    engine = ConvictionScoringEngine(settings.scoring_dict())
    batch = engine.run(records, today=args.today)

    if args.prompt:
        signal = batch.get(args.prompt)
        if signal is None:
            print(f"error: no signal emitted for {args.prompt.upper()}", file=sys.stderr)
            return 1
        print(build_narrative_prompt(signal, batch.as_of))
        return 0

    if args.json:
        print(json.dumps(serialize_batch(batch), indent=2))
        return 0

    _display(batch)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_from_args(argv)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
