"""FastAPI application exposing the in-process conviction scoring engine."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field, ValidationError

from src.config import get_settings, provider_from_settings
from src.config.loader import ScoringOverrides, ScoringSettings
from src.models import serialize_batch, serialize_position
from src.narrative import NARRATIVE_SYSTEM_PROMPT, build_narrative_prompt
from src.providers import DataNotAvailable, PositionDataProvider, ProviderError
from src.scoring import ConvictionScoringEngine, merge_config, positions_for_ticker

logger = logging.getLogger(__name__)

app = FastAPI(title="Put Flow Conviction Signals API", version="1.0.0")


class SignalsRequest(BaseModel):
    records: List[Dict[str, Any]] = Field(default_factory=list)
    today: Optional[date] = None
    scoring_config: ScoringOverrides = Field(default_factory=ScoringOverrides)


class PromptResponse(BaseModel):
    ticker: str
    system: str
    prompt: str


def get_engine() -> ConvictionScoringEngine:
    return ConvictionScoringEngine(get_settings().scoring_dict())


def get_provider() -> PositionDataProvider:
    return provider_from_settings(get_settings())


def _load_records(provider: PositionDataProvider) -> List[Dict[str, Any]]:
    try:
        return provider.load_records()
    except DataNotAvailable as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ProviderError as exc:
        logger.error("Position provider %s failed: %s", provider.name, exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@app.on_event("startup")
async def on_startup() -> None:
    logger.info("Starting conviction signals API")


@app.on_event("shutdown")
async def on_shutdown() -> None:
    logger.info("Shutting down conviction signals API")


@app.post("/signals")
async def score_records(
    payload: SignalsRequest,
    engine: ConvictionScoringEngine = Depends(get_engine),
) -> Dict[str, Any]:
    """Score submitted raw trade records and return the ranked signals."""

    overrides = payload.scoring_config.to_overrides()
    if overrides:
        try:
            ScoringSettings.model_validate(merge_config(overrides, engine.config))
        except ValidationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        engine = ConvictionScoringEngine(overrides, base=engine.config)
    batch = engine.run(payload.records, today=payload.today)
    return serialize_batch(batch)


@app.get("/signals")
async def score_provider_records(
    today: Optional[date] = None,
    engine: ConvictionScoringEngine = Depends(get_engine),
    provider: PositionDataProvider = Depends(get_provider),
) -> Dict[str, Any]:
    """Score the configured provider's current position export."""

    batch = engine.run(_load_records(provider), today=today)
    return serialize_batch(batch)


@app.get("/positions/{ticker}")
async def ticker_positions(
    ticker: str,
    today: Optional[date] = None,
    provider: PositionDataProvider = Depends(get_provider),
) -> List[Dict[str, Any]]:
    """Active positions for one ticker, as consumed by the chart overlay."""

    return [serialize_position(position) for position in positions_for_ticker(_load_records(provider), ticker, today)]


@app.post("/signals/prompt/{ticker}", response_model=PromptResponse)
async def signal_prompt(
    ticker: str,
    payload: SignalsRequest,
    engine: ConvictionScoringEngine = Depends(get_engine),
) -> PromptResponse:
    """Narrative prompt for a ticker's emitted signal."""

    batch = engine.run(payload.records, today=payload.today)
    signal = batch.get(ticker)
    if signal is None:
        raise HTTPException(status_code=404, detail=f"No signal emitted for {ticker.upper()}")
    return PromptResponse(
        ticker=signal.ticker,
        system=NARRATIVE_SYSTEM_PROMPT,
        prompt=build_narrative_prompt(signal, batch.as_of),
    )
