"""Environment aware configuration loader for the signals engine."""

from __future__ import annotations

import copy
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.scoring.config import DEFAULT_ENGINE_CONFIG

DEFAULT_SETTINGS: Dict[str, Any] = {
    "provider": {
        "name": "file",
        "settings": {},
    },
    "scoring": copy.deepcopy(DEFAULT_ENGINE_CONFIG),
    "logging": {
        "level": "INFO",
    },
}

CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"
ENVIRONMENT_VARIABLE = "APP_ENV"


class ScoringSettings(BaseModel):
    """Engine configuration wrapper, see :data:`DEFAULT_ENGINE_CONFIG`."""

    model_config = ConfigDict(extra="forbid")

    confluence_window_days: int = 7
    min_distinct_trade_days: int = 2
    min_put_dte: int = 90
    confluence_multiplier: float = 1.5
    max_signals: int = 8
    badge_thresholds: Dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_ENGINE_CONFIG["badge_thresholds"])  # type: ignore[call-overload]
    )

    @field_validator("badge_thresholds", mode="before")
    @classmethod
    def _coerce_thresholds(cls, value: Mapping[str, Any]) -> Dict[str, float]:
        return {key: float(val) for key, val in dict(value or {}).items()}

    @model_validator(mode="after")
    def _ordered_thresholds(self) -> "ScoringSettings":
        strong = self.badge_thresholds.get("strong")
        notable = self.badge_thresholds.get("notable")
        if strong is None or notable is None:
            raise ValueError("badge_thresholds requires 'strong' and 'notable'")
        if strong < notable:
            raise ValueError("badge_thresholds.strong must not be below badge_thresholds.notable")
        return self

    def to_engine_config(self) -> Dict[str, Any]:
        return self.model_dump()


class ScoringOverrides(BaseModel):
    """Partial scoring settings supplied per request; unset fields keep the active value."""

    model_config = ConfigDict(extra="forbid")

    confluence_window_days: Optional[int] = Field(default=None, ge=0)
    min_distinct_trade_days: Optional[int] = Field(default=None, ge=1)
    min_put_dte: Optional[int] = Field(default=None, ge=0)
    confluence_multiplier: Optional[float] = Field(default=None, gt=0)
    max_signals: Optional[int] = Field(default=None, ge=1)
    badge_thresholds: Optional[Dict[str, float]] = None

    def to_overrides(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ProviderSettings(BaseModel):
    name: str = "file"
    settings: Dict[str, Any] = Field(default_factory=dict)


class LoggingSettings(BaseModel):
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


class AppSettings(BaseModel):
    """Fully resolved application settings loaded from YAML."""

    model_config = ConfigDict(frozen=True)

    env: str
    provider: ProviderSettings
    scoring: ScoringSettings
    logging: LoggingSettings

    @field_validator("env")
    @classmethod
    def _normalize_env(cls, value: str) -> str:
        return value.lower()

    def scoring_dict(self) -> Dict[str, Any]:
        return self.scoring.to_engine_config()


def _deep_merge(base: MutableMapping[str, Any], overrides: Mapping[str, Any]) -> MutableMapping[str, Any]:
    for key, value in overrides.items():
        if isinstance(value, Mapping):
            existing = base.get(key)
            if isinstance(existing, MutableMapping):
                base[key] = _deep_merge(copy.deepcopy(existing), value)
            else:
                base[key] = copy.deepcopy(value)
        else:
            base[key] = copy.deepcopy(value)
    return base


def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle.read()) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping at the root.")
        return data


def _build_settings(env: str) -> AppSettings:
    config_path = CONFIG_DIR / f"{env}.yaml"
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file for environment '{env}' not found at {config_path}")

    merged = copy.deepcopy(DEFAULT_SETTINGS)
    overrides = _load_yaml(config_path)
    merged = _deep_merge(merged, overrides)
    merged["env"] = env
    return AppSettings.model_validate(merged)


@lru_cache(maxsize=None)
def _cached_settings(env: str) -> AppSettings:
    return _build_settings(env)


def get_settings(env: Optional[str] = None) -> AppSettings:
    """Load settings for the requested environment (default: APP_ENV or 'dev')."""

    resolved_env = (env or os.getenv(ENVIRONMENT_VARIABLE, "dev")).strip().lower()
    return _cached_settings(resolved_env)


def reset_settings_cache() -> None:
    """Clear the cached settings, primarily used during tests."""

    _cached_settings.cache_clear()


__all__ = [
    "AppSettings",
    "CONFIG_DIR",
    "ENVIRONMENT_VARIABLE",
    "LoggingSettings",
    "ProviderSettings",
    "ScoringOverrides",
    "ScoringSettings",
    "get_settings",
    "reset_settings_cache",
]
