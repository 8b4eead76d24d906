"""
Configuration loader: code defaults -> YAML file -> .env / environment overrides.
Market data lives here too, so pricing changes need no code changes.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from core.exceptions import ConfigError
from solar.market import MarketDefaults

DEFAULT_CONFIG_PATH = "config.yaml"


def _coerce_float(key: str, s: Any) -> float:
    try:
        return float(s)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key} must be a number, got {s!r}") from e


def _coerce_int(key: str, s: Any) -> int:
    try:
        return int(s)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key} must be an integer, got {s!r}") from e


@dataclass(frozen=True)
class LLMConfig:
    """LLM endpoint and model configuration. Empty base_url means the provider's default."""

    provider: str = "groq"
    base_url: str = ""
    api_key: str = ""
    model: str = "llama-3.3-70b-versatile"
    max_retries: int = 3
    retry_delay_sec: float = 2.0
    timeout_sec: int = 60


@dataclass(frozen=True)
class AppConfig:
    """Immutable application configuration. Built once from YAML + env."""

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3001
    llm: LLMConfig = field(default_factory=LLMConfig)
    market: MarketDefaults = field(default_factory=MarketDefaults)

    def with_overrides(self, **overrides: Any) -> AppConfig:
        """Return new config with replaced keys; None values are ignored."""
        known = {"log_level", "host", "port", "llm", "market"}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def _llm_from_dict(data: dict[str, Any]) -> LLMConfig:
    default = LLMConfig()
    return LLMConfig(
        provider=str(data.get("provider", default.provider)).strip().lower(),
        base_url=str(data.get("base_url") or default.base_url),
        api_key=str(data.get("api_key") or default.api_key),
        model=str(data.get("model", default.model)),
        max_retries=_coerce_int("llm.max_retries", data.get("max_retries", default.max_retries)),
        retry_delay_sec=_coerce_float(
            "llm.retry_delay_sec", data.get("retry_delay_sec", default.retry_delay_sec)
        ),
        timeout_sec=_coerce_int("llm.timeout_sec", data.get("timeout_sec", default.timeout_sec)),
    )


def _config_from_dict(data: dict[str, Any]) -> AppConfig:
    """Build AppConfig from the YAML mapping. Env overrides applied in load_config."""
    llm_data = data.get("llm") or {}
    market_data = data.get("market") or {}
    if not isinstance(llm_data, dict) or not isinstance(market_data, dict):
        raise ConfigError("'llm' and 'market' config sections must be mappings")
    return AppConfig(
        log_level=str(data.get("log_level", "INFO")),
        host=str(data.get("host", "0.0.0.0")),
        port=_coerce_int("port", data.get("port", 3001)),
        llm=_llm_from_dict(llm_data),
        market=MarketDefaults.from_mapping(market_data),
    )


def _llm_env_overrides(llm: LLMConfig) -> LLMConfig:
    api_key = os.getenv("LLM_API_KEY") or os.getenv("GROQ_API_KEY")
    changes: dict[str, Any] = {}
    if os.getenv("LLM_PROVIDER"):
        changes["provider"] = os.environ["LLM_PROVIDER"].strip().lower()
        if changes["provider"] != llm.provider:
            # the configured model belongs to the old provider; use the new provider's default
            changes["model"] = ""
    if os.getenv("LLM_BASE_URL"):
        changes["base_url"] = os.environ["LLM_BASE_URL"].strip()
    if os.getenv("LLM_MODEL"):
        changes["model"] = os.environ["LLM_MODEL"].strip()
    if api_key:
        changes["api_key"] = api_key.strip()
    if os.getenv("LLM_TIMEOUT_SEC"):
        changes["timeout_sec"] = _coerce_int("LLM_TIMEOUT_SEC", os.environ["LLM_TIMEOUT_SEC"])
    if os.getenv("LLM_MAX_RETRIES"):
        changes["max_retries"] = _coerce_int("LLM_MAX_RETRIES", os.environ["LLM_MAX_RETRIES"])
    return replace(llm, **changes) if changes else llm


def _market_env_overrides(market: MarketDefaults) -> MarketDefaults:
    data: dict[str, Any] = {}
    if os.getenv("SOLAR_COST_PER_KW"):
        data["costPerKw"] = _coerce_float("SOLAR_COST_PER_KW", os.environ["SOLAR_COST_PER_KW"])
    if os.getenv("SOLAR_EMISSION_FACTOR_KG_PER_KWH"):
        data["emissionFactorKgPerKwh"] = _coerce_float(
            "SOLAR_EMISSION_FACTOR_KG_PER_KWH", os.environ["SOLAR_EMISSION_FACTOR_KG_PER_KWH"]
        )
    if os.getenv("SOLAR_PROD_BY_LOCATION"):
        try:
            data["prodByLocation"] = json.loads(os.environ["SOLAR_PROD_BY_LOCATION"])
        except json.JSONDecodeError as e:
            raise ConfigError(f"SOLAR_PROD_BY_LOCATION must be a JSON object: {e}") from e
    if os.getenv("SOLAR_INSTALL_COST_SPLIT"):
        data["installCostSplit"] = [
            part.strip() for part in os.environ["SOLAR_INSTALL_COST_SPLIT"].split(",")
        ]
    return MarketDefaults.from_mapping(data, base=market) if data else market


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """
    Load config from YAML file, then apply env overrides (.env is read first).
    Env vars: CONFIG_PATH, LOG_LEVEL, HOST, PORT, LLM_*, GROQ_API_KEY, SOLAR_*.
    """
    load_dotenv()
    path = Path(config_path or os.getenv("CONFIG_PATH") or DEFAULT_CONFIG_PATH)
    cfg = _config_from_dict(_load_yaml(path))
    port = os.getenv("PORT")
    return cfg.with_overrides(
        log_level=os.getenv("LOG_LEVEL") or None,
        host=os.getenv("HOST") or None,
        port=_coerce_int("PORT", port) if port else None,
        llm=_llm_env_overrides(cfg.llm),
        market=_market_env_overrides(cfg.market),
    )
