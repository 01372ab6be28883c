"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------

DEFAULT_SUBGRAPH_URL = "https://api.thegraph.com/subgraphs/name/aave/protocol"
DEFAULT_PRICE_API_URL = "https://api.coingecko.com/api/v3/simple/price"


@dataclass(frozen=True)
class CatalogConfig:
    subgraph_url: str = DEFAULT_SUBGRAPH_URL
    timeout: int = 30


@dataclass(frozen=True)
class PriceApiConfig:
    url: str = DEFAULT_PRICE_API_URL
    base_asset_id: str = "ethereum"
    vs_currency: str = "usd"
    api_key: str = ""
    timeout: int = 15


@dataclass(frozen=True)
class ThresholdsConfig:
    critical: float = 1.0
    warning: float = 2.0


@dataclass(frozen=True)
class WatchConfig:
    refresh_interval_seconds: int = 60


@dataclass(frozen=True)
class AppConfig:
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    price_api: PriceApiConfig = field(default_factory=PriceApiConfig)
    thresholds: ThresholdsConfig = field(default_factory=ThresholdsConfig)
    watch: WatchConfig = field(default_factory=WatchConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_catalog(raw: dict[str, Any]) -> CatalogConfig:
    return CatalogConfig(
        subgraph_url=raw.get("subgraph_url") or DEFAULT_SUBGRAPH_URL,
        timeout=int(raw.get("timeout", 30)),
    )


def _build_price_api(raw: dict[str, Any]) -> PriceApiConfig:
    return PriceApiConfig(
        url=raw.get("url") or DEFAULT_PRICE_API_URL,
        base_asset_id=raw.get("base_asset_id", "ethereum"),
        vs_currency=raw.get("vs_currency", "usd"),
        api_key=raw.get("api_key", "") or "",
        timeout=int(raw.get("timeout", 15)),
    )


def _build_thresholds(raw: dict[str, Any]) -> ThresholdsConfig:
    return ThresholdsConfig(
        critical=float(raw.get("critical", 1.0)),
        warning=float(raw.get("warning", 2.0)),
    )


def _build_watch(raw: dict[str, Any]) -> WatchConfig:
    return WatchConfig(
        refresh_interval_seconds=int(raw.get("refresh_interval_seconds", 60)),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        catalog=_build_catalog(raw.get("catalog") or {}),
        price_api=_build_price_api(raw.get("price_api") or {}),
        thresholds=_build_thresholds(raw.get("thresholds") or {}),
        watch=_build_watch(raw.get("watch") or {}),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.price_api.base_asset_id:
        raise ValueError("price_api.base_asset_id must not be empty")
    if not cfg.price_api.vs_currency:
        raise ValueError("price_api.vs_currency must not be empty")

    for name, timeout in (
        ("catalog.timeout", cfg.catalog.timeout),
        ("price_api.timeout", cfg.price_api.timeout),
    ):
        if timeout <= 0:
            raise ValueError(f"{name} must be positive, got {timeout}")

    if cfg.thresholds.critical >= cfg.thresholds.warning:
        raise ValueError(
            "thresholds.critical must be below thresholds.warning "
            f"({cfg.thresholds.critical} >= {cfg.thresholds.warning})"
        )

    if cfg.watch.refresh_interval_seconds <= 0:
        raise ValueError("watch.refresh_interval_seconds must be positive")
