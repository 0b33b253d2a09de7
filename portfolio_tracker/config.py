"""Tracker configuration dataclasses and defaults."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from .sector_map import DEFAULT_SECTOR, DEFAULT_SECTOR_MAP

DEFAULT_TAX_RATE = 0.20315  # Japan: 15.315% income tax + 5% resident tax
FALLBACK_USD_JPY = 150.0


@dataclass
class CurrencyConfig:
    base_currency: str = "JPY"
    fallback_usd_jpy: float = FALLBACK_USD_JPY
    rate_cache_seconds: int = 3600


@dataclass
class TaxConfig:
    rate: float = DEFAULT_TAX_RATE


@dataclass
class ConcentrationThresholds:
    warn_percent: float = 40.0
    notice_percent: float = 25.0
    rebalance_target_percent: float = 30.0


@dataclass
class AnalysisThresholds:
    concentration: ConcentrationThresholds = field(default_factory=ConcentrationThresholds)
    min_holdings: int = 3
    max_holdings: int = 15
    recommended_min_holdings: int = 5
    recommended_max_holdings: int = 10
    consolidate_to: int = 10
    diversified_sector_count: int = 3
    stop_loss_percent: float = -20.0
    take_profit_percent: float = 50.0


@dataclass
class SectorConfig:
    sector_map: Mapping[str, str] = field(default_factory=lambda: DEFAULT_SECTOR_MAP)
    default_sector: str = DEFAULT_SECTOR


@dataclass
class RefreshConfig:
    interval_seconds: int = 300
    history_range: str = "1y"


@dataclass
class TrackerConfig:
    currency: CurrencyConfig = field(default_factory=CurrencyConfig)
    tax: TaxConfig = field(default_factory=TaxConfig)
    analysis: AnalysisThresholds = field(default_factory=AnalysisThresholds)
    sectors: SectorConfig = field(default_factory=SectorConfig)
    refresh: RefreshConfig = field(default_factory=RefreshConfig)
    display_currency: str = "JPY"

    @classmethod
    def from_env(cls) -> "TrackerConfig":
        """Build a config, overriding defaults from ``PORTFOLIO_*`` environment variables."""
        cfg = cls()
        display = os.environ.get("PORTFOLIO_DISPLAY_CURRENCY")
        if display:
            cfg.display_currency = display.upper()
        tax_rate = os.environ.get("PORTFOLIO_TAX_RATE")
        if tax_rate:
            cfg.tax.rate = float(tax_rate)
        interval = os.environ.get("PORTFOLIO_REFRESH_SECONDS")
        if interval:
            cfg.refresh.interval_seconds = int(interval)
        return cfg


__all__ = [
    "AnalysisThresholds",
    "ConcentrationThresholds",
    "CurrencyConfig",
    "DEFAULT_TAX_RATE",
    "FALLBACK_USD_JPY",
    "RefreshConfig",
    "SectorConfig",
    "TaxConfig",
    "TrackerConfig",
]
