"""Facade wiring all engines together for one refresh cycle."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from .alerts import AlertEvaluator
from .comparison import DEFAULT_BENCHMARKS, normalize_performance, period_return
from .config import TrackerConfig
from .currency_engine import CurrencyEngine
from .data_loader import DataLoader
from .income import DEFAULT_DIVIDEND_SCHEDULES, upcoming_dividends
from .models import (
    Alert,
    AlertEvaluation,
    Holding,
    PortfolioAnalysis,
    PortfolioSummary,
    Quote,
    RebalanceSuggestion,
    SectorGroup,
    TaxSummary,
    Transaction,
    UpcomingDividend,
)
from .sector_analysis import PortfolioAnalyst, SectorClassifier, group_by_sector, rebalance
from .tax import TaxEstimator
from .valuation import ValuationEngine


@dataclass
class PortfolioSnapshot:
    timestamp: str
    usd_jpy: float
    quotes: Dict[str, Quote]
    native: PortfolioSummary
    summary: PortfolioSummary  # in the display currency
    sectors: List[SectorGroup]
    rebalance: List[RebalanceSuggestion]
    analysis: PortfolioAnalysis
    tax: TaxSummary
    alerts: AlertEvaluation
    target_allocation: Dict[str, float] = field(default_factory=dict)
    dividends: List[UpcomingDividend] = field(default_factory=list)


class PortfolioTracker:
    def __init__(self, loader: DataLoader, config: Optional[TrackerConfig] = None):
        self.loader = loader
        self.config = config or TrackerConfig()
        self.currency = CurrencyEngine(self.config.currency.base_currency)
        self.valuation = ValuationEngine(self.currency)
        self.classifier = SectorClassifier(self.config.sectors.sector_map, self.config.sectors.default_sector)
        self.analyst = PortfolioAnalyst(self.config.analysis)
        self.tax = TaxEstimator(self.config.tax.rate)
        self.alert_evaluator = AlertEvaluator()

    def refresh(
        self,
        holdings: Sequence[Holding],
        transactions: Sequence[Transaction] = (),
        alerts: Sequence[Alert] = (),
        target_allocation: Optional[Mapping[str, float]] = None,
        year: Optional[int] = None,
    ) -> PortfolioSnapshot:
        symbols = [h.symbol for h in holdings] + [a.symbol for a in alerts]
        quotes = self.loader.load_quotes(symbols)
        rate = self.loader.load_usd_jpy_rate()
        return self.compute(holdings, quotes, rate, transactions, alerts, target_allocation, year)

    def compute(
        self,
        holdings: Sequence[Holding],
        quotes: Mapping[str, Quote],
        rate: float,
        transactions: Sequence[Transaction] = (),
        alerts: Sequence[Alert] = (),
        target_allocation: Optional[Mapping[str, float]] = None,
        year: Optional[int] = None,
    ) -> PortfolioSnapshot:
        """Run every engine over a fixed quote snapshot and rate."""
        targets = dict(target_allocation or {})
        native = self.valuation.summarize(holdings, quotes)
        summary = self.valuation.in_currency(native, self.config.display_currency, rate)
        sectors = group_by_sector(summary.holdings, self.classifier)
        return PortfolioSnapshot(
            timestamp=datetime.now(timezone.utc).isoformat(),
            usd_jpy=rate,
            quotes=dict(quotes),
            native=native,
            summary=summary,
            sectors=sectors,
            rebalance=rebalance(sectors, targets),
            analysis=self.analyst.analyze(summary.holdings, sectors, summary.total_value),
            tax=self.tax.annual_summary(transactions, summary.holdings, year),
            alerts=self.alert_evaluator.evaluate(alerts, quotes),
            target_allocation=targets,
            dividends=upcoming_dividends(holdings, DEFAULT_DIVIDEND_SCHEDULES),
        )

    def benchmark_returns(self, symbols: Iterable[str] = DEFAULT_BENCHMARKS,
                          range: Optional[str] = None) -> Dict[str, Optional[float]]:
        """Percent return of each symbol over the configured history range."""
        range = range or self.config.refresh.history_range
        return {symbol: period_return(self.loader.load_history(symbol, range)) for symbol in symbols}

    def compare_performance(self, symbols: Iterable[str] = DEFAULT_BENCHMARKS,
                            range: Optional[str] = None) -> pd.DataFrame:
        range = range or self.config.refresh.history_range
        return normalize_performance({symbol: self.loader.load_history(symbol, range) for symbol in symbols})


__all__ = ["PortfolioSnapshot", "PortfolioTracker"]
