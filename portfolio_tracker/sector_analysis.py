"""Sector classification, allocation rebalancing, and rule-based diagnostics."""
from __future__ import annotations

import math
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from .config import AnalysisThresholds
from .models import PortfolioAnalysis, RebalanceSuggestion, SectorGroup, SectorHolding, ValuedHolding
from .sector_map import DEFAULT_SECTOR, DEFAULT_SECTOR_MAP

BUY_MORE = "buy-more"
CONSIDER_SELLING = "consider-selling"
ON_TARGET = "on-target"
NO_TARGET_SET = "no-target-set"


def _num(value: Optional[float]) -> float:
    """Treat missing and NaN figures as zero when ranking holdings."""
    if value is None or math.isnan(value):
        return 0.0
    return value


class SectorClassifier:
    def __init__(self, sector_map: Mapping[str, str] = DEFAULT_SECTOR_MAP, default_sector: str = DEFAULT_SECTOR):
        self.sector_map = MappingProxyType(dict(sector_map))
        self.default_sector = default_sector

    def classify(self, symbol: str) -> str:
        return self.sector_map.get(symbol, self.default_sector)


def group_by_sector(
    holdings: Sequence[ValuedHolding],
    classifier: Optional[SectorClassifier] = None,
    value_fn: Optional[Callable[[ValuedHolding], float]] = None,
) -> List[SectorGroup]:
    """Partition holdings by sector, largest sector first."""
    classifier = classifier or SectorClassifier()
    value_fn = value_fn or (lambda h: _num(h.current_value))
    groups: Dict[str, SectorGroup] = {}
    for holding in holdings:
        sector = classifier.classify(holding.symbol)
        group = groups.setdefault(sector, SectorGroup(name=sector))
        value = value_fn(holding)
        group.holdings.append(SectorHolding(holding=holding, sector_value=value))
        group.total_value += value
    # sorted() is stable, so equal totals keep first-seen order
    return sorted(groups.values(), key=lambda g: g.total_value, reverse=True)


def _action(diff: float) -> str:
    if diff > 0:
        return BUY_MORE
    if diff < 0:
        return CONSIDER_SELLING
    return ON_TARGET


def rebalance(groups: Sequence[SectorGroup], target_allocation: Mapping[str, float]) -> List[RebalanceSuggestion]:
    """Compare current sector weights against target percentages."""
    total_value = sum(g.total_value for g in groups)
    if total_value == 0:
        return []

    by_name = {g.name: g for g in groups}
    suggestions: List[RebalanceSuggestion] = []
    for sector, target_percent in target_allocation.items():
        group = by_name.get(sector)
        current_value = group.total_value if group else 0.0
        current_percent = current_value / total_value * 100
        diff_value = total_value * target_percent / 100 - current_value
        suggestions.append(
            RebalanceSuggestion(
                sector=sector,
                current_percent=current_percent,
                target_percent=target_percent,
                diff_percent=target_percent - current_percent,
                diff_value=diff_value,
                action=_action(target_percent - current_percent),
            )
        )

    for group in groups:
        if group.name in target_allocation:
            continue
        current_percent = group.total_value / total_value * 100
        suggestions.append(
            RebalanceSuggestion(
                sector=group.name,
                current_percent=current_percent,
                target_percent=0.0,
                diff_percent=-current_percent,
                diff_value=-group.total_value,
                action=NO_TARGET_SET,
            )
        )

    return sorted(suggestions, key=lambda s: abs(s.diff_percent), reverse=True)


class PortfolioAnalyst:
    """Deterministic heuristics over concentration, diversification, and P&L extremes."""

    def __init__(self, thresholds: Optional[AnalysisThresholds] = None):
        self.thresholds = thresholds or AnalysisThresholds()

    def analyze(
        self,
        holdings: Sequence[ValuedHolding],
        sector_groups: Sequence[SectorGroup],
        total_value: float,
    ) -> PortfolioAnalysis:
        cfg = self.thresholds
        if not holdings:
            return PortfolioAnalysis(
                insights=["No holdings yet."],
                warnings=[],
                recommendations=["Start by adding the holdings you own."],
            )

        result = PortfolioAnalysis()
        self._concentration(holdings, total_value, result)
        self._sector_diversity(sector_groups, result)

        count = len(holdings)
        if count < cfg.min_holdings:
            result.recommendations.append(
                f"Only {count} holdings. Consider diversifying across "
                f"{cfg.recommended_min_holdings}-{cfg.recommended_max_holdings} positions."
            )
        elif count > cfg.max_holdings:
            result.recommendations.append(
                f"{count} holdings is a lot to track. Consolidating to about "
                f"{cfg.consolidate_to} positions keeps the portfolio manageable."
            )

        self._pnl_extremes(holdings, result)

        if not result.recommendations:
            result.recommendations.append(
                "The portfolio is in good shape. Keep holding and rebalance periodically."
            )
        return result

    def _concentration(self, holdings: Sequence[ValuedHolding], total_value: float,
                       result: PortfolioAnalysis) -> None:
        limits = self.thresholds.concentration
        largest = holdings[0]
        for h in holdings[1:]:
            if _num(h.current_value) > _num(largest.current_value):
                largest = h
        share = _num(largest.current_value) / total_value * 100 if total_value > 0 else 0.0

        if share > limits.warn_percent:
            result.warnings.append(
                f"{largest.name} makes up {share:.1f}% of the portfolio. Concentration risk is high."
            )
            result.recommendations.append(
                f"Consider rebalancing {largest.name} to {limits.rebalance_target_percent:.0f}% or less."
            )
        elif share > limits.notice_percent:
            result.insights.append(f"{largest.name} is the largest position ({share:.1f}%), slightly concentrated.")
        else:
            result.insights.append(f"Holdings are reasonably spread out (largest {share:.1f}%).")

    def _sector_diversity(self, sector_groups: Sequence[SectorGroup], result: PortfolioAnalysis) -> None:
        count = len(sector_groups)
        target = self.thresholds.diversified_sector_count
        if count == 1:
            result.warnings.append(
                f"Every holding is in the {sector_groups[0].name} sector. Consider spreading across sectors."
            )
        elif count < target:
            result.insights.append(f"Invested in {count} sectors. Spreading across {target} or more is recommended.")
        else:
            result.insights.append(f"Diversified across {count} sectors.")

    def _pnl_extremes(self, holdings: Sequence[ValuedHolding], result: PortfolioAnalysis) -> None:
        cfg = self.thresholds
        losers = [h for h in holdings if _num(h.pnl) < 0]
        winners = [h for h in holdings if _num(h.pnl) > 0]

        if losers:
            worst = min(losers, key=lambda h: _num(h.pnl_percent))
            if _num(worst.pnl_percent) < cfg.stop_loss_percent:
                result.warnings.append(
                    f"{worst.name} is down {worst.pnl_percent:.1f}%. Consider setting a stop-loss level."
                )
        if winners:
            best = max(winners, key=lambda h: _num(h.pnl_percent))
            if _num(best.pnl_percent) > cfg.take_profit_percent:
                result.insights.append(
                    f"{best.name} is up +{best.pnl_percent:.1f}%. It may be worth considering taking some profit."
                )


__all__ = [
    "BUY_MORE",
    "CONSIDER_SELLING",
    "NO_TARGET_SET",
    "ON_TARGET",
    "PortfolioAnalyst",
    "SectorClassifier",
    "group_by_sector",
    "rebalance",
]
