"""Portfolio valuation: per-holding and aggregate value and P&L."""
from __future__ import annotations

import math
from dataclasses import replace
from typing import Iterable, List, Mapping, Optional

from .currency_engine import CurrencyEngine
from .models import Holding, PortfolioSummary, Quote, ValuedHolding


def _percent(numerator: float, denominator: float) -> float:
    return numerator / denominator * 100 if denominator else math.nan


def _usable(quote: Optional[Quote]) -> bool:
    return quote is not None and not quote.error and not math.isnan(quote.price)


def value_holding(holding: Holding, quote: Quote) -> ValuedHolding:
    current_value = holding.quantity * quote.price
    cost_basis = holding.quantity * holding.purchase_price
    pnl = current_value - cost_basis
    return ValuedHolding(
        id=holding.id,
        symbol=holding.symbol,
        name=holding.name,
        quantity=holding.quantity,
        purchase_price=holding.purchase_price,
        purchase_date=holding.purchase_date,
        holding_currency=holding.currency,
        current_price=quote.price,
        current_value=current_value,
        cost_basis=cost_basis,
        pnl=pnl,
        pnl_percent=_percent(pnl, cost_basis),
        day_change=quote.change,
        day_change_percent=quote.change_percent,
        currency=quote.currency or holding.currency,
    )


def _summarize(valued: List[ValuedHolding], currency: Optional[str] = None) -> PortfolioSummary:
    total_value = sum(h.current_value for h in valued)
    total_cost = sum(h.cost_basis for h in valued)
    total_pnl = total_value - total_cost
    return PortfolioSummary(
        total_value=total_value,
        total_cost=total_cost,
        total_pnl=total_pnl,
        total_pnl_percent=_percent(total_pnl, total_cost),
        holdings=valued,
        currency=currency,
    )


def calculate_summary(holdings: Iterable[Holding], quotes: Mapping[str, Quote]) -> PortfolioSummary:
    """Value every quoted holding; holdings without a usable quote are left out of the totals."""
    valued: List[ValuedHolding] = []
    for holding in holdings:
        if holding.quantity <= 0:
            continue
        quote = quotes.get(holding.symbol)
        if not _usable(quote):
            continue
        valued.append(value_holding(holding, quote))
    return _summarize(valued)


def convert_to_display_currency(
    summary: PortfolioSummary,
    target_currency: str,
    rate: float,
    engine: Optional[CurrencyEngine] = None,
) -> PortfolioSummary:
    """Re-express a summary in ``target_currency``.

    Each holding is converted from its own currency and the totals are summed
    again afterwards, so mixed JPY/USD portfolios add up correctly.
    """
    engine = engine or CurrencyEngine()
    converted: List[ValuedHolding] = []
    for h in summary.holdings:
        def fx(amount: float) -> float:
            return engine.convert(amount, h.currency, target_currency, rate)

        converted.append(
            replace(
                h,
                current_price=fx(h.current_price),
                current_value=fx(h.current_value),
                cost_basis=fx(h.cost_basis),
                pnl=fx(h.pnl),
                day_change=fx(h.day_change),
                purchase_price=fx(h.purchase_price),
                currency=target_currency,
            )
        )
    return _summarize(converted, currency=target_currency)


class ValuationEngine:
    def __init__(self, currency: CurrencyEngine):
        self.currency = currency

    def summarize(self, holdings: Iterable[Holding], quotes: Mapping[str, Quote]) -> PortfolioSummary:
        return calculate_summary(holdings, quotes)

    def in_currency(self, summary: PortfolioSummary, target_currency: str, rate: float) -> PortfolioSummary:
        return convert_to_display_currency(summary, target_currency, rate, self.currency)


__all__ = ["ValuationEngine", "calculate_summary", "convert_to_display_currency", "value_holding"]
