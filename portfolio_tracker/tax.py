"""Capital-gains tax estimates for realized and unrealized gains.

All figures are estimates at a single flat rate (Japan's 20.315% by default);
there is no lot accounting beyond average cost.
"""
from __future__ import annotations

import math
from datetime import date
from typing import Iterable, List, Optional, Sequence

from .config import DEFAULT_TAX_RATE
from .models import (
    RealizedGainDetail,
    RealizedTax,
    TaxSummary,
    Transaction,
    UnrealizedGainDetail,
    UnrealizedTax,
    ValuedHolding,
)
from .transactions import transactions_in_year


def _num(value: Optional[float]) -> float:
    if value is None or math.isnan(value):
        return 0.0
    return value


class TaxEstimator:
    def __init__(self, rate: float = DEFAULT_TAX_RATE):
        if not 0.0 <= rate <= 1.0:
            raise ValueError(f"Tax rate must be between 0 and 1, got {rate}")
        self.rate = rate

    def capital_gains_tax(self, transactions: Iterable[Transaction]) -> RealizedTax:
        total_gain = 0.0
        total_loss = 0.0
        details: List[RealizedGainDetail] = []
        for tx in transactions:
            if tx.type != "sell":
                continue
            # No recorded cost basis means no measurable gain
            cost = tx.cost_basis if tx.cost_basis is not None else tx.price
            gain = (tx.price - cost) * tx.quantity
            if gain >= 0:
                total_gain += gain
            else:
                total_loss += abs(gain)
            details.append(RealizedGainDetail(transaction=tx, gain=gain))

        net_gain = total_gain - total_loss
        return RealizedTax(
            total_gain=total_gain,
            total_loss=total_loss,
            net_gain=net_gain,
            tax_rate=self.rate,
            tax_amount=net_gain * self.rate if net_gain > 0 else 0.0,
            loss_carryover=abs(net_gain) if net_gain < 0 else 0.0,
            details=details,
        )

    def unrealized_gains(self, holdings: Sequence[ValuedHolding]) -> UnrealizedTax:
        """Paper gains on current holdings; potential tax is on gross gains only."""
        total_gain = 0.0
        total_loss = 0.0
        details: List[UnrealizedGainDetail] = []
        for h in holdings:
            gain = _num(h.current_value) - h.purchase_price * h.quantity
            if gain >= 0:
                total_gain += gain
            else:
                total_loss += abs(gain)
            details.append(
                UnrealizedGainDetail(
                    symbol=h.symbol,
                    name=h.name,
                    gain=gain,
                    gain_percent=_num(h.pnl_percent),
                    potential_tax=gain * self.rate if gain > 0 else 0.0,
                )
            )
        return UnrealizedTax(
            total_unrealized_gain=total_gain,
            total_unrealized_loss=total_loss,
            net_unrealized=total_gain - total_loss,
            potential_tax=total_gain * self.rate,
            details=sorted(details, key=lambda d: d.gain, reverse=True),
        )

    def annual_summary(
        self,
        transactions: Iterable[Transaction],
        holdings: Sequence[ValuedHolding],
        year: Optional[int] = None,
    ) -> TaxSummary:
        year = year or date.today().year
        realized = self.capital_gains_tax(transactions_in_year(transactions, year))
        unrealized = self.unrealized_gains(holdings)
        return TaxSummary(
            year=year,
            realized=realized,
            unrealized=unrealized,
            total_tax_liability=realized.tax_amount,
            effective_tax_rate=self.rate * 100 if realized.net_gain > 0 else 0.0,
        )


__all__ = ["TaxEstimator"]
