"""Core data structures shared across modules."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass
class Holding:
    id: str
    symbol: str
    name: str
    quantity: float
    purchase_price: float  # cost basis per unit
    purchase_date: str  # YYYY-MM-DD
    currency: str  # JPY or USD


@dataclass
class Quote:
    symbol: str
    price: float
    previous_close: float
    change: float
    change_percent: float
    currency: str
    timestamp: str
    name: str = ""
    error: bool = False  # set by adapters on fallback data

    @classmethod
    def from_prices(cls, symbol: str, price: float, previous_close: float, currency: str,
                    timestamp: str, name: str = "") -> "Quote":
        change = price - previous_close
        change_percent = change / previous_close * 100 if previous_close else math.nan
        return cls(symbol, price, previous_close, change, change_percent, currency, timestamp, name or symbol)

    @classmethod
    def unavailable(cls, symbol: str, timestamp: str = "") -> "Quote":
        return cls(symbol, math.nan, math.nan, math.nan, math.nan, "", timestamp, symbol, error=True)


@dataclass
class PriceBar:
    date: str  # YYYY-MM-DD
    close: float
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    volume: Optional[float] = None


@dataclass
class ValuedHolding:
    id: str
    symbol: str
    name: str
    quantity: float
    purchase_price: float
    purchase_date: str
    holding_currency: str
    current_price: float
    current_value: float
    cost_basis: float
    pnl: float
    pnl_percent: float
    day_change: float
    day_change_percent: float
    currency: str  # from the quote


@dataclass
class PortfolioSummary:
    total_value: float
    total_cost: float
    total_pnl: float
    total_pnl_percent: float
    holdings: List[ValuedHolding] = field(default_factory=list)
    currency: Optional[str] = None  # None while holdings keep their native currencies


@dataclass
class Transaction:
    id: str
    type: str  # buy, sell or dividend
    symbol: str
    quantity: float
    price: float
    date: str  # YYYY-MM-DD
    notes: str = ""
    cost_basis: Optional[float] = None  # per-unit acquisition cost for sells

    @property
    def total(self) -> float:
        return self.quantity * self.price


@dataclass(frozen=True)
class ActiveAlert:
    id: str
    symbol: str
    condition: str  # above or below
    target_price: float
    created_at: str = ""

    @property
    def triggered(self) -> bool:
        return False


@dataclass(frozen=True)
class TriggeredAlert:
    id: str
    symbol: str
    condition: str
    target_price: float
    triggered_at: str
    trigger_price: float
    created_at: str = ""

    @property
    def triggered(self) -> bool:
        return True


Alert = Union[ActiveAlert, TriggeredAlert]


@dataclass
class AlertEvaluation:
    alerts: List[Alert]
    newly_triggered: List[TriggeredAlert]


@dataclass
class SectorHolding:
    holding: ValuedHolding
    sector_value: float


@dataclass
class SectorGroup:
    name: str
    holdings: List[SectorHolding] = field(default_factory=list)
    total_value: float = 0.0


@dataclass
class RebalanceSuggestion:
    sector: str
    current_percent: float
    target_percent: float
    diff_percent: float
    diff_value: float
    action: str  # buy-more, consider-selling, on-target or no-target-set


@dataclass
class PortfolioAnalysis:
    insights: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


@dataclass
class RealizedGainDetail:
    transaction: Transaction
    gain: float

    @property
    def is_gain(self) -> bool:
        return self.gain >= 0


@dataclass
class RealizedTax:
    total_gain: float
    total_loss: float
    net_gain: float
    tax_rate: float
    tax_amount: float
    loss_carryover: float
    details: List[RealizedGainDetail] = field(default_factory=list)


@dataclass
class UnrealizedGainDetail:
    symbol: str
    name: str
    gain: float
    gain_percent: float
    potential_tax: float


@dataclass
class UnrealizedTax:
    total_unrealized_gain: float
    total_unrealized_loss: float
    net_unrealized: float
    potential_tax: float
    details: List[UnrealizedGainDetail] = field(default_factory=list)


@dataclass
class TaxSummary:
    year: int
    realized: RealizedTax
    unrealized: UnrealizedTax
    total_tax_liability: float
    effective_tax_rate: float


@dataclass
class Dividend:
    id: str
    symbol: str
    amount: float
    date: str
    currency: str = "JPY"
    notes: str = ""


@dataclass
class DividendSchedule:
    symbol: str
    months: List[int]
    name: str = ""


@dataclass
class UpcomingDividend:
    symbol: str
    name: str
    date: str
    month: int
    year: int
    quantity: float


@dataclass
class Goal:
    id: str
    title: str
    target_amount: float
    currency: str = "JPY"
    deadline: Optional[str] = None


@dataclass
class GoalProgress:
    goal: Goal
    current_value: float
    percent: float
    complete: bool
