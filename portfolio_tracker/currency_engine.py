"""FX conversion and display formatting."""
from __future__ import annotations

import math
from typing import Optional

SUPPORTED_CURRENCIES = ("JPY", "USD")


class UnsupportedCurrencyPair(ValueError):
    """Raised for any currency pair other than JPY/USD."""


class CurrencyEngine:
    def __init__(self, base_currency: str = "JPY"):
        if base_currency not in SUPPORTED_CURRENCIES:
            raise UnsupportedCurrencyPair(f"Unsupported base currency: {base_currency}")
        self.base_currency = base_currency

    def convert(self, amount: float, from_currency: str, to_currency: str, rate: float) -> float:
        """Convert ``amount`` using ``rate`` expressed as JPY per USD."""
        if from_currency == to_currency:
            return amount
        if {from_currency, to_currency} != set(SUPPORTED_CURRENCIES):
            raise UnsupportedCurrencyPair(f"Cannot convert {from_currency} to {to_currency}")
        if not rate > 0:
            raise ValueError(f"USD/JPY rate must be positive, got {rate}")
        if from_currency == "USD":
            return amount * rate
        return amount / rate

    def to_base(self, amount: float, currency: str, rate: float) -> float:
        return self.convert(amount, currency, self.base_currency, rate)

    def format_amount(self, value: Optional[float], currency: Optional[str] = None) -> str:
        currency = currency or self.base_currency
        if value is None or math.isnan(value):
            return "N/A"
        if currency == "JPY":
            # half-up rounding, not banker's rounding
            return f"¥{math.floor(value + 0.5):,}"
        if currency == "USD":
            return f"${value:,.2f}"
        raise UnsupportedCurrencyPair(f"No display format for {currency}")


_default_engine = CurrencyEngine()


def convert(amount: float, from_currency: str, to_currency: str, rate: float) -> float:
    return _default_engine.convert(amount, from_currency, to_currency, rate)


def format_amount(value: Optional[float], currency: str = "JPY") -> str:
    return _default_engine.format_amount(value, currency)


__all__ = ["CurrencyEngine", "SUPPORTED_CURRENCIES", "UnsupportedCurrencyPair", "convert", "format_amount"]
