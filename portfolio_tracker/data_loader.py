"""Data access layer for quotes, price history, and the USD/JPY rate."""
from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Protocol

from .config import CurrencyConfig
from .models import PriceBar, Quote

logger = logging.getLogger(__name__)

HISTORY_RANGES = ("1d", "5d", "1mo", "3mo", "6mo", "1y", "5y")


class QuoteSource(Protocol):
    def get_quote(self, symbol: str) -> Quote:
        """Return the latest quote; failures come back as ``Quote.unavailable``."""
        ...


class HistorySource(Protocol):
    def get_history(self, symbol: str, range: str = "1y") -> List[PriceBar]:
        ...


class ExchangeRateSource(Protocol):
    def get_usd_jpy_rate(self) -> float:
        ...


@dataclass
class DataLoader:
    quote_source: QuoteSource
    history_source: HistorySource
    rate_source: ExchangeRateSource
    currency_cfg: CurrencyConfig = field(default_factory=CurrencyConfig)
    max_workers: int = 8

    def load_quotes(self, symbols: Iterable[str]) -> Dict[str, Quote]:
        """Fetch quotes for every distinct symbol; failed symbols are left out."""
        unique = list(dict.fromkeys(symbols))
        if not unique:
            return {}
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(unique))) as pool:
            fetched = list(pool.map(self._fetch_quote, unique))
        return {symbol: quote for symbol, quote in zip(unique, fetched) if quote is not None}

    def _fetch_quote(self, symbol: str) -> Optional[Quote]:
        try:
            quote = self.quote_source.get_quote(symbol)
        except Exception:
            logger.warning("Quote fetch failed for %s", symbol, exc_info=True)
            return None
        if quote is None or quote.error:
            logger.warning("No usable quote for %s, omitting from valuation", symbol)
            return None
        return quote

    def load_history(self, symbol: str, range: str = "1y") -> List[PriceBar]:
        if range not in HISTORY_RANGES:
            raise ValueError(f"Unsupported history range {range!r}; expected one of {HISTORY_RANGES}")
        return sorted(self.history_source.get_history(symbol, range), key=lambda b: b.date)

    def load_usd_jpy_rate(self) -> float:
        fallback = self.currency_cfg.fallback_usd_jpy
        try:
            rate = float(self.rate_source.get_usd_jpy_rate())
        except Exception:
            logger.warning("USD/JPY rate unavailable, using fallback %.2f", fallback, exc_info=True)
            return fallback
        if math.isnan(rate) or rate <= 0:
            logger.warning("Invalid USD/JPY rate %r, using fallback %.2f", rate, fallback)
            return fallback
        return rate


class InMemorySource(QuoteSource, HistorySource, ExchangeRateSource):
    """A simple in-memory provider useful for tests or offline runs."""

    def __init__(self, quotes: Dict[str, Quote], history: Optional[Dict[str, List[PriceBar]]] = None,
                 usd_jpy: float = 150.0):
        self._quotes = quotes
        self._history = history or {}
        self._usd_jpy = usd_jpy

    def get_quote(self, symbol: str) -> Quote:
        return self._quotes.get(symbol) or Quote.unavailable(symbol)

    def get_history(self, symbol: str, range: str = "1y") -> List[PriceBar]:
        return self._history.get(symbol, [])

    def get_usd_jpy_rate(self) -> float:
        return self._usd_jpy


__all__ = [
    "DataLoader",
    "ExchangeRateSource",
    "HISTORY_RANGES",
    "HistorySource",
    "InMemorySource",
    "QuoteSource",
]
