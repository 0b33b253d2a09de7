"""Yahoo Finance-backed quote, history, and FX source."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

import pandas as pd
import requests
import yfinance as yf

from .config import CurrencyConfig
from .data_loader import ExchangeRateSource, HistorySource, QuoteSource
from .models import PriceBar, Quote

logger = logging.getLogger(__name__)

CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart/{symbol}"
USD_JPY_SYMBOL = "USDJPY=X"


@dataclass
class YahooFinanceSource(QuoteSource, HistorySource, ExchangeRateSource):
    """Live market data from Yahoo Finance with an in-process FX cache."""

    currency_cfg: CurrencyConfig = field(default_factory=CurrencyConfig)
    timeout: float = 10.0
    session: requests.Session = field(default_factory=requests.Session, repr=False)
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    _rate_cache: Dict[str, float] = field(default_factory=dict, init=False, repr=False)
    _rate_fetched_at: float = field(default=0.0, init=False, repr=False)

    def get_quote(self, symbol: str) -> Quote:
        try:
            meta = self._fetch_chart_meta(symbol)
            price = float(meta["regularMarketPrice"])
            previous = meta.get("previousClose") or meta.get("chartPreviousClose") or 0.0
            market_time = meta.get("regularMarketTime")
            timestamp = (
                datetime.fromtimestamp(market_time, tz=timezone.utc).isoformat()
                if market_time
                else datetime.now(timezone.utc).isoformat()
            )
            return Quote.from_prices(
                symbol=meta.get("symbol") or symbol,
                price=price,
                previous_close=float(previous),
                currency=meta.get("currency") or "",
                timestamp=timestamp,
                name=meta.get("shortName") or meta.get("longName") or symbol,
            )
        except (requests.RequestException, KeyError, IndexError, TypeError, ValueError) as exc:
            logger.warning("Yahoo quote failed for %s: %s", symbol, exc)
            return Quote.unavailable(symbol, datetime.now(timezone.utc).isoformat())

    def get_history(self, symbol: str, range: str = "1y") -> List[PriceBar]:
        try:
            df = yf.download(symbol, period=range, interval="1d", auto_adjust=False, progress=False)
        except Exception as exc:  # yfinance surfaces a wide range of transport errors
            logger.warning("Yahoo history failed for %s: %s", symbol, exc)
            return []
        if df is None or df.empty:
            return []
        # Multi-ticker column index even for a single symbol in newer yfinance releases
        if isinstance(df.columns, pd.MultiIndex):
            df = df.xs(symbol, axis=1, level=-1) if symbol in df.columns.get_level_values(-1) else df.droplevel(-1, axis=1)
        df = df.dropna(subset=["Close"])
        return [
            PriceBar(
                date=pd.to_datetime(date).strftime("%Y-%m-%d"),
                close=float(row["Close"]),
                open=_optional_float(row.get("Open")),
                high=_optional_float(row.get("High")),
                low=_optional_float(row.get("Low")),
                volume=_optional_float(row.get("Volume")),
            )
            for date, row in df.iterrows()
        ]

    def get_usd_jpy_rate(self) -> float:
        now = self.clock()
        cached = self._rate_cache.get(USD_JPY_SYMBOL)
        if cached is not None and now - self._rate_fetched_at < self.currency_cfg.rate_cache_seconds:
            return cached
        try:
            rate = float(self._fetch_chart_meta(USD_JPY_SYMBOL)["regularMarketPrice"])
        except (requests.RequestException, KeyError, IndexError, TypeError, ValueError) as exc:
            logger.warning("Yahoo USD/JPY rate failed: %s", exc)
            return self.currency_cfg.fallback_usd_jpy
        self._rate_cache = {USD_JPY_SYMBOL: rate}
        self._rate_fetched_at = now
        return rate

    # --- Yahoo helpers ---------------------------------------------------
    def _fetch_chart_meta(self, symbol: str) -> Dict:
        url = CHART_URL.format(symbol=requests.utils.quote(symbol, safe=""))
        params = {"interval": "1d", "range": "1d"}
        response = self.session.get(url, params=params, timeout=self.timeout,
                                    headers={"User-Agent": "Mozilla/5.0"})
        response.raise_for_status()
        payload = response.json() or {}
        return payload["chart"]["result"][0]["meta"]


def _optional_float(value) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    return float(value)


__all__ = ["YahooFinanceSource", "CHART_URL", "USD_JPY_SYMBOL"]
