"""Benchmark performance comparison over price history."""
from __future__ import annotations

from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from .models import PriceBar

DEFAULT_BENCHMARKS: Dict[str, str] = {
    "^GSPC": "S&P 500",
    "VT": "Vanguard Total World Stock",
    "^N225": "Nikkei 225",
}


def closes_frame(histories: Dict[str, List[PriceBar]]) -> pd.DataFrame:
    """Close prices per symbol, indexed by date, restricted to dates every symbol has."""
    series = {
        symbol: pd.Series({bar.date: bar.close for bar in bars}, dtype=float)
        for symbol, bars in histories.items()
        if bars
    }
    if not series:
        return pd.DataFrame()
    frame = pd.concat(series, axis=1, join="inner").sort_index()
    return frame.replace(0.0, np.nan).dropna()


def normalize_performance(histories: Dict[str, List[PriceBar]]) -> pd.DataFrame:
    """Rebase each symbol's closes so the first shared date equals 100."""
    frame = closes_frame(histories)
    if frame.empty:
        return frame
    return frame.div(frame.iloc[0]).mul(100.0)


def period_return(bars: List[PriceBar]) -> Optional[float]:
    """Percent change from the first to the last close."""
    if len(bars) < 2:
        return None
    first, last = bars[0].close, bars[-1].close
    if not first or last is None:
        return None
    return (last - first) / first * 100


__all__ = ["DEFAULT_BENCHMARKS", "closes_frame", "normalize_performance", "period_return"]
