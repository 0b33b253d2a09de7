"""Default symbol -> sector lookup table."""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping

DEFAULT_SECTOR = "Other"

_SECTORS: Dict[str, str] = {
    # Tokyo Stock Exchange
    "6758.T": "Technology",
    "9984.T": "Technology",
    "6861.T": "Technology",
    "6501.T": "Technology",
    "6902.T": "Technology",
    "4755.T": "Technology",
    "6594.T": "Technology",
    "8306.T": "Financial",
    "8316.T": "Financial",
    "8411.T": "Financial",
    "8591.T": "Financial",
    "8766.T": "Financial",
    "7203.T": "Automotive",
    "7267.T": "Automotive",
    "7269.T": "Automotive",
    "7974.T": "Consumer",
    "9433.T": "Telecom",
    "9432.T": "Telecom",
    "9434.T": "Telecom",
    "4502.T": "Healthcare",
    "4503.T": "Healthcare",
    "4568.T": "Healthcare",
    "3003.T": "Real Estate",
    "8801.T": "Real Estate",
    "8802.T": "Real Estate",
    "9532.T": "Utilities",
    "5020.T": "Energy",
    # US equities
    "AAPL": "Technology",
    "MSFT": "Technology",
    "GOOGL": "Technology",
    "GOOG": "Technology",
    "META": "Technology",
    "NVDA": "Technology",
    "AMD": "Technology",
    "INTC": "Technology",
    "CRM": "Technology",
    "ADBE": "Technology",
    "NFLX": "Technology",
    "ORCL": "Technology",
    "AMZN": "Consumer",
    "WMT": "Consumer",
    "COST": "Consumer",
    "NKE": "Consumer",
    "SBUX": "Consumer",
    "MCD": "Consumer",
    "KO": "Consumer",
    "PEP": "Consumer",
    "PG": "Consumer",
    "TSLA": "Automotive",
    "F": "Automotive",
    "GM": "Automotive",
    "JNJ": "Healthcare",
    "UNH": "Healthcare",
    "PFE": "Healthcare",
    "ABBV": "Healthcare",
    "LLY": "Healthcare",
    "MRK": "Healthcare",
    "JPM": "Financial",
    "V": "Financial",
    "MA": "Financial",
    "BAC": "Financial",
    "GS": "Financial",
    "BRK-B": "Financial",
    "XOM": "Energy",
    "CVX": "Energy",
    "DIS": "Entertainment",
    "T": "Telecom",
    "VZ": "Telecom",
    # ETFs, index funds and commodities
    "VOO": "Index Fund",
    "VTI": "Index Fund",
    "QQQ": "Index Fund",
    "SPY": "Index Fund",
    "IWM": "Index Fund",
    "VEA": "Index Fund",
    "VWO": "Index Fund",
    "2558.T": "Index Fund",
    "1306.T": "Index Fund",
    "1321.T": "Index Fund",
    "GC=F": "Commodities",
    "GLD": "Commodities",
    "SLV": "Commodities",
}

DEFAULT_SECTOR_MAP: Mapping[str, str] = MappingProxyType(_SECTORS)


__all__ = ["DEFAULT_SECTOR", "DEFAULT_SECTOR_MAP"]
