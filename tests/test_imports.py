import importlib
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path for package imports
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

MODULES = [
    "alerts",
    "comparison",
    "config",
    "currency_engine",
    "data_loader",
    "income",
    "main",
    "models",
    "sector_analysis",
    "sector_map",
    "tax",
    "tracker",
    "transactions",
    "valuation",
    "yahoo_source",
]


@pytest.mark.parametrize("module", MODULES)
def test_module_imports(module: str) -> None:
    """Ensure tracker modules can be imported without side effects."""
    importlib.import_module(f"portfolio_tracker.{module}")
