"""Console entrypoint: value a sample portfolio with live Yahoo Finance data."""
from __future__ import annotations

import argparse
import logging
import time
from typing import Dict, List, Optional, Sequence

from .alerts import create_alert
from .comparison import DEFAULT_BENCHMARKS
from .config import TrackerConfig
from .currency_engine import CurrencyEngine
from .data_loader import DataLoader
from .models import Alert, Holding
from .tracker import PortfolioSnapshot, PortfolioTracker
from .yahoo_source import YahooFinanceSource

SAMPLE_HOLDINGS: List[Holding] = [
    Holding("1", "GC=F", "Gold", 1, 2000, "2024-01-15", "USD"),
    Holding("2", "^GSPC", "S&P 500", 100, 4500, "2024-02-01", "USD"),
    Holding("3", "HUM", "Humana", 10, 350, "2024-03-01", "USD"),
    Holding("4", "3003.T", "Hulic", 100, 1200, "2024-01-20", "JPY"),
    Holding("5", "9532.T", "Osaka Gas", 100, 2800, "2024-02-15", "JPY"),
]

SAMPLE_TARGETS = {"Technology": 30.0, "Real Estate": 20.0, "Utilities": 20.0, "Commodities": 10.0}


def build_tracker(config: Optional[TrackerConfig] = None) -> PortfolioTracker:
    """Creates a Yahoo-backed tracker."""
    config = config or TrackerConfig.from_env()
    source = YahooFinanceSource(currency_cfg=config.currency)
    loader = DataLoader(
        quote_source=source,
        history_source=source,
        rate_source=source,
        currency_cfg=config.currency,
    )
    return PortfolioTracker(loader, config)


def print_snapshot(snapshot: PortfolioSnapshot, currency: CurrencyEngine) -> None:
    summary = snapshot.summary
    ccy = summary.currency
    print("================= PORTFOLIO SNAPSHOT =================")
    print(f"As of {snapshot.timestamp} | USD/JPY {snapshot.usd_jpy:.2f}")
    print(f"Value: {currency.format_amount(summary.total_value, ccy)}")
    print(f"Cost:  {currency.format_amount(summary.total_cost, ccy)}")
    print(f"P&L:   {currency.format_amount(summary.total_pnl, ccy)} ({_pct(summary.total_pnl_percent)})")
    print("")
    for h in summary.holdings:
        print(f"{h.symbol.ljust(8)} {currency.format_amount(h.current_value, ccy).rjust(14)} {_pct(h.pnl_percent)}")
    print("")
    print("Sectors:")
    for group in snapshot.sectors:
        print(f"  {group.name.ljust(14, '.')} {currency.format_amount(group.total_value, ccy)}")
    if snapshot.rebalance:
        print("Rebalance:")
        for s in snapshot.rebalance:
            print(f"  {s.sector.ljust(14, '.')} {s.current_percent:5.1f}% -> {s.target_percent:5.1f}% ({s.action})")
    print("Analysis:")
    for line in snapshot.analysis.warnings + snapshot.analysis.insights + snapshot.analysis.recommendations:
        print(f"  - {line}")
    tax = snapshot.tax
    # realized figures are summed in each transaction's own currency
    print(f"Tax {tax.year}: realized {tax.total_tax_liability:,.2f} (transaction currency), "
          f"potential {currency.format_amount(tax.unrealized.potential_tax, ccy)}")
    if snapshot.dividends:
        print("Upcoming dividends:")
        for d in snapshot.dividends:
            print(f"  {d.date} {d.symbol.ljust(8)} {d.name} x{d.quantity:g}")
    for alert in snapshot.alerts.newly_triggered:
        print(f"ALERT {alert.symbol} {alert.condition} {alert.target_price}: now {alert.trigger_price}")
    print("======================================================")


def print_benchmarks(returns: Dict[str, Optional[float]]) -> None:
    print("Benchmarks:")
    for symbol, change in returns.items():
        label = DEFAULT_BENCHMARKS.get(symbol, symbol)
        print(f"  {label.ljust(28, '.')} {'N/A' if change is None else _pct(change)}")


def _pct(value: float) -> str:
    return "N/A" if value != value else f"{value:+.2f}%"


def run_once(tracker: PortfolioTracker, alerts: Sequence[Alert] = ()) -> PortfolioSnapshot:
    snapshot = tracker.refresh(SAMPLE_HOLDINGS, alerts=alerts, target_allocation=SAMPLE_TARGETS)
    print_snapshot(snapshot, tracker.currency)
    return snapshot


def watch(tracker: PortfolioTracker, alerts: Sequence[Alert] = (), cycles: Optional[int] = None) -> None:
    """Refresh periodically, carrying alert state from one cycle to the next."""
    interval = tracker.config.refresh.interval_seconds
    current = list(alerts)
    count = 0
    while cycles is None or count < cycles:
        snapshot = run_once(tracker, current)
        current = snapshot.alerts.alerts
        count += 1
        if cycles is None or count < cycles:
            time.sleep(interval)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Value the sample portfolio with live quotes.")
    parser.add_argument("--watch", action="store_true", help="refresh periodically")
    parser.add_argument("--cycles", type=int, default=None, help="stop after N refreshes")
    parser.add_argument("--benchmarks", action="store_true", help="also print benchmark returns")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    tracker = build_tracker()
    alerts = [create_alert("3003.T", "above", 1500), create_alert("HUM", "below", 250)]
    if args.benchmarks:
        print_benchmarks(tracker.benchmark_returns())
    if args.watch:
        watch(tracker, alerts, args.cycles)
    else:
        run_once(tracker, alerts)


if __name__ == "__main__":
    main()
