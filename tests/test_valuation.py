"""Valuation of holdings against quotes, in native and display currencies."""

import math

import pytest

from portfolio_tracker.models import Holding, Quote
from portfolio_tracker.valuation import calculate_summary, convert_to_display_currency


def _holding(symbol: str, quantity: float, price: float, currency: str = "JPY", hid: str = "") -> Holding:
    return Holding(hid or symbol, symbol, f"{symbol} Corp", quantity, price, "2024-01-01", currency)


def _quote(symbol: str, price: float, currency: str = "JPY", previous: float = 0.0) -> Quote:
    return Quote.from_prices(symbol, price, previous or price, currency, "2024-06-01T00:00:00+00:00")


def test_single_holding_scenario():
    summary = calculate_summary([_holding("3003.T", 100, 1200)], {"3003.T": _quote("3003.T", 1500)})

    h = summary.holdings[0]
    assert h.current_value == 150000
    assert h.cost_basis == 120000
    assert h.pnl == 30000
    assert h.pnl_percent == 25.0
    assert summary.total_value == 150000
    assert summary.total_cost == 120000
    assert summary.total_pnl == 30000
    assert summary.total_pnl_percent == 25.0


def test_day_change_and_currency_come_from_quote():
    summary = calculate_summary([_holding("AAPL", 2, 150, "USD")], {"AAPL": _quote("AAPL", 200, "USD", previous=190)})

    h = summary.holdings[0]
    assert h.day_change == 10
    assert pytest.approx(h.day_change_percent) == 10 / 190 * 100
    assert h.currency == "USD"
    assert h.holding_currency == "USD"


def test_holdings_without_quotes_are_excluded():
    holdings = [_holding("A", 10, 100), _holding("B", 5, 200), _holding("C", 1, 50)]
    quotes = {"A": _quote("A", 110), "C": _quote("C", 40)}

    summary = calculate_summary(holdings, quotes)

    assert [h.symbol for h in summary.holdings] == ["A", "C"]
    assert summary.total_value == 10 * 110 + 1 * 40
    assert summary.total_cost == 10 * 100 + 1 * 50


def test_error_flagged_quote_is_treated_as_missing():
    holdings = [_holding("A", 10, 100), _holding("B", 1, 50)]
    quotes = {"A": _quote("A", 110), "B": Quote.unavailable("B")}

    summary = calculate_summary(holdings, quotes)

    assert [h.symbol for h in summary.holdings] == ["A"]
    assert summary.total_value == 1100
    assert summary.total_cost == 1000
    assert summary.total_pnl == 100


def test_zero_quantity_holding_is_skipped():
    summary = calculate_summary([_holding("A", 0, 100), _holding("B", 1, 10)], {"A": _quote("A", 1), "B": _quote("B", 12)})
    assert [h.symbol for h in summary.holdings] == ["B"]


def test_zero_cost_basis_yields_nan_percentages():
    summary = calculate_summary([_holding("GIFT", 10, 0)], {"GIFT": _quote("GIFT", 5)})

    assert math.isnan(summary.holdings[0].pnl_percent)
    assert math.isnan(summary.total_pnl_percent)
    assert summary.total_pnl == 50


def test_empty_portfolio():
    summary = calculate_summary([], {})
    assert summary.total_value == 0
    assert summary.holdings == []
    assert math.isnan(summary.total_pnl_percent)


def test_summary_is_deterministic():
    holdings = [_holding("A", 3, 101.5), _holding("B", 7, 33.3, "USD")]
    quotes = {"A": _quote("A", 120.25), "B": _quote("B", 40.1, "USD")}

    assert calculate_summary(holdings, quotes) == calculate_summary(holdings, quotes)


def test_mixed_currency_conversion_converts_each_holding_before_summing():
    holdings = [_holding("3003.T", 100, 1200, "JPY"), _holding("AAPL", 10, 150, "USD")]
    quotes = {"3003.T": _quote("3003.T", 1500, "JPY"), "AAPL": _quote("AAPL", 200, "USD")}
    rate = 150.0

    native = calculate_summary(holdings, quotes)
    in_jpy = convert_to_display_currency(native, "JPY", rate)

    assert in_jpy.currency == "JPY"
    assert in_jpy.total_value == 150000 + 2000 * rate
    assert in_jpy.total_cost == 120000 + 1500 * rate
    assert in_jpy.total_value != native.total_value * rate
    assert pytest.approx(in_jpy.total_pnl_percent) == (in_jpy.total_value - in_jpy.total_cost) / in_jpy.total_cost * 100


def test_conversion_to_usd_keeps_per_holding_percentages():
    holdings = [_holding("3003.T", 100, 1200, "JPY")]
    native = calculate_summary(holdings, {"3003.T": _quote("3003.T", 1500, "JPY")})

    in_usd = convert_to_display_currency(native, "USD", 150.0)

    h = in_usd.holdings[0]
    assert h.currency == "USD"
    assert pytest.approx(h.current_value) == 1000.0
    assert pytest.approx(h.cost_basis) == 800.0
    assert h.pnl_percent == native.holdings[0].pnl_percent
    # the input summary is not mutated
    assert native.holdings[0].current_value == 150000
