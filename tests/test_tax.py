"""Realized and unrealized capital-gains tax estimates."""

import pytest

from portfolio_tracker.config import DEFAULT_TAX_RATE
from portfolio_tracker.models import Transaction, ValuedHolding
from portfolio_tracker.tax import TaxEstimator


def _tx(type: str, price: float, quantity: float, cost_basis: float = None, date: str = "2024-05-01",
        tx_id: str = "t") -> Transaction:
    return Transaction(tx_id, type, "AAPL", quantity, price, date, cost_basis=cost_basis)


def _valued(symbol: str, quantity: float, purchase_price: float, current_price: float) -> ValuedHolding:
    value = quantity * current_price
    cost = quantity * purchase_price
    return ValuedHolding(
        id=symbol,
        symbol=symbol,
        name=symbol,
        quantity=quantity,
        purchase_price=purchase_price,
        purchase_date="2024-01-01",
        holding_currency="JPY",
        current_price=current_price,
        current_value=value,
        cost_basis=cost,
        pnl=value - cost,
        pnl_percent=(value - cost) / cost * 100,
        day_change=0.0,
        day_change_percent=0.0,
        currency="JPY",
    )


def test_default_rate():
    assert TaxEstimator().rate == DEFAULT_TAX_RATE == 0.20315


def test_single_sell_scenario():
    result = TaxEstimator(0.20315).capital_gains_tax([_tx("sell", price=200, quantity=10, cost_basis=150)])

    assert result.total_gain == 500
    assert result.total_loss == 0
    assert result.net_gain == 500
    assert result.tax_amount == pytest.approx(101.575)
    assert result.loss_carryover == 0
    assert result.details[0].gain == 500
    assert result.details[0].is_gain


def test_buys_only_produce_no_tax():
    result = TaxEstimator().capital_gains_tax([_tx("buy", 100, 5), _tx("buy", 120, 3), _tx("dividend", 2, 10)])

    assert result.total_gain == result.total_loss == result.net_gain == result.tax_amount == 0
    assert result.details == []


def test_missing_cost_basis_is_zero_gain():
    result = TaxEstimator().capital_gains_tax([_tx("sell", price=300, quantity=4)])

    assert result.details[0].gain == 0
    assert result.tax_amount == 0


def test_losses_offset_gains_and_carry_over():
    estimator = TaxEstimator(0.2)
    result = estimator.capital_gains_tax([
        _tx("sell", price=110, quantity=10, cost_basis=100),  # +100
        _tx("sell", price=50, quantity=10, cost_basis=80),  # -300
    ])

    assert result.total_gain == 100
    assert result.total_loss == 300
    assert result.net_gain == -200
    assert result.tax_amount == 0
    assert result.loss_carryover == 200


def test_unrealized_potential_tax_is_on_gross_gains():
    estimator = TaxEstimator(0.2)
    holdings = [_valued("UP", 10, 100, 150), _valued("DOWN", 10, 100, 80)]

    result = estimator.unrealized_gains(holdings)

    assert result.total_unrealized_gain == 500
    assert result.total_unrealized_loss == 200
    assert result.net_unrealized == 300
    assert result.potential_tax == pytest.approx(100.0)
    assert [d.symbol for d in result.details] == ["UP", "DOWN"]
    assert result.details[0].potential_tax == pytest.approx(100.0)
    assert result.details[1].potential_tax == 0


def test_zero_cost_holding_reports_zero_gain_percent():
    holding = _valued("GIFT", 10, 100, 105)
    holding.purchase_price = 0.0
    holding.cost_basis = 0.0
    holding.pnl_percent = float("nan")

    detail = TaxEstimator(0.2).unrealized_gains([holding]).details[0]

    assert detail.gain == 1050
    assert detail.gain_percent == 0.0
    assert detail.potential_tax == pytest.approx(210.0)


def test_annual_summary_filters_realized_by_year_only():
    estimator = TaxEstimator(0.2)
    transactions = [
        _tx("sell", price=200, quantity=10, cost_basis=100, date="2024-03-01", tx_id="a"),
        _tx("sell", price=200, quantity=10, cost_basis=150, date="2023-12-31", tx_id="b"),
    ]
    holdings = [_valued("UP", 10, 100, 150)]

    summary = estimator.annual_summary(transactions, holdings, 2024)

    assert summary.year == 2024
    assert summary.realized.net_gain == 1000
    assert summary.total_tax_liability == pytest.approx(200.0)
    assert summary.effective_tax_rate == pytest.approx(20.0)
    assert summary.unrealized.total_unrealized_gain == 500


def test_annual_summary_without_gains_has_zero_effective_rate():
    summary = TaxEstimator().annual_summary([], [], 2022)
    assert summary.effective_tax_rate == 0
    assert summary.total_tax_liability == 0


@pytest.mark.parametrize("rate", [-0.1, 1.5])
def test_rate_must_be_a_fraction(rate):
    with pytest.raises(ValueError):
        TaxEstimator(rate)
