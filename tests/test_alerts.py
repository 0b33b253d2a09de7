"""Alerts fire once and never revert."""

import pytest

from portfolio_tracker.alerts import AlertEvaluator, clear_triggered, create_alert, delete_alert
from portfolio_tracker.models import ActiveAlert, Quote, TriggeredAlert


def _quotes(**prices: float):
    return {symbol: Quote.from_prices(symbol, price, price, "USD", "2024-06-01") for symbol, price in prices.items()}


@pytest.mark.parametrize(
    "condition, target, price, fires",
    [
        ("above", 100.0, 100.0, True),
        ("above", 100.0, 99.99, False),
        ("above", 100.0, 120.0, True),
        ("below", 100.0, 100.0, True),
        ("below", 100.0, 100.01, False),
        ("below", 100.0, 80.0, True),
    ],
)
def test_boundaries_are_inclusive(condition, target, price, fires):
    alert = create_alert("AAPL", condition, target, alert_id="a1", now="t0")

    result = AlertEvaluator().evaluate([alert], _quotes(AAPL=price), now="t1")

    assert (len(result.newly_triggered) == 1) is fires
    assert isinstance(result.alerts[0], TriggeredAlert) is fires
    if fires:
        fired = result.newly_triggered[0]
        assert fired.triggered_at == "t1"
        assert fired.trigger_price == price
        assert fired.created_at == "t0"


def test_missing_quote_leaves_alert_unchanged():
    alert = create_alert("MSFT", "above", 10.0, alert_id="a1")

    result = AlertEvaluator().evaluate([alert], _quotes(AAPL=500.0))

    assert result.alerts == [alert]
    assert result.newly_triggered == []


def test_error_flagged_quote_is_ignored():
    alert = create_alert("MSFT", "below", 10.0, alert_id="a1")

    result = AlertEvaluator().evaluate([alert], {"MSFT": Quote.unavailable("MSFT")})

    assert result.newly_triggered == []
    assert result.alerts == [alert]


def test_triggered_alert_never_fires_again_or_reverts():
    evaluator = AlertEvaluator()
    alerts = [create_alert("AAPL", "above", 100.0, alert_id="a1")]

    first = evaluator.evaluate(alerts, _quotes(AAPL=150.0))
    assert len(first.newly_triggered) == 1

    current = first.alerts
    for price in (150.0, 50.0, 100.0, 1000.0):
        step = evaluator.evaluate(current, _quotes(AAPL=price))
        assert step.newly_triggered == []
        assert isinstance(step.alerts[0], TriggeredAlert)
        assert step.alerts[0] == first.alerts[0]
        current = step.alerts


def test_evaluation_preserves_order_and_input():
    alerts = [
        create_alert("A", "above", 10.0, alert_id="1"),
        create_alert("B", "below", 10.0, alert_id="2"),
        create_alert("C", "above", 10.0, alert_id="3"),
    ]

    result = AlertEvaluator().evaluate(alerts, _quotes(A=5.0, B=5.0, C=15.0))

    assert [a.id for a in result.alerts] == ["1", "2", "3"]
    assert [a.id for a in result.newly_triggered] == ["2", "3"]
    assert all(isinstance(a, ActiveAlert) for a in alerts)


def test_clear_triggered_keeps_active_alerts():
    alerts = [create_alert("A", "above", 10.0, alert_id="1"), create_alert("B", "above", 10.0, alert_id="2")]
    evaluated = AlertEvaluator().evaluate(alerts, _quotes(A=20.0)).alerts

    remaining = clear_triggered(evaluated)

    assert [a.id for a in remaining] == ["2"]
    assert not remaining[0].triggered


def test_delete_alert_by_id():
    alerts = [create_alert("A", "above", 10.0, alert_id="1"), create_alert("B", "above", 10.0, alert_id="2")]
    assert [a.id for a in delete_alert(alerts, "1")] == ["2"]


@pytest.mark.parametrize("condition, target", [("sideways", 10.0), ("above", 0.0), ("below", -5.0)])
def test_create_alert_validates_input(condition, target):
    with pytest.raises(ValueError):
        create_alert("A", condition, target)


def test_alerts_are_immutable():
    alert = create_alert("A", "above", 10.0)
    with pytest.raises(AttributeError):
        alert.target_price = 5.0
