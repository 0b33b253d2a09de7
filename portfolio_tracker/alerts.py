"""Price alert evaluation.

An alert is either ``ActiveAlert`` or ``TriggeredAlert``. Only
``AlertEvaluator.evaluate`` turns the former into the latter, and a triggered
alert never goes back, so every trigger is reported exactly once.
"""
from __future__ import annotations

import logging
import math
import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Mapping, Optional

from .models import ActiveAlert, Alert, AlertEvaluation, Quote, TriggeredAlert

logger = logging.getLogger(__name__)

ABOVE = "above"
BELOW = "below"
CONDITIONS = (ABOVE, BELOW)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_alert(symbol: str, condition: str, target_price: float,
                 alert_id: Optional[str] = None, now: Optional[str] = None) -> ActiveAlert:
    if condition not in CONDITIONS:
        raise ValueError(f"Alert condition must be one of {CONDITIONS}, got {condition!r}")
    if not target_price > 0:
        raise ValueError(f"Alert target price must be positive, got {target_price}")
    return ActiveAlert(
        id=alert_id or uuid.uuid4().hex,
        symbol=symbol,
        condition=condition,
        target_price=float(target_price),
        created_at=now or _now(),
    )


def condition_met(alert: ActiveAlert, price: float) -> bool:
    if alert.condition == ABOVE:
        return price >= alert.target_price
    if alert.condition == BELOW:
        return price <= alert.target_price
    return False


class AlertEvaluator:
    def evaluate(self, alerts: Iterable[Alert], quotes: Mapping[str, Quote],
                 now: Optional[str] = None) -> AlertEvaluation:
        now = now or _now()
        updated: List[Alert] = []
        fired: List[TriggeredAlert] = []
        for alert in alerts:
            if isinstance(alert, TriggeredAlert):
                updated.append(alert)
                continue
            quote = quotes.get(alert.symbol)
            if quote is None or quote.error or math.isnan(quote.price):
                updated.append(alert)
                continue
            if not condition_met(alert, quote.price):
                updated.append(alert)
                continue
            triggered = TriggeredAlert(
                id=alert.id,
                symbol=alert.symbol,
                condition=alert.condition,
                target_price=alert.target_price,
                triggered_at=now,
                trigger_price=quote.price,
                created_at=alert.created_at,
            )
            logger.info(
                "Alert %s fired: %s %s %s (price %s)",
                alert.id, alert.symbol, alert.condition, alert.target_price, quote.price,
            )
            updated.append(triggered)
            fired.append(triggered)
        return AlertEvaluation(alerts=updated, newly_triggered=fired)


def clear_triggered(alerts: Iterable[Alert]) -> List[Alert]:
    return [a for a in alerts if not isinstance(a, TriggeredAlert)]


def delete_alert(alerts: Iterable[Alert], alert_id: str) -> List[Alert]:
    return [a for a in alerts if a.id != alert_id]


__all__ = [
    "ABOVE",
    "AlertEvaluator",
    "BELOW",
    "clear_triggered",
    "condition_met",
    "create_alert",
    "delete_alert",
]
