"""Dividend tracking and investment goal progress."""
from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Mapping, Optional

from .models import Dividend, DividendSchedule, Goal, GoalProgress, Holding, UpcomingDividend

PAYMENT_DAY = 25  # projected payout day within a scheduled month

DEFAULT_DIVIDEND_SCHEDULES: Mapping[str, DividendSchedule] = {
    "3003.T": DividendSchedule("3003.T", [3, 9], "Hulic"),
    "9532.T": DividendSchedule("9532.T", [3, 9], "Osaka Gas"),
    "HUM": DividendSchedule("HUM", [1, 4, 7, 10], "Humana"),
}


def total_dividends(dividends: Iterable[Dividend], year: Optional[int] = None) -> float:
    prefix = str(year) if year is not None else ""
    return sum(d.amount or 0.0 for d in dividends if (d.date or "").startswith(prefix))


def upcoming_dividends(
    holdings: Iterable[Holding],
    schedules: Mapping[str, DividendSchedule] = DEFAULT_DIVIDEND_SCHEDULES,
    today: Optional[date] = None,
) -> List[UpcomingDividend]:
    """Project payouts over the next 365 days from known payout months."""
    today = today or date.today()
    horizon = today + timedelta(days=365)
    upcoming: List[UpcomingDividend] = []
    for holding in holdings:
        schedule = schedules.get(holding.symbol)
        if schedule is None:
            continue
        for month in schedule.months:
            for year in (today.year, today.year + 1):
                payout = date(year, month, PAYMENT_DAY)
                if today < payout < horizon:
                    upcoming.append(
                        UpcomingDividend(
                            symbol=holding.symbol,
                            name=schedule.name or holding.name,
                            date=payout.isoformat(),
                            month=month,
                            year=year,
                            quantity=holding.quantity,
                        )
                    )
    return sorted(upcoming, key=lambda d: d.date)


def goal_progress(goal: Goal, portfolio_value: float) -> GoalProgress:
    if goal.target_amount <= 0:
        percent = 0.0
    else:
        percent = min(portfolio_value / goal.target_amount * 100, 100.0)
    return GoalProgress(goal=goal, current_value=portfolio_value, percent=percent, complete=percent >= 100)


__all__ = ["DEFAULT_DIVIDEND_SCHEDULES", "goal_progress", "total_dividends", "upcoming_dividends"]
