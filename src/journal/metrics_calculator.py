# src/journal/metrics_calculator.py
"""Calculator for journal statistics."""
import math
from collections.abc import Iterable
from datetime import datetime, timedelta

from src.journal.models import (
    JournalStatistics,
    TimeFilter,
    Trade,
    TradeStatus,
    Transaction,
    TransactionKind,
    naive_local,
)


def time_window(
    time_filter: TimeFilter, now: datetime | None = None
) -> tuple[datetime, datetime] | None:
    """Get the inclusive calendar window of a time filter.

    Args:
        time_filter: Week (Monday start), Month, Year or All.
        now: Anchor instant, defaults to the current local time.

    Returns:
        (start, end) as naive local datetimes, or None for All.
    """
    if time_filter == TimeFilter.ALL:
        return None

    anchor = naive_local(now) if now is not None else datetime.now()
    midnight = anchor.replace(hour=0, minute=0, second=0, microsecond=0)

    if time_filter == TimeFilter.WEEK:
        start = midnight - timedelta(days=midnight.weekday())
        next_start = start + timedelta(days=7)
    elif time_filter == TimeFilter.MONTH:
        start = midnight.replace(day=1)
        if start.month == 12:
            next_start = start.replace(year=start.year + 1, month=1)
        else:
            next_start = start.replace(month=start.month + 1)
    else:
        start = midnight.replace(month=1, day=1)
        next_start = start.replace(year=start.year + 1)

    return start, next_start - timedelta(microseconds=1)


def is_in_time_filter(
    moment: datetime, time_filter: TimeFilter, now: datetime | None = None
) -> bool:
    """Check if a timestamp falls inside a time filter's window."""
    window = time_window(time_filter, now)
    if window is None:
        return True
    start, end = window
    return start <= naive_local(moment) <= end


def filter_trades(
    trades: Iterable[Trade], time_filter: TimeFilter, now: datetime | None = None
) -> list[Trade]:
    """Select trades inside a time filter's window, preserving order."""
    window = time_window(time_filter, now)
    if window is None:
        return list(trades)
    start, end = window
    return [t for t in trades if start <= naive_local(t.date) <= end]


def win_rate_percent(trades: list[Trade]) -> float:
    """Percentage of winning trades, 0 for an empty list."""
    if not trades:
        return 0.0
    wins = sum(1 for t in trades if t.status == TradeStatus.WIN)
    return wins / len(trades) * 100


def profit_factor(gross_profit: float, gross_loss: float) -> float:
    """Ratio of gains to absolute losses.

    Returns ``math.inf`` when there are gains and no losses, and 0 when there
    is neither.
    """
    losses = abs(gross_loss)
    if losses > 0:
        return gross_profit / losses
    return math.inf if gross_profit > 0 else 0.0


class MetricsCalculator:
    """Calculates journal statistics from trades and wallet transactions."""

    def calculate(
        self,
        trades: Iterable[Trade],
        transactions: Iterable[Transaction],
        time_filter: TimeFilter = TimeFilter.ALL,
        now: datetime | None = None,
    ) -> JournalStatistics:
        """Calculate statistics for one time filter.

        Trades are scoped to the filter window; wallet totals always cover
        the full transaction history.

        Args:
            trades: Journal trades.
            transactions: Wallet transactions.
            time_filter: Window applied to trades.
            now: Anchor instant for the window.

        Returns:
            JournalStatistics with all calculated values.
        """
        filtered = filter_trades(trades, time_filter, now)

        winners = [t for t in filtered if t.status == TradeStatus.WIN]
        losers = [t for t in filtered if t.result < 0]

        gross_profit = sum(t.result for t in filtered if t.result > 0)
        gross_loss = sum(t.result for t in losers)

        avg_risk_reward = (
            sum(t.risk_reward for t in filtered) / len(filtered) if filtered else 0.0
        )

        total_income, total_expense = self._wallet_totals(transactions)

        return JournalStatistics(
            time_filter=time_filter,
            total_trades=len(filtered),
            winning_trades=len(winners),
            losing_trades=len(losers),
            total_pnl=sum(t.result for t in filtered),
            win_rate=win_rate_percent(filtered),
            profit_factor=profit_factor(gross_profit, gross_loss),
            avg_risk_reward=avg_risk_reward,
            gross_profit=gross_profit,
            gross_loss=gross_loss,
            total_income=total_income,
            total_expense=total_expense,
            wallet_balance=total_income - total_expense,
            spending_ratio=self._spending_ratio(total_income, total_expense),
        )

    def _wallet_totals(self, transactions: Iterable[Transaction]) -> tuple[float, float]:
        """Sum income and expense amounts."""
        total_income = 0.0
        total_expense = 0.0

        for transaction in transactions:
            if transaction.kind == TransactionKind.INCOME:
                total_income += transaction.amount
            else:
                total_expense += transaction.amount

        return total_income, total_expense

    def _spending_ratio(self, total_income: float, total_expense: float) -> float:
        """Share of income that has been spent."""
        if total_income > 0:
            return total_expense / total_income
        return 1.0 if total_expense > 0 else 0.0
