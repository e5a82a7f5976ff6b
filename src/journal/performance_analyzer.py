# src/journal/performance_analyzer.py
"""Analyzer for calendar views of trading performance."""
from collections import defaultdict
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from src.journal.metrics_calculator import win_rate_percent
from src.journal.models import (
    MonthlySummary,
    SeriesGranularity,
    SeriesPoint,
    Trade,
    TradeStatus,
    Transaction,
    TransactionCategory,
    TransactionKind,
    WeeklyOverview,
    naive_local,
)

MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def _trade_day(trade: Trade) -> date:
    return naive_local(trade.date).date()


def _month_end(anchor: date) -> date:
    if anchor.month == 12:
        return date(anchor.year, 12, 31)
    return date(anchor.year, anchor.month + 1, 1) - timedelta(days=1)


def _week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


class PerformanceAnalyzer:
    """Groups trade results by calendar day, week and month."""

    def trades_for_day(self, trades: Iterable[Trade], day: date) -> list[Trade]:
        """Get the trades closed on a calendar day."""
        return [t for t in trades if _trade_day(t) == day]

    def daily_pnl(self, trades: Iterable[Trade], day: date) -> float:
        """Net result of the trades closed on a calendar day."""
        return sum(t.result for t in self.trades_for_day(trades, day))

    def _pnl_by_day(self, trades: Iterable[Trade]) -> dict[date, float]:
        day_pnl: dict[date, float] = defaultdict(float)
        for trade in trades:
            day_pnl[_trade_day(trade)] += trade.result
        return day_pnl

    def monthly_summary(self, trades: Iterable[Trade], anchor: date) -> MonthlySummary:
        """Summarize the calendar month containing a date.

        Args:
            trades: Journal trades.
            anchor: Any day of the month to summarize.

        Returns:
            MonthlySummary for that month.
        """
        month_trades = [
            t for t in trades
            if (_trade_day(t).year, _trade_day(t).month) == (anchor.year, anchor.month)
        ]

        gross_profit = sum(t.result for t in month_trades if t.result > 0)
        gross_loss = sum(t.result for t in month_trades if t.result < 0)

        day_pnl = self._pnl_by_day(month_trades)
        profitable_days = sum(1 for pnl in day_pnl.values() if pnl > 0)
        negative_days = sum(1 for pnl in day_pnl.values() if pnl < 0)

        return MonthlySummary(
            year=anchor.year,
            month=anchor.month,
            total_trades=len(month_trades),
            wins=sum(1 for t in month_trades if t.status == TradeStatus.WIN),
            gross_profit=gross_profit,
            gross_loss=gross_loss,
            net_pnl=gross_profit + gross_loss,
            win_rate=win_rate_percent(month_trades),
            profitable_days=profitable_days,
            negative_days=negative_days,
        )

    def cumulative_series(
        self,
        trades: Iterable[Trade],
        anchor: date,
        granularity: SeriesGranularity = SeriesGranularity.DAILY,
    ) -> list[SeriesPoint]:
        """Build a cumulative P&L curve up to the end of the anchor month.

        Daily points cover the days of the anchor month. Weekly points cover
        Monday-based weeks and monthly points cover months, both from the
        start of the anchor year.

        Args:
            trades: Journal trades.
            anchor: Any day of the last month on the curve.
            granularity: Bucket size.

        Returns:
            Labelled cumulative values, oldest first.
        """
        trades = list(trades)
        month_end = _month_end(anchor)
        points: list[SeriesPoint] = []
        cumulative = 0.0

        if granularity == SeriesGranularity.DAILY:
            day_pnl = self._pnl_by_day(trades)
            day = anchor.replace(day=1)
            while day <= month_end:
                cumulative += day_pnl.get(day, 0.0)
                points.append(SeriesPoint(label=str(day.day), value=cumulative))
                day += timedelta(days=1)

        elif granularity == SeriesGranularity.WEEKLY:
            week_pnl: dict[date, float] = defaultdict(float)
            for trade in trades:
                week_pnl[_week_start(_trade_day(trade))] += trade.result

            week = _week_start(date(anchor.year, 1, 1))
            index = 1
            while week <= month_end:
                cumulative += week_pnl.get(week, 0.0)
                points.append(SeriesPoint(label=f"W{index}", value=cumulative))
                week += timedelta(days=7)
                index += 1

        else:
            month_pnl: dict[tuple[int, int], float] = defaultdict(float)
            for trade in trades:
                day = _trade_day(trade)
                month_pnl[(day.year, day.month)] += trade.result

            for month in range(1, anchor.month + 1):
                cumulative += month_pnl.get((anchor.year, month), 0.0)
                points.append(SeriesPoint(label=MONTH_LABELS[month - 1], value=cumulative))

        return points

    def weekly_overview(
        self, trades: Iterable[Trade], now: datetime | None = None
    ) -> WeeklyOverview:
        """Per-weekday P&L of the Monday-based week containing now."""
        today = (naive_local(now) if now is not None else datetime.now()).date()
        start = _week_start(today)
        day_pnl = self._pnl_by_day(trades)

        daily = [
            (WEEKDAY_LABELS[offset], day_pnl.get(start + timedelta(days=offset), 0.0))
            for offset in range(7)
        ]

        return WeeklyOverview(
            week_start=datetime.combine(start, datetime.min.time()),
            daily_pnl=daily,
            total_pnl=sum(pnl for _, pnl in daily),
        )

    def expense_breakdown(
        self, transactions: Iterable[Transaction], limit: int | None = 5
    ) -> list[tuple[TransactionCategory, float]]:
        """Total expenses per category, largest first.

        Args:
            transactions: Wallet transactions.
            limit: Maximum number of categories returned, None for all.

        Returns:
            List of (category, total) tuples.
        """
        totals: dict[TransactionCategory, float] = defaultdict(float)
        for transaction in transactions:
            if transaction.kind == TransactionKind.EXPENSE:
                totals[transaction.category] += transaction.amount

        ranked = sorted(totals.items(), key=lambda x: x[1], reverse=True)
        return ranked if limit is None else ranked[:limit]
