# src/notifications/alert_formatter.py
"""Formats journal events for Telegram messages."""

from html import escape

from src.journal.events import ObjectiveCompleted, TradeLost, TradeWon
from src.journal.models import JournalStatistics


class AlertFormatter:
    """Formats journal data into readable Telegram messages."""

    def format_trade_won(self, event: TradeWon) -> str:
        """Format a winning trade alert."""
        return f"""🚀 TRADE WON!

💰 Profit of ${event.result:,.2f} on {escape(event.pair)}"""

    def format_trade_lost(self, event: TradeLost) -> str:
        """Format a losing trade alert."""
        return f"""📉 TRADE LOST

💸 Loss of ${abs(event.result):,.2f} on {escape(event.pair)}"""

    def format_objective_reached(self, event: ObjectiveCompleted) -> str:
        """Format an objective completion alert."""
        return f"""🏆 OBJECTIVE REACHED!

🎯 Congratulations, you completed: {escape(event.title)}
📊 Current value: {event.current_value:,.2f}"""

    def format_daily_mantra(self, mantra: str) -> str:
        """Format the daily mantra reminder."""
        return f"""🧘 DAILY MANTRA

{escape(mantra)}"""

    def format_statistics(self, stats: JournalStatistics) -> str:
        """Format a statistics digest."""
        if stats.total_trades == 0:
            return f"""📊 JOURNAL - {stats.time_filter.value}

No trades in this period.
👛 Wallet: ${stats.wallet_balance:,.2f}"""

        pnl_emoji = "📈" if stats.total_pnl >= 0 else "📉"

        return f"""📊 JOURNAL - {stats.time_filter.value}

📈 Trades: {stats.total_trades}
✅ Win rate: {stats.win_rate:.0f}%
{pnl_emoji} PnL: ${stats.total_pnl:+,.2f}
⭐ Profit Factor: {stats.profit_factor_display(1)}
⚖️ Avg R:R: {stats.avg_risk_reward:.2f}
👛 Wallet: ${stats.wallet_balance:,.2f}"""
