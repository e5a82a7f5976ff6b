"""Notifications module for journal alerts via Telegram."""

from .alert_formatter import AlertFormatter
from .daily_scheduler import DailyScheduler
from .models import Alert, AlertType
from .settings import NotificationSettings
from .telegram_notifier import TelegramNotifier

__all__ = [
    "Alert",
    "AlertFormatter",
    "AlertType",
    "DailyScheduler",
    "NotificationSettings",
    "TelegramNotifier",
]
