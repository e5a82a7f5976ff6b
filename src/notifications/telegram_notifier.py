# src/notifications/telegram_notifier.py
"""Telegram notification sender."""

import logging
from collections.abc import Sequence
from datetime import date

from telegram import Bot

from src.journal.events import JournalEvent, ObjectiveCompleted, TradeLost, TradeWon
from src.journal.models import JournalStatistics
from src.journal.preferences import JournalPreferences, NotificationChannel

from .alert_formatter import AlertFormatter
from .models import Alert, AlertType
from .settings import NotificationSettings

logger = logging.getLogger(__name__)


class TelegramNotifier:
    """Sends journal alerts via Telegram.

    Delivery is best effort: every failure is logged and reported as a False
    result, never raised to the caller.

    Attributes:
        _settings: Notification settings.
        _formatter: Alert formatter.
        _bot: Telegram bot instance.
    """

    def __init__(
        self,
        settings: NotificationSettings,
        formatter: AlertFormatter,
    ):
        """Initialize the notifier.

        Args:
            settings: Notification settings.
            formatter: Alert formatter for message formatting.
        """
        self._settings = settings
        self._formatter = formatter
        self._bot: Bot | None = None

    async def start(self) -> None:
        """Initialize the Telegram bot."""
        if not self.is_enabled:
            logger.info("Telegram notifications disabled")
            return

        self._bot = Bot(token=self._settings.telegram_token)
        logger.info("Telegram notifier started")

    async def stop(self) -> None:
        """Shutdown the bot gracefully."""
        self._bot = None
        logger.info("Telegram notifier stopped")

    @property
    def is_enabled(self) -> bool:
        """Check if notifications are enabled and configured."""
        return self._settings.enabled and self._settings.is_configured

    async def send_alert(self, alert: Alert) -> bool:
        """Send a generic alert, followed by its audio cue if any.

        Args:
            alert: The alert to send.

        Returns:
            True if the message was sent, False otherwise. A failed audio
            cue does not fail the alert.
        """
        if not self.is_enabled:
            return False

        if self._bot is None:
            logger.warning("Bot not initialized, cannot send alert")
            return False

        try:
            await self._bot.send_message(
                chat_id=self._settings.chat_id,
                text=alert.message,
                parse_mode="HTML",
            )
            logger.info(f"Sent {alert.alert_type.value} alert")
        except Exception as e:
            logger.error(f"Failed to send alert: {e}")
            return False

        if alert.sound_url and self._settings.send_audio_cues:
            try:
                await self._bot.send_audio(
                    chat_id=self._settings.chat_id,
                    audio=alert.sound_url,
                )
            except Exception as e:
                logger.warning(f"Failed to send audio cue: {e}")

        return True

    def build_alert(self, event: JournalEvent, channel: NotificationChannel) -> Alert:
        """Turn a domain event into an alert for its channel.

        Args:
            event: The journal event.
            channel: Channel preferences carrying the sound options.

        Returns:
            The alert to send.
        """
        if isinstance(event, TradeWon):
            alert_type = AlertType.WIN_TRADE
            message = self._formatter.format_trade_won(event)
        elif isinstance(event, TradeLost):
            alert_type = AlertType.LOSS_TRADE
            message = self._formatter.format_trade_lost(event)
        elif isinstance(event, ObjectiveCompleted):
            alert_type = AlertType.OBJECTIVE_REACHED
            message = self._formatter.format_objective_reached(event)
        else:
            raise TypeError(f"Unsupported event: {type(event).__name__}")

        return Alert(
            alert_type=alert_type,
            message=message,
            sound_url=channel.sound_to_play,
        )

    async def dispatch(
        self, events: Sequence[JournalEvent], preferences: JournalPreferences
    ) -> int:
        """Send the alerts of journal events whose channel is enabled.

        Args:
            events: Events emitted by a journal mutation.
            preferences: Current journal preferences.

        Returns:
            Number of alerts sent.
        """
        sent = 0
        for event in events:
            channel = preferences.notifications.channel_for(event)
            if not channel.enabled:
                logger.debug(f"Channel for {type(event).__name__} disabled")
                continue
            if await self.send_alert(self.build_alert(event, channel)):
                sent += 1
        return sent

    def mantra_for(self, day: date) -> str | None:
        """Pick the mantra of a day, rotating through the configured list."""
        if not self._settings.mantras:
            return None
        return self._settings.mantras[day.toordinal() % len(self._settings.mantras)]

    async def send_daily_mantra(
        self, preferences: JournalPreferences, day: date | None = None
    ) -> bool:
        """Send the daily mantra if its channel is enabled.

        Args:
            preferences: Current journal preferences.
            day: Day selecting the mantra, defaults to today.

        Returns:
            True if sent successfully.
        """
        channel = preferences.notifications.daily_mantra
        mantra = self.mantra_for(day or date.today())
        if not channel.enabled or mantra is None:
            return False

        alert = Alert(
            alert_type=AlertType.DAILY_MANTRA,
            message=self._formatter.format_daily_mantra(mantra),
            sound_url=channel.sound_to_play,
        )
        return await self.send_alert(alert)

    async def send_statistics(self, stats: JournalStatistics) -> bool:
        """Send a statistics digest without audio cue.

        Args:
            stats: Statistics to report.

        Returns:
            True if sent successfully.
        """
        alert = Alert(
            alert_type=AlertType.JOURNAL_DIGEST,
            message=self._formatter.format_statistics(stats),
        )
        return await self.send_alert(alert)
