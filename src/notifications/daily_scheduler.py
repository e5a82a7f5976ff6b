# src/notifications/daily_scheduler.py
"""Background task sending the daily mantra and statistics digest."""

import asyncio
import logging
from datetime import date, datetime, time, timedelta

from src.journal.journal_manager import JournalManager

from .settings import NotificationSettings
from .telegram_notifier import TelegramNotifier

logger = logging.getLogger(__name__)


def parse_time(time_str: str) -> time:
    """Parse HH:MM string to time object."""
    hours, minutes = time_str.split(":")
    return time(int(hours), int(minutes))


def seconds_until(run_at: time, now: datetime) -> float:
    """Seconds from now to the next occurrence of a local time of day.

    A run time equal to now is scheduled for the following day.
    """
    next_run = datetime.combine(now.date(), run_at)
    if next_run <= now:
        next_run += timedelta(days=1)
    return (next_run - now).total_seconds()


class DailyScheduler:
    """Sends the daily mantra, then optionally a statistics digest.

    The mantra follows the journal preferences (its channel can be turned
    off); the digest covers the journal's default time filter.
    """

    def __init__(
        self,
        notifier: TelegramNotifier,
        settings: NotificationSettings,
        journal: JournalManager,
    ):
        self._notifier = notifier
        self._settings = settings
        self._journal = journal
        self._run_at = parse_time(settings.daily_mantra_time)
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the background task."""
        if self._task is not None:
            raise RuntimeError("Scheduler already running")

        self._task = asyncio.create_task(self._run())
        logger.info(f"Daily mantra scheduled at {self._settings.daily_mantra_time}")

    async def stop(self) -> None:
        """Cancel the background task and wait for it to finish."""
        if self._task is None:
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Daily scheduler stopped")

    async def wait(self) -> None:
        """Block until the background task ends."""
        if self._task is not None:
            await self._task

    async def run_once(self, day: date | None = None) -> int:
        """Send today's messages.

        Args:
            day: Day selecting the mantra, defaults to today.

        Returns:
            Number of messages sent.
        """
        sent = 0
        if await self._notifier.send_daily_mantra(self._journal.preferences, day):
            sent += 1
        if self._settings.send_daily_digest:
            if await self._notifier.send_statistics(self._journal.get_statistics()):
                sent += 1
        return sent

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(seconds_until(self._run_at, datetime.now()))
            try:
                sent = await self.run_once()
                logger.info(f"Daily messages sent: {sent}")
            except Exception as e:
                logger.error(f"Daily messages failed: {e}")
