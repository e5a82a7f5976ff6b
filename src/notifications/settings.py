# src/notifications/settings.py
"""Settings for notifications module."""

from pydantic import BaseModel, Field, computed_field


class NotificationSettings(BaseModel):
    """Configuration for Telegram notifications.

    Which events are announced is decided by the journal preferences; these
    settings describe the delivery transport and the daily schedule.

    Attributes:
        enabled: Whether notifications are enabled.
        telegram_token: Bot token from BotFather.
        chat_id: Telegram chat ID to send messages to.
        send_audio_cues: Whether channel sounds are forwarded as audio.
        daily_mantra_time: Local time of the daily mantra (HH:MM).
        send_daily_digest: Whether a statistics digest follows the mantra.
        mantras: Rotating mantra texts, one per day.
    """

    enabled: bool = True
    telegram_token: str = ""
    chat_id: str = ""

    send_audio_cues: bool = True

    daily_mantra_time: str = Field(default="09:00", pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    send_daily_digest: bool = True
    mantras: list[str] = [
        "Plan the trade, trade the plan.",
        "Protect the capital first.",
        "One setup, one entry, one stop.",
        "A loss is a cost of doing business.",
        "Patience pays more than activity.",
    ]

    @computed_field
    @property
    def is_configured(self) -> bool:
        """Check if Telegram credentials are configured."""
        return bool(self.telegram_token and self.chat_id)
