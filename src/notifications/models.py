"""Data models for notifications."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class AlertType(Enum):
    """Type of alert to send."""

    WIN_TRADE = "win_trade"
    LOSS_TRADE = "loss_trade"
    OBJECTIVE_REACHED = "objective_reached"
    DAILY_MANTRA = "daily_mantra"
    JOURNAL_DIGEST = "journal_digest"


@dataclass
class Alert:
    """An alert to be sent via Telegram.

    Attributes:
        alert_type: Type of alert.
        message: Pre-formatted message.
        sound_url: Audio cue to send along, if any.
        timestamp: When the alert was created.
    """

    alert_type: AlertType
    message: str = ""
    sound_url: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)
