# src/journal/preferences.py
"""User preferences persisted alongside the journal."""
from pydantic import BaseModel, ConfigDict, Field

from src.journal.events import JournalEvent, ObjectiveCompleted, TradeLost, TradeWon

DEFAULT_SOUNDS = {
    "win": "https://assets.mixkit.co/active_storage/sfx/2013/2013-preview.mp3",
    "loss": "https://assets.mixkit.co/active_storage/sfx/2018/2018-preview.mp3",
    "objective": "https://assets.mixkit.co/active_storage/sfx/2000/2000-preview.mp3",
    "mantra": "https://assets.mixkit.co/active_storage/sfx/2015/2015-preview.mp3",
}

# Grey silhouette shown until the owner picks a photo
NEUTRAL_AVATAR = (
    "data:image/svg+xml;base64,PHN2ZyB3aWR0aD0iNTEyIiBoZWlnaHQ9IjUxMiIgdmlld0JveD0iMCAwID"
    "UxMiA1MTIiIGZpbGw9Im5vbmUiIHhtbG5zPSJodHRwOi8vd3d3LnczLm9yZy8yMDAwL3N2ZyI+CjxyZWN0IH"
    "dpZHRoPSI1MTIiIGhlaWdodD0iNTEyIiByeD0iMjU2IiBmaWxsPSIjRjFGNEY5Ii8+CjxwYXRoIGQ9Ik0yNT"
    "YgMTEyQzE5NS4yNDkgMTEyIDE0NiAxNjEuMjQ5IDE0NiAyMjJDMTQ2IDI4Mi43NTEgMTk1LjI0OSAzMzIgMj"
    "U2IDMzMkMzMTYuNzUxIDMzMiAzNjYgMjgyLjc1MSAzNjYgMjIyQzM2NiAxNjEuMjQ5IDMxNi43NTEgMTEyID"
    "I1NiAxMTJaTTI1NiAyOTJDMjE3LjM0IDI5MiAxODYgMjYwLjY2IDE4NiAyMjJDMTg2IDE4My4zNCAyMTcuMz"
    "QgMTUyIDI1NiAxNTJDMjk0LjY2IDE1MiAzMjYgMTgzLjM0IDMyNiAyMjJDMzI2IDI2MC42NiAyOTQuNjYgMj"
    "kyIDI1NiAyOTJaIiBmaWxsPSIjOTQ0QzYxIi8+CjxwYXRoIGQ9Ik0yNTYgMzUyQzE3MC4zOTcgMzUyIDk3Lj"
    "A5NyA0MDUuMjU5IDY2LjE1MSA0ODBDODcuMjYzIDUwMC4wODUgMTE0Ljg3MSA1MTIgMTQ1LjI5IDUxMkgzNj"
    "YuNzFDIDM5Ny4xMjkgNTEyIDQyNC43MzcgNTAwLjA4NSA0NDUuODQ5IDQ4MEM0MTQuOTAzIDQwNS4yNTkgMz"
    "QxLjYwMyAzNTIgMjU2IDM1MloiIGZpbGw9IiM5NDRDMjEiLz4KPC9zdmc+"
)


class NotificationChannel(BaseModel):
    """Delivery options for one kind of notification.

    Attributes:
        enabled: Whether the notification is sent at all.
        sound_enabled: Whether the audio cue accompanies it.
        sound_url: Location of the audio cue.
    """

    model_config = ConfigDict(populate_by_name=True)

    enabled: bool = True
    sound_enabled: bool = Field(default=True, alias="soundEnabled")
    sound_url: str = Field(default="", alias="soundUrl")

    @property
    def sound_to_play(self) -> str | None:
        """Audio cue to play with the notification, if any."""
        if self.sound_enabled and self.sound_url:
            return self.sound_url
        return None


def _channel(sound: str) -> NotificationChannel:
    return NotificationChannel(sound_url=DEFAULT_SOUNDS[sound])


class NotificationChannels(BaseModel):
    """Per-event notification channels."""

    model_config = ConfigDict(populate_by_name=True)

    win_trade: NotificationChannel = Field(
        default_factory=lambda: _channel("win"), alias="winTrade"
    )
    loss_trade: NotificationChannel = Field(
        default_factory=lambda: _channel("loss"), alias="lossTrade"
    )
    objective_reached: NotificationChannel = Field(
        default_factory=lambda: _channel("objective"), alias="objectiveReached"
    )
    daily_mantra: NotificationChannel = Field(
        default_factory=lambda: _channel("mantra"), alias="dailyMantra"
    )

    def channel_for(self, event: JournalEvent) -> NotificationChannel:
        """Get the channel that carries a domain event."""
        if isinstance(event, TradeWon):
            return self.win_trade
        if isinstance(event, TradeLost):
            return self.loss_trade
        if isinstance(event, ObjectiveCompleted):
            return self.objective_reached
        raise TypeError(f"No notification channel for {type(event).__name__}")

    def allows(self, event: JournalEvent) -> bool:
        """Check if the channel carrying an event is enabled."""
        return self.channel_for(event).enabled


class UserProfile(BaseModel):
    """Display identity of the journal owner."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = "Trader"
    photo: str = NEUTRAL_AVATAR
    header_image: str = Field(default="", alias="headerImage")


class SecuritySettings(BaseModel):
    """Access gate options."""

    model_config = ConfigDict(populate_by_name=True)

    biometric_enabled: bool = Field(default=False, alias="biometricEnabled")


class JournalPreferences(BaseModel):
    """The persisted settings record of the journal.

    Serialized with camelCase keys so backups stay interchangeable with
    other tooling reading the same documents.
    """

    model_config = ConfigDict(populate_by_name=True)

    notifications: NotificationChannels = Field(default_factory=NotificationChannels)
    profile: UserProfile = Field(default_factory=UserProfile)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    def to_document(self) -> dict:
        """Dump to the persisted JSON shape."""
        return self.model_dump(by_alias=True)
