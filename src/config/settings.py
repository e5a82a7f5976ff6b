# src/config/settings.py
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.journal.settings import JournalSettings
from src.notifications.settings import NotificationSettings


class SystemConfig(BaseModel):
    name: str = "Trading Journal"
    version: str = "1.0.0"
    log_level: str = Field(default="INFO", pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


class TelegramConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TELEGRAM_")

    bot_token: str = ""
    chat_id: str = ""


class Settings(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    journal: JournalSettings = Field(default_factory=JournalSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    telegram: TelegramConfig = Field(default_factory=TelegramConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file with env var overrides."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        telegram = TelegramConfig()

        notifications = dict(data.pop("notifications", None) or {})
        if telegram.bot_token:
            notifications["telegram_token"] = telegram.bot_token
        if telegram.chat_id:
            notifications["chat_id"] = telegram.chat_id

        return cls(
            **data,
            notifications=notifications,
            telegram=telegram,
        )
