# src/journal/settings.py
"""Settings for the journal module."""
from pydantic import BaseModel, Field, field_validator

from src.journal.models import TimeFilter
from src.journal.trade_evaluator import CONTRACT_MULTIPLIER


class JournalSettings(BaseModel):
    """Configuration settings for the trading journal.

    Attributes:
        data_dir: Directory holding the persisted JSON documents.
        contract_multiplier: Money per point per lot used for trade P&L.
        default_time_filter: Window applied when statistics are requested
            without one.
        backup_prefix: File name prefix of exported backups.
    """

    data_dir: str = "data/journal"

    contract_multiplier: float = Field(default=CONTRACT_MULTIPLIER, gt=0)

    default_time_filter: TimeFilter = TimeFilter.ALL

    backup_prefix: str = Field(default="journal-trading-backup", min_length=1)

    @field_validator("default_time_filter", mode="before")
    @classmethod
    def validate_time_filter(cls, v: object) -> object:
        """Accept time filter names in any case."""
        if isinstance(v, str):
            valid_filters = {f.value.lower(): f for f in TimeFilter}
            if v.lower() not in valid_filters:
                raise ValueError(
                    f"Invalid time filter: {v}. Must be one of {sorted(valid_filters)}"
                )
            return valid_filters[v.lower()]
        return v
