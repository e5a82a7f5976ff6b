# src/journal/events.py
"""Domain events emitted by journal mutations."""
from dataclasses import dataclass


@dataclass(frozen=True)
class TradeWon:
    """A newly logged trade closed in profit."""

    trade_id: str
    pair: str
    result: float


@dataclass(frozen=True)
class TradeLost:
    """A newly logged trade closed at a loss."""

    trade_id: str
    pair: str
    result: float


@dataclass(frozen=True)
class ObjectiveCompleted:
    """An objective moved from in progress to completed."""

    objective_id: str
    title: str
    current_value: float


JournalEvent = TradeWon | TradeLost | ObjectiveCompleted
