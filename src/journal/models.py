# src/journal/models.py
"""Data models for the trading journal."""
import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TradeDirection(str, Enum):
    """Side of a closed position."""

    BUY = "Buy"
    SELL = "Sell"


class TradeStatus(str, Enum):
    """Outcome classification of a trade."""

    WIN = "Win"
    LOSS = "Loss"
    BREAKEVEN = "BE"


class TransactionKind(str, Enum):
    """Direction of a wallet cash movement."""

    INCOME = "Income"
    EXPENSE = "Expense"


class TransactionCategory(str, Enum):
    """Closed set of wallet categories.

    Values are the labels stored in the persisted documents and backups.
    """

    # Income
    SALARY = "Salaire"
    FREELANCE = "Freelance"
    DIVIDENDS = "Dividendes"
    SALE = "Vente"
    GIFT_RECEIVED = "Cadeau Recu"

    # Expense
    FOOD = "Alimentation"
    TRANSPORT = "Transport"
    SUBSCRIPTION = "Abonnement"
    SHOPPING = "Shopping"
    LEISURE = "Loisirs"
    ENTERTAINMENT = "Divertissement"
    BILLS = "Factures"
    GIFT_GIVEN = "Cadeau Offert"
    HEALTH = "Santé"
    SPORT = "Sport"
    TRAVEL = "Voyages"
    EQUIPMENT = "Matériel"
    TRAINING = "Formation"

    # Shared
    OTHER = "Autre"

    # System
    WITHDRAWN_PROFIT = "Profit Retiré"
    DEPOSIT = "Dépôt"
    OBJECTIVE = "Objectif"


class ObjectiveType(str, Enum):
    """How an objective measures its progress."""

    FINANCIAL = "Financial"
    PERFORMANCE = "Performance"
    PERSONAL = "Personal"


class ObjectiveStatus(str, Enum):
    """Completion state of an objective."""

    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class TimeFilter(str, Enum):
    """Calendar window used to scope statistics."""

    WEEK = "Week"
    MONTH = "Month"
    YEAR = "Year"
    ALL = "All"


class SeriesGranularity(str, Enum):
    """Bucket size of a cumulative P&L curve."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


def naive_local(value: datetime) -> datetime:
    """Express a timestamp as naive local time so mixed inputs compare."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


@dataclass(frozen=True)
class TradeInput:
    """Raw trade fields as collected by an input form."""

    pair: str
    direction: TradeDirection
    lot_size: float
    entry_price: float
    exit_price: float
    stop_loss: float
    take_profit: float
    date: datetime
    timeframe: str | None = None
    notes: str | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class TradeEvaluation:
    """Values derived once from a trade's prices."""

    result: float
    risk_reward: float
    status: TradeStatus


@dataclass(frozen=True)
class Trade:
    """A single closed position in the journal."""

    id: str
    pair: str
    direction: TradeDirection
    lot_size: float
    entry_price: float
    exit_price: float
    stop_loss: float
    take_profit: float

    # Derived at creation
    result: float
    risk_reward: float
    status: TradeStatus

    date: datetime
    timeframe: str | None = None
    notes: str | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class TransactionInput:
    """Raw wallet movement fields as collected by an input form."""

    kind: TransactionKind
    amount: float
    category: TransactionCategory
    date: datetime
    description: str = ""


@dataclass(frozen=True)
class Transaction:
    """A single wallet cash movement."""

    id: str
    kind: TransactionKind
    amount: float
    category: TransactionCategory
    description: str
    date: datetime


@dataclass(frozen=True)
class ObjectiveInput:
    """Raw objective fields as collected by an input form."""

    title: str
    target_value: float
    objective_type: ObjectiveType
    start_date: datetime
    end_date: datetime
    image_url: str = ""
    description: str | None = None


@dataclass(frozen=True)
class Objective:
    """A savings or performance goal tracked toward completion."""

    id: str
    title: str
    target_value: float
    objective_type: ObjectiveType
    image_url: str
    start_date: datetime
    end_date: datetime

    current_value: float = 0.0
    status: ObjectiveStatus = ObjectiveStatus.IN_PROGRESS
    deposited_funds: float = 0.0

    description: str | None = None
    manual_progress: float | None = None

    @property
    def is_completed(self) -> bool:
        """Check if the objective has reached its target."""
        return self.status == ObjectiveStatus.COMPLETED

    @property
    def progress_ratio(self) -> float:
        """Fraction of the target reached, uncapped."""
        if self.target_value <= 0:
            return 0.0
        return self.current_value / self.target_value


@dataclass(frozen=True)
class JournalStatistics:
    """Aggregated journal metrics for one time filter.

    profit_factor is ``math.inf`` when the filtered trades contain gains but
    no losses. Callers that feed it into further arithmetic should check
    ``has_infinite_profit_factor`` first.
    """

    time_filter: TimeFilter

    total_trades: int
    winning_trades: int
    losing_trades: int

    total_pnl: float
    win_rate: float
    profit_factor: float
    avg_risk_reward: float

    gross_profit: float
    gross_loss: float

    total_income: float
    total_expense: float
    wallet_balance: float
    spending_ratio: float

    @property
    def has_infinite_profit_factor(self) -> bool:
        """Check if the profit factor is the no-loss sentinel."""
        return math.isinf(self.profit_factor)

    def profit_factor_display(self, precision: int = 2) -> str:
        """Render the profit factor, using the infinity sign for the sentinel."""
        if self.has_infinite_profit_factor:
            return "∞"
        return f"{self.profit_factor:.{precision}f}"


@dataclass(frozen=True)
class MonthlySummary:
    """Trading activity of one calendar month."""

    year: int
    month: int
    total_trades: int
    wins: int
    gross_profit: float
    gross_loss: float
    net_pnl: float
    win_rate: float
    profitable_days: int
    negative_days: int


@dataclass(frozen=True)
class SeriesPoint:
    """One labelled point of a cumulative P&L curve."""

    label: str
    value: float


@dataclass(frozen=True)
class WeeklyOverview:
    """P&L of each day of the current Monday-based week."""

    week_start: datetime
    daily_pnl: list[tuple[str, float]]
    total_pnl: float
