# src/journal/journal_manager.py
"""Manager for orchestrating all journal components."""
import json
import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path
from typing import Protocol

import pandas as pd

from src.journal.categories import is_allowed
from src.journal.entity_store import EntityStore
from src.journal.events import JournalEvent, TradeLost, TradeWon
from src.journal.metrics_calculator import MetricsCalculator, win_rate_percent
from src.journal.models import (
    JournalStatistics,
    MonthlySummary,
    Objective,
    ObjectiveInput,
    ObjectiveStatus,
    ObjectiveType,
    TimeFilter,
    Trade,
    TradeDirection,
    TradeInput,
    TradeStatus,
    Transaction,
    TransactionCategory,
    TransactionInput,
    TransactionKind,
    WeeklyOverview,
)
from src.journal.objective_engine import recompute_objectives, select_next_objective
from src.journal.performance_analyzer import PerformanceAnalyzer
from src.journal.preferences import JournalPreferences
from src.journal.report_builder import build_trade_report, write_trade_report
from src.journal.serialization import (
    build_bundle,
    objective_to_dict,
    parse_bundle,
    parse_objectives,
    parse_preferences,
    parse_trades,
    parse_transactions,
    trade_to_dict,
    transaction_to_dict,
)
from src.journal.settings import JournalSettings
from src.journal.storage import (
    OBJECTIVES_KEY,
    SETTINGS_KEY,
    STORE_KEYS,
    TRADES_KEY,
    TRANSACTIONS_KEY,
    JsonKeyValueStore,
)
from src.journal.trade_evaluator import evaluate_trade

logger = logging.getLogger(__name__)


class EventNotifier(Protocol):
    """Delivers domain events to the owner."""

    async def dispatch(
        self, events: Sequence[JournalEvent], preferences: JournalPreferences
    ) -> int:
        ...


def _require_finite(value: float, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite")


def _require_positive(value: float, name: str) -> None:
    _require_finite(value, name)
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


class JournalManager:
    """Single entry point for every change to the journal.

    Each operation validates its input, applies the change to the entity
    store, recomputes objective progress when its inputs may have moved,
    persists the touched documents and hands notification events to the
    notifier. Invalid input raises ValueError and leaves the store as it was.
    """

    def __init__(
        self,
        settings: JournalSettings,
        store: JsonKeyValueStore | None = None,
        notifier: EventNotifier | None = None,
    ) -> None:
        """Initialize the journal manager with all components.

        Args:
            settings: Journal configuration settings.
            store: Document store, defaults to one rooted at settings.data_dir.
            notifier: Receiver of notification events, optional.
        """
        self._settings = settings
        self._store = store or JsonKeyValueStore(settings.data_dir)
        self._notifier = notifier
        self._state = EntityStore()
        self._metrics_calculator = MetricsCalculator()
        self._performance_analyzer = PerformanceAnalyzer()

    # Read access

    @property
    def trades(self) -> tuple[Trade, ...]:
        return tuple(self._state.trades)

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return tuple(self._state.transactions)

    @property
    def objectives(self) -> tuple[Objective, ...]:
        return tuple(self._state.objectives)

    @property
    def preferences(self) -> JournalPreferences:
        return self._state.preferences.model_copy(deep=True)

    # Lifecycle

    async def load(self) -> None:
        """Load all documents from the store.

        Missing documents start empty. Unreadable or malformed ones also
        start empty, and the store moves the original file aside so the
        next write does not replace it.
        """
        parsers = {
            TRADES_KEY: parse_trades,
            TRANSACTIONS_KEY: parse_transactions,
            OBJECTIVES_KEY: parse_objectives,
            SETTINGS_KEY: parse_preferences,
        }
        loaded = {}
        for key in STORE_KEYS:
            document = await self._store.load(key)
            if document is None:
                continue
            try:
                loaded[key] = parsers[key](document)
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Ignoring malformed {key} document: {e}")
                await self._store.quarantine(key)

        self._state = EntityStore(
            trades=loaded.get(TRADES_KEY, []),
            transactions=loaded.get(TRANSACTIONS_KEY, []),
            objectives=loaded.get(OBJECTIVES_KEY, []),
            preferences=loaded.get(SETTINGS_KEY, JournalPreferences()),
        )
        logger.info(
            f"Journal loaded: {len(self._state.trades)} trades, "
            f"{len(self._state.transactions)} transactions, "
            f"{len(self._state.objectives)} objectives"
        )

        events, changed = self._refresh_objectives()
        if changed:
            await self._persist(OBJECTIVES_KEY)
        await self._dispatch(events)

    # Mutations

    async def add_trade(self, trade_input: TradeInput) -> Trade:
        """Log a closed trade.

        Args:
            trade_input: Raw trade fields.

        Returns:
            The stored trade with its derived values.

        Raises:
            ValueError: If a field is missing or out of range.
        """
        self._validate_trade(trade_input)

        evaluation = evaluate_trade(
            direction=trade_input.direction,
            lot_size=trade_input.lot_size,
            entry_price=trade_input.entry_price,
            exit_price=trade_input.exit_price,
            stop_loss=trade_input.stop_loss,
            take_profit=trade_input.take_profit,
            contract_multiplier=self._settings.contract_multiplier,
        )

        trade = Trade(
            id=self._state.new_trade_id(),
            pair=trade_input.pair.strip(),
            direction=trade_input.direction,
            lot_size=trade_input.lot_size,
            entry_price=trade_input.entry_price,
            exit_price=trade_input.exit_price,
            stop_loss=trade_input.stop_loss,
            take_profit=trade_input.take_profit,
            result=evaluation.result,
            risk_reward=evaluation.risk_reward,
            status=evaluation.status,
            date=trade_input.date,
            timeframe=trade_input.timeframe,
            notes=trade_input.notes,
            image_url=trade_input.image_url,
        )
        self._state.trades.insert(0, trade)

        events: list[JournalEvent] = []
        if trade.status == TradeStatus.WIN:
            events.append(TradeWon(trade_id=trade.id, pair=trade.pair, result=trade.result))
        elif trade.status == TradeStatus.LOSS:
            events.append(TradeLost(trade_id=trade.id, pair=trade.pair, result=trade.result))

        objective_events, objectives_changed = self._refresh_objectives()
        events.extend(objective_events)

        logger.info(f"Logged {trade.status.value} trade {trade.id} on {trade.pair}: {trade.result:.2f}")

        await self._persist(TRADES_KEY, *([OBJECTIVES_KEY] if objectives_changed else []))
        await self._dispatch(events)
        return trade

    async def add_transaction(self, transaction_input: TransactionInput) -> Transaction:
        """Record a wallet income or expense.

        Args:
            transaction_input: Raw transaction fields.

        Returns:
            The stored transaction.

        Raises:
            ValueError: If the amount is not positive or the category does
                not belong to the transaction kind.
        """
        _require_positive(transaction_input.amount, "amount")
        if not isinstance(transaction_input.kind, TransactionKind):
            raise ValueError(f"Invalid transaction kind: {transaction_input.kind!r}")
        if not isinstance(transaction_input.category, TransactionCategory):
            raise ValueError(f"Invalid category: {transaction_input.category!r}")
        if not is_allowed(transaction_input.kind, transaction_input.category):
            raise ValueError(
                f"Category {transaction_input.category.value} is not valid for "
                f"{transaction_input.kind.value}"
            )

        transaction = Transaction(
            id=self._state.new_transaction_id(),
            kind=transaction_input.kind,
            amount=transaction_input.amount,
            category=transaction_input.category,
            description=transaction_input.description or "",
            date=transaction_input.date,
        )
        self._state.transactions.insert(0, transaction)

        logger.info(f"Recorded {transaction.kind.value} of {transaction.amount:.2f}")

        await self._persist(TRANSACTIONS_KEY)
        return transaction

    async def add_objective(self, objective_input: ObjectiveInput) -> Objective:
        """Create an objective with zero progress.

        Args:
            objective_input: Raw objective fields.

        Returns:
            The stored objective after its first recomputation.

        Raises:
            ValueError: If the title is blank, the target is not positive, the
                type is unknown or a date is missing.
        """
        self._validate_objective(objective_input)

        objective = Objective(
            id=self._state.new_objective_id(),
            title=objective_input.title.strip(),
            target_value=objective_input.target_value,
            objective_type=objective_input.objective_type,
            image_url=objective_input.image_url,
            start_date=objective_input.start_date,
            end_date=objective_input.end_date,
            current_value=0.0,
            status=ObjectiveStatus.IN_PROGRESS,
            deposited_funds=0.0,
            description=objective_input.description,
        )
        self._state.objectives.insert(0, objective)

        events, _ = self._refresh_objectives()
        logger.info(f"Created {objective.objective_type.value} objective {objective.id}")

        await self._persist(OBJECTIVES_KEY)
        await self._dispatch(events)
        return self._state.find_objective(objective.id)

    async def deposit_to_objective(
        self, objective_id: str, amount: float, when: datetime | None = None
    ) -> Transaction:
        """Move wallet funds into an objective.

        Increments the objective's deposited funds and records the matching
        wallet expense.

        Args:
            objective_id: Target objective.
            amount: Amount deposited.
            when: Timestamp of the wallet expense, defaults to now.

        Returns:
            The synthesized expense transaction.

        Raises:
            ValueError: If the amount is not positive or the objective is unknown.
        """
        _require_positive(amount, "amount")
        objective = self._state.find_objective(objective_id)
        if objective is None:
            raise ValueError(f"Unknown objective: {objective_id}")

        self._state.replace_objective(
            replace(objective, deposited_funds=objective.deposited_funds + amount)
        )

        transaction = Transaction(
            id=self._state.new_transaction_id(),
            kind=TransactionKind.EXPENSE,
            amount=amount,
            category=TransactionCategory.OBJECTIVE,
            description=f"Dépôt sur objectif : {objective.title}",
            date=when or datetime.now().astimezone(),
        )
        self._state.transactions.insert(0, transaction)

        events, _ = self._refresh_objectives()
        logger.info(f"Deposited {amount:.2f} to objective {objective_id}")

        await self._persist(OBJECTIVES_KEY, TRANSACTIONS_KEY)
        await self._dispatch(events)
        return transaction

    async def update_personal_objective(self, objective_id: str, value: float) -> Objective:
        """Overwrite the manual progress of an objective.

        Manual progress only feeds the value of Personal objectives, but it
        may be stored on any type.

        Args:
            objective_id: Target objective.
            value: New manual progress.

        Returns:
            The objective after recomputation.

        Raises:
            ValueError: If the value is not a finite number or the objective
                is unknown.
        """
        _require_finite(value, "value")
        objective = self._state.find_objective(objective_id)
        if objective is None:
            raise ValueError(f"Unknown objective: {objective_id}")

        self._state.replace_objective(replace(objective, manual_progress=value))

        events, _ = self._refresh_objectives()

        await self._persist(OBJECTIVES_KEY)
        await self._dispatch(events)
        return self._state.find_objective(objective_id)

    async def update_preferences(self, preferences: JournalPreferences) -> None:
        """Replace the persisted preferences record."""
        self._state.preferences = preferences.model_copy(deep=True)
        await self._persist(SETTINGS_KEY)

    async def import_all(self, payload: str | bytes | Mapping) -> bool:
        """Restore a backup.

        Only the collections present in the payload are replaced. The payload
        is validated entirely before anything is applied.

        Args:
            payload: Backup as JSON text or decoded object.

        Returns:
            True if imported, False if the payload was malformed.
        """
        try:
            bundle = parse_bundle(payload)
        except ValueError as e:
            logger.error(f"Failed to import data: {e}")
            return False

        touched = []
        if bundle.trades is not None:
            self._state.trades = bundle.trades
            touched.append(TRADES_KEY)
        if bundle.transactions is not None:
            self._state.transactions = bundle.transactions
            touched.append(TRANSACTIONS_KEY)
        if bundle.objectives is not None:
            self._state.objectives = bundle.objectives
            touched.append(OBJECTIVES_KEY)
        if bundle.preferences is not None:
            self._state.preferences = bundle.preferences
            touched.append(SETTINGS_KEY)

        events, changed = self._refresh_objectives()
        if changed and OBJECTIVES_KEY not in touched:
            touched.append(OBJECTIVES_KEY)

        logger.info(f"Imported {', '.join(touched) or 'nothing'}")

        await self._persist(*touched)
        await self._dispatch(events)
        return True

    def export_all(self) -> dict:
        """Export the whole journal as a backup document."""
        return build_bundle(
            self._state.trades,
            self._state.transactions,
            self._state.objectives,
            self._state.preferences,
        )

    def export_json(self) -> str:
        """Export the whole journal as backup JSON text."""
        return json.dumps(self.export_all(), indent=2, ensure_ascii=False)

    def build_report(self) -> pd.DataFrame:
        """Build the spreadsheet view of the trades, newest first."""
        return build_trade_report(self._state.trades)

    def export_report(self, path: str | Path) -> Path:
        """Write the trade report as CSV.

        Args:
            path: Destination file.

        Returns:
            The written path.
        """
        written = write_trade_report(self._state.trades, path)
        logger.info(f"Exported {len(self._state.trades)} trades to {written}")
        return written

    def backup_file_name(self, today: date | None = None) -> str:
        """File name for a backup taken on a given day."""
        today = today or date.today()
        return f"{self._settings.backup_prefix}-{today.isoformat()}.json"

    # Queries

    def get_statistics(
        self, time_filter: TimeFilter | None = None, now: datetime | None = None
    ) -> JournalStatistics:
        """Get journal statistics for a time filter.

        Args:
            time_filter: Window for trades, defaults to the configured one.
            now: Anchor instant of the window.

        Returns:
            JournalStatistics.
        """
        return self._metrics_calculator.calculate(
            self._state.trades,
            self._state.transactions,
            time_filter or self._settings.default_time_filter,
            now,
        )

    def get_daily_summary(self, query_date: date) -> dict:
        """Get a summary of trading activity for a specific date.

        Args:
            query_date: The date to summarize.

        Returns:
            Dict with date, total_trades, winning_trades, losing_trades,
            total_pnl, and win_rate (percent).
        """
        day_trades = self._performance_analyzer.trades_for_day(self._state.trades, query_date)

        return {
            "date": query_date,
            "total_trades": len(day_trades),
            "winning_trades": sum(1 for t in day_trades if t.status == TradeStatus.WIN),
            "losing_trades": sum(1 for t in day_trades if t.status == TradeStatus.LOSS),
            "total_pnl": sum(t.result for t in day_trades),
            "win_rate": win_rate_percent(day_trades),
        }

    def get_monthly_summary(self, anchor: date) -> MonthlySummary:
        """Get the calendar summary of the month containing a date."""
        return self._performance_analyzer.monthly_summary(self._state.trades, anchor)

    def get_weekly_overview(self, now: datetime | None = None) -> WeeklyOverview:
        """Get per-weekday P&L of the current week."""
        return self._performance_analyzer.weekly_overview(self._state.trades, now)

    def get_next_objective(self) -> Objective | None:
        """Get the in-progress objective closest to completion."""
        return select_next_objective(self._state.objectives)

    # Internals

    def _validate_trade(self, trade_input: TradeInput) -> None:
        if not trade_input.pair or not trade_input.pair.strip():
            raise ValueError("pair is required")
        if not isinstance(trade_input.direction, TradeDirection):
            raise ValueError(f"Invalid direction: {trade_input.direction!r}")
        _require_positive(trade_input.lot_size, "lot_size")
        for name in ("entry_price", "exit_price", "stop_loss", "take_profit"):
            _require_finite(getattr(trade_input, name), name)
        if not isinstance(trade_input.date, datetime):
            raise ValueError("date must be a datetime")

    def _validate_objective(self, objective_input: ObjectiveInput) -> None:
        if not isinstance(objective_input.title, str) or not objective_input.title.strip():
            raise ValueError("title is required")
        _require_positive(objective_input.target_value, "target_value")
        if not isinstance(objective_input.objective_type, ObjectiveType):
            raise ValueError(f"Invalid objective type: {objective_input.objective_type!r}")
        for name in ("start_date", "end_date"):
            if not isinstance(getattr(objective_input, name), datetime):
                raise ValueError(f"{name} must be a datetime")
        if not isinstance(objective_input.image_url, str):
            raise ValueError("image_url must be a string")
        if objective_input.description is not None and not isinstance(
            objective_input.description, str
        ):
            raise ValueError("description must be a string")

    def _refresh_objectives(self) -> tuple[list[JournalEvent], bool]:
        """Recompute objectives and keep the result only if it differs."""
        recomputation = recompute_objectives(self._state.objectives, self._state.trades)
        if recomputation.changed:
            self._state.objectives = recomputation.objectives

        for event in recomputation.events:
            logger.info(f"Objective {event.objective_id} reached ({event.title})")

        return list(recomputation.events), recomputation.changed

    async def _persist(self, *keys: str) -> None:
        """Write the documents of the given keys, best effort."""
        documents = {
            TRADES_KEY: lambda: [trade_to_dict(t) for t in self._state.trades],
            TRANSACTIONS_KEY: lambda: [transaction_to_dict(t) for t in self._state.transactions],
            OBJECTIVES_KEY: lambda: [objective_to_dict(o) for o in self._state.objectives],
            SETTINGS_KEY: lambda: self._state.preferences.to_document(),
        }
        for key in dict.fromkeys(keys):
            if not await self._store.save(key, documents[key]()):
                logger.warning(f"{key} not persisted, in-memory journal is ahead of storage")

    async def _dispatch(self, events: list[JournalEvent]) -> None:
        """Hand enabled events to the notifier without letting failures escape."""
        allowed = [e for e in events if self._state.preferences.notifications.allows(e)]
        if not allowed or self._notifier is None:
            return

        try:
            await self._notifier.dispatch(allowed, self.preferences)
        except Exception as e:
            logger.warning(f"Notification dispatch failed: {e}")
