# tests/journal/test_journal_manager.py
"""Tests for JournalManager."""
import json
from datetime import date, datetime
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from src.journal.events import ObjectiveCompleted, TradeLost, TradeWon
from src.journal.journal_manager import JournalManager
from src.journal.models import (
    ObjectiveInput,
    ObjectiveStatus,
    ObjectiveType,
    TimeFilter,
    TradeDirection,
    TradeInput,
    TradeStatus,
    TransactionCategory,
    TransactionInput,
    TransactionKind,
)
from src.journal.settings import JournalSettings


def make_trade_input(
    direction: TradeDirection = TradeDirection.BUY,
    exit_price: float = 10.5,
    lot_size: float = 1.0,
    pair: str = "XAUUSD",
    trade_date: datetime | None = None,
) -> TradeInput:
    """Create a TradeInput for testing.

    With the defaults a Buy earns (10.5 - 10.0) * 1 * 1000 = 500.
    """
    return TradeInput(
        pair=pair,
        direction=direction,
        lot_size=lot_size,
        entry_price=10.0,
        exit_price=exit_price,
        stop_loss=9.5,
        take_profit=11.0,
        date=trade_date or datetime(2026, 3, 18, 10, 0),
    )


def make_objective_input(
    title: str = "Trading fund",
    target_value: float = 1000.0,
    objective_type: ObjectiveType = ObjectiveType.FINANCIAL,
) -> ObjectiveInput:
    """Create an ObjectiveInput for testing."""
    return ObjectiveInput(
        title=title,
        target_value=target_value,
        objective_type=objective_type,
        start_date=datetime(2026, 1, 1),
        end_date=datetime(2026, 12, 31),
    )


def make_transaction_input(
    kind: TransactionKind = TransactionKind.INCOME,
    amount: float = 2500.0,
    category: TransactionCategory = TransactionCategory.SALARY,
) -> TransactionInput:
    """Create a TransactionInput for testing."""
    return TransactionInput(
        kind=kind,
        amount=amount,
        category=category,
        date=datetime(2026, 3, 1, 9, 0),
        description="Monthly",
    )


def dispatched_events(notifier: AsyncMock) -> list:
    """Collect every event handed to a mocked notifier."""
    return [event for call in notifier.dispatch.await_args_list for event in call.args[0]]


@pytest.fixture
def temp_data_dir(tmp_path: Path) -> Path:
    """Create a temporary data directory."""
    return tmp_path / "journal"


@pytest.fixture
def settings(temp_data_dir: Path) -> JournalSettings:
    """Create settings with temporary data directory."""
    return JournalSettings(data_dir=str(temp_data_dir))


@pytest.fixture
def notifier() -> AsyncMock:
    """Create a mocked event notifier."""
    return AsyncMock()


@pytest.fixture
def manager(settings: JournalSettings, notifier: AsyncMock) -> JournalManager:
    """Create a JournalManager instance."""
    return JournalManager(settings, notifier=notifier)


class TestAddTrade:
    """Tests for JournalManager.add_trade."""

    async def test_derives_values(self, manager: JournalManager) -> None:
        """add_trade should store the evaluated result, R:R and status."""
        trade = await manager.add_trade(make_trade_input())

        assert trade.result == pytest.approx(500.0)
        assert trade.risk_reward == pytest.approx(2.0)
        assert trade.status == TradeStatus.WIN
        assert trade.id
        assert manager.trades == (trade,)

    async def test_prepends_newest(self, manager: JournalManager) -> None:
        """The newest trade should come first."""
        first = await manager.add_trade(make_trade_input())
        second = await manager.add_trade(make_trade_input(pair="EURUSD"))

        assert [t.id for t in manager.trades] == [second.id, first.id]
        assert first.id != second.id

    async def test_uses_configured_multiplier(self, temp_data_dir: Path) -> None:
        """The contract multiplier should come from the settings."""
        manager = JournalManager(
            JournalSettings(data_dir=str(temp_data_dir), contract_multiplier=100.0)
        )

        trade = await manager.add_trade(make_trade_input())

        assert trade.result == pytest.approx(50.0)

    async def test_persists_trades(self, manager: JournalManager, temp_data_dir: Path) -> None:
        """The trades document should be written after a trade is logged."""
        trade = await manager.add_trade(make_trade_input())

        document = json.loads((temp_data_dir / "trades.json").read_text(encoding="utf-8"))
        assert document[0]["id"] == trade.id
        assert document[0]["type"] == "Buy"
        assert document[0]["status"] == "Win"

    async def test_emits_win_and_loss_events(
        self, manager: JournalManager, notifier: AsyncMock
    ) -> None:
        """Winning and losing trades should notify, breakevens should not."""
        won = await manager.add_trade(make_trade_input())
        lost = await manager.add_trade(
            make_trade_input(direction=TradeDirection.SELL, exit_price=10.25)
        )
        await manager.add_trade(make_trade_input(exit_price=10.0))

        assert dispatched_events(notifier) == [
            TradeWon(trade_id=won.id, pair="XAUUSD", result=won.result),
            TradeLost(trade_id=lost.id, pair="XAUUSD", result=lost.result),
        ]
        assert lost.result == pytest.approx(-250.0)

    async def test_disabled_channel_is_not_dispatched(
        self, manager: JournalManager, notifier: AsyncMock
    ) -> None:
        """Events of a disabled channel should never reach the notifier."""
        preferences = manager.preferences
        preferences.notifications.win_trade.enabled = False
        await manager.update_preferences(preferences)

        await manager.add_trade(make_trade_input())

        notifier.dispatch.assert_not_awaited()

    async def test_notifier_failure_does_not_fail_trade(
        self, manager: JournalManager, notifier: AsyncMock
    ) -> None:
        """A failing notifier should not undo or abort the mutation."""
        notifier.dispatch.side_effect = RuntimeError("telegram down")

        trade = await manager.add_trade(make_trade_input())

        assert manager.trades == (trade,)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"pair": "  "},
            {"lot_size": 0.0},
            {"lot_size": -1.0},
            {"exit_price": float("nan")},
            {"direction": "Long"},
        ],
    )
    async def test_invalid_input_leaves_journal_unchanged(
        self, manager: JournalManager, notifier: AsyncMock, overrides: dict
    ) -> None:
        """Invalid trades should raise and leave the store untouched."""
        await manager.add_trade(make_trade_input())
        before = manager.export_json()
        notifier.reset_mock()

        fields = {
            "pair": "XAUUSD",
            "direction": TradeDirection.BUY,
            "lot_size": 1.0,
            "entry_price": 10.0,
            "exit_price": 10.5,
            "stop_loss": 9.5,
            "take_profit": 11.0,
            "date": datetime(2026, 3, 18),
        }
        fields.update(overrides)

        with pytest.raises(ValueError):
            await manager.add_trade(TradeInput(**fields))

        assert manager.export_json() == before
        notifier.dispatch.assert_not_awaited()


class TestAddTransaction:
    """Tests for JournalManager.add_transaction."""

    async def test_records_transaction(self, manager: JournalManager, temp_data_dir: Path) -> None:
        transaction = await manager.add_transaction(make_transaction_input())

        assert manager.transactions == (transaction,)
        assert transaction.description == "Monthly"
        assert (temp_data_dir / "transactions.json").exists()

    async def test_wallet_balance(self, manager: JournalManager) -> None:
        await manager.add_transaction(make_transaction_input())
        await manager.add_transaction(
            make_transaction_input(TransactionKind.EXPENSE, 400.0, TransactionCategory.BILLS)
        )

        stats = manager.get_statistics(TimeFilter.ALL)

        assert stats.total_income == pytest.approx(2500.0)
        assert stats.total_expense == pytest.approx(400.0)
        assert stats.wallet_balance == pytest.approx(2100.0)

    async def test_category_must_match_kind(self, manager: JournalManager) -> None:
        with pytest.raises(ValueError, match="not valid"):
            await manager.add_transaction(
                make_transaction_input(TransactionKind.INCOME, 10.0, TransactionCategory.FOOD)
            )

        assert manager.transactions == ()

    @pytest.mark.parametrize("amount", [0.0, -5.0, float("inf")])
    async def test_amount_must_be_positive(self, manager: JournalManager, amount: float) -> None:
        with pytest.raises(ValueError):
            await manager.add_transaction(make_transaction_input(amount=amount))

        assert manager.transactions == ()


class TestObjectives:
    """Tests for objective operations."""

    async def test_add_objective(self, manager: JournalManager) -> None:
        objective = await manager.add_objective(make_objective_input())

        assert objective.current_value == 0.0
        assert objective.deposited_funds == 0.0
        assert objective.status == ObjectiveStatus.IN_PROGRESS
        assert manager.objectives == (objective,)

    async def test_add_objective_counts_existing_trades(self, manager: JournalManager) -> None:
        """A new financial objective should pick up trades since its start."""
        await manager.add_trade(make_trade_input())

        objective = await manager.add_objective(make_objective_input())

        assert objective.current_value == pytest.approx(500.0)

    @pytest.mark.parametrize(
        "title,target",
        [("", 100.0), ("   ", 100.0), ("Car", 0.0), ("Car", -10.0)],
    )
    async def test_add_objective_validation(
        self, manager: JournalManager, title: str, target: float
    ) -> None:
        with pytest.raises(ValueError):
            await manager.add_objective(make_objective_input(title=title, target_value=target))

        assert manager.objectives == ()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"objective_type": "Financial"},
            {"start_date": None},
            {"end_date": "2026-12-31"},
            {"image_url": None},
        ],
    )
    async def test_invalid_objective_leaves_journal_unchanged(
        self, manager: JournalManager, temp_data_dir: Path, overrides: dict
    ) -> None:
        """A rejected objective should neither be stored nor break later saves."""
        existing = await manager.add_objective(make_objective_input())
        fields = {
            "title": "Car",
            "target_value": 100.0,
            "objective_type": ObjectiveType.FINANCIAL,
            "start_date": datetime(2026, 1, 1),
            "end_date": datetime(2026, 12, 31),
        }
        fields.update(overrides)

        with pytest.raises(ValueError):
            await manager.add_objective(ObjectiveInput(**fields))

        assert manager.objectives == (existing,)
        await manager.add_trade(make_trade_input())
        stored = json.loads((temp_data_dir / "objectives.json").read_text(encoding="utf-8"))
        assert [o["id"] for o in stored] == [existing.id]
        assert stored[0]["current_value"] == pytest.approx(500.0)

    async def test_deposit_records_expense(self, manager: JournalManager) -> None:
        """A deposit should raise funds and record exactly one matching expense."""
        objective = await manager.add_objective(make_objective_input())

        transaction = await manager.deposit_to_objective(
            objective.id, 100.0, when=datetime(2026, 3, 5, 12, 0)
        )

        updated = manager.objectives[0]
        assert updated.deposited_funds == pytest.approx(100.0)
        assert updated.current_value == pytest.approx(100.0)

        assert manager.transactions == (transaction,)
        assert transaction.kind == TransactionKind.EXPENSE
        assert transaction.category == TransactionCategory.OBJECTIVE
        assert transaction.amount == 100.0
        assert transaction.description == "Dépôt sur objectif : Trading fund"
        assert manager.get_statistics().total_expense == pytest.approx(100.0)

    async def test_deposit_unknown_objective(self, manager: JournalManager) -> None:
        with pytest.raises(ValueError, match="Unknown objective"):
            await manager.deposit_to_objective("missing", 100.0)

        assert manager.transactions == ()

    async def test_deposit_rejects_non_positive_amount(self, manager: JournalManager) -> None:
        objective = await manager.add_objective(make_objective_input())
        before = manager.export_json()

        with pytest.raises(ValueError):
            await manager.deposit_to_objective(objective.id, 0)

        assert manager.export_json() == before

    async def test_completion_notifies_once(
        self, manager: JournalManager, notifier: AsyncMock
    ) -> None:
        """Reaching the target should emit one completion, later trades none."""
        objective = await manager.add_objective(make_objective_input())
        await manager.deposit_to_objective(objective.id, 200.0)

        await manager.add_trade(make_trade_input())
        assert manager.objectives[0].status == ObjectiveStatus.IN_PROGRESS

        await manager.add_trade(make_trade_input())
        await manager.add_trade(make_trade_input())

        completions = [e for e in dispatched_events(notifier) if isinstance(e, ObjectiveCompleted)]
        assert len(completions) == 1
        assert completions[0].objective_id == objective.id
        assert completions[0].current_value == pytest.approx(1200.0)
        assert manager.objectives[0].status == ObjectiveStatus.COMPLETED
        assert manager.objectives[0].current_value == pytest.approx(1700.0)

    async def test_trades_before_start_are_ignored(self, manager: JournalManager) -> None:
        await manager.add_objective(make_objective_input())

        await manager.add_trade(make_trade_input(trade_date=datetime(2025, 12, 31, 23, 59)))

        assert manager.objectives[0].current_value == 0.0

    async def test_update_personal_objective(
        self, manager: JournalManager, notifier: AsyncMock
    ) -> None:
        objective = await manager.add_objective(
            make_objective_input("Read 10 books", 10.0, ObjectiveType.PERSONAL)
        )

        updated = await manager.update_personal_objective(objective.id, 4.0)
        assert updated.current_value == 4.0
        assert updated.manual_progress == 4.0
        notifier.dispatch.assert_not_awaited()

        completed = await manager.update_personal_objective(objective.id, 10.0)
        assert completed.status == ObjectiveStatus.COMPLETED
        assert isinstance(dispatched_events(notifier)[0], ObjectiveCompleted)

    async def test_update_personal_objective_unknown(self, manager: JournalManager) -> None:
        with pytest.raises(ValueError):
            await manager.update_personal_objective("missing", 1.0)

    async def test_performance_objective(self, manager: JournalManager) -> None:
        await manager.add_objective(
            make_objective_input("Win rate", 60.0, ObjectiveType.PERFORMANCE)
        )

        await manager.add_trade(make_trade_input())
        await manager.add_trade(make_trade_input(direction=TradeDirection.SELL))

        assert manager.objectives[0].current_value == pytest.approx(50.0)

    async def test_next_objective(self, manager: JournalManager) -> None:
        far = await manager.add_objective(make_objective_input("Far", 10000.0))
        near = await manager.add_objective(make_objective_input("Near", 600.0))

        await manager.add_trade(make_trade_input())

        assert manager.get_next_objective().id == near.id
        assert far.id != near.id


class TestImportExport:
    """Tests for backup import and export."""

    async def test_export_shape(self, manager: JournalManager) -> None:
        await manager.add_trade(make_trade_input())

        exported = manager.export_all()

        assert set(exported) == {"trades", "transactions", "objectives", "settings"}
        assert len(exported["trades"]) == 1
        assert json.loads(manager.export_json()) == exported

    async def test_round_trip_into_new_journal(
        self, manager: JournalManager, tmp_path: Path
    ) -> None:
        await manager.add_trade(make_trade_input())
        await manager.add_transaction(make_transaction_input())
        objective = await manager.add_objective(make_objective_input())
        await manager.deposit_to_objective(objective.id, 50.0)

        other = JournalManager(JournalSettings(data_dir=str(tmp_path / "other")))
        assert await other.import_all(manager.export_json()) is True

        assert other.trades == manager.trades
        assert other.transactions == manager.transactions
        assert other.objectives == manager.objectives
        assert other.preferences == manager.preferences

    async def test_partial_import_keeps_other_collections(self, manager: JournalManager) -> None:
        """Only collections present in the backup should be replaced."""
        await manager.add_trade(make_trade_input())
        objective = await manager.add_objective(make_objective_input())
        await manager.add_transaction(make_transaction_input())

        payload = {
            "trades": [
                {
                    "id": "imported",
                    "pair": "BTCUSD",
                    "type": "Buy",
                    "lot_size": 0.1,
                    "entry_price": 100.0,
                    "exit_price": 90.0,
                    "stop_loss": 80.0,
                    "take_profit": 140.0,
                    "result_usd": -1000.0,
                    "risk_reward": 2.0,
                    "status": "Loss",
                    "date": "2026-03-10T10:00:00",
                }
            ]
        }

        assert await manager.import_all(payload) is True

        assert [t.id for t in manager.trades] == ["imported"]
        assert len(manager.transactions) == 1
        assert manager.objectives[0].id == objective.id
        # Objectives are recomputed from the imported trades
        assert manager.objectives[0].current_value == pytest.approx(-1000.0)

    @pytest.mark.parametrize(
        "payload",
        [
            "{broken",
            '{"trades": [{"id": "x"}]}',
            '{"trades": [], "objectives": [{"id": "o", "title": "t", "target_value": "big"}]}',
        ],
    )
    async def test_invalid_import_changes_nothing(
        self, manager: JournalManager, payload: str
    ) -> None:
        """A malformed backup should be rejected as a whole."""
        await manager.add_trade(make_trade_input())
        await manager.add_objective(make_objective_input())
        before = manager.export_json()

        assert await manager.import_all(payload) is False

        assert manager.export_json() == before

    async def test_import_rejects_inconsistent_records(self, manager: JournalManager) -> None:
        """Records that contradict the data model should reject the whole backup."""
        await manager.add_trade(make_trade_input())
        before = manager.get_statistics(TimeFilter.ALL)
        payload = {
            "trades": [
                {
                    "id": "forged",
                    "pair": "EURUSD",
                    "type": "Buy",
                    "lot_size": -1,
                    "entry_price": 1.1,
                    "exit_price": 1.0,
                    "stop_loss": 1.0,
                    "take_profit": 1.2,
                    "result_usd": -5,
                    "risk_reward": 1.0,
                    "status": "Win",
                    "date": "2026-03-10T10:00:00",
                }
            ],
            "transactions": [
                {
                    "id": "refund",
                    "type": "Income",
                    "amount": -100,
                    "category": "Factures",
                    "date": "2026-03-10T10:00:00",
                }
            ],
        }

        assert await manager.import_all(payload) is False

        assert manager.get_statistics(TimeFilter.ALL) == before
        assert manager.transactions == ()

    async def test_import_settings(self, manager: JournalManager, temp_data_dir: Path) -> None:
        payload = {"settings": {"profile": {"name": "Sam"}, "security": {"biometricEnabled": True}}}

        assert await manager.import_all(payload) is True

        assert manager.preferences.profile.name == "Sam"
        assert manager.preferences.security.biometric_enabled is True
        document = json.loads((temp_data_dir / "appSettings.json").read_text(encoding="utf-8"))
        assert document["profile"]["name"] == "Sam"

    async def test_export_report(self, manager: JournalManager, tmp_path: Path) -> None:
        """The CSV report should hold one row per trade, newest first."""
        await manager.add_trade(make_trade_input(trade_date=datetime(2026, 3, 2, 10, 0)))
        await manager.add_trade(
            make_trade_input(
                direction=TradeDirection.SELL,
                exit_price=10.25,
                trade_date=datetime(2026, 3, 3, 10, 0),
            )
        )

        report = manager.build_report()
        path = manager.export_report(tmp_path / "reports" / "trades.csv")

        assert list(report["Net P&L"]) == ["-250.00", "500.00"]
        lines = path.read_text(encoding="utf-8").strip().splitlines()
        assert len(lines) == 3
        assert lines[0].startswith("Date,Instrument,Type")

    def test_backup_file_name(self, manager: JournalManager) -> None:
        assert manager.backup_file_name(date(2026, 3, 18)) == "journal-trading-backup-2026-03-18.json"


class TestLoad:
    """Tests for JournalManager.load."""

    async def test_load_empty_directory(self, manager: JournalManager) -> None:
        await manager.load()

        assert manager.trades == ()
        assert manager.transactions == ()
        assert manager.objectives == ()
        assert manager.preferences.profile.name == "Trader"

    async def test_load_restores_persisted_state(
        self, manager: JournalManager, settings: JournalSettings
    ) -> None:
        trade = await manager.add_trade(make_trade_input())
        await manager.add_transaction(make_transaction_input())
        await manager.add_objective(make_objective_input())

        reloaded = JournalManager(settings)
        await reloaded.load()

        assert reloaded.trades == (trade,)
        assert reloaded.transactions == manager.transactions
        assert reloaded.objectives == manager.objectives

    async def test_load_ignores_malformed_document(
        self, settings: JournalSettings, temp_data_dir: Path
    ) -> None:
        temp_data_dir.mkdir(parents=True, exist_ok=True)
        (temp_data_dir / "trades.json").write_text('[{"id": 1}]', encoding="utf-8")

        manager = JournalManager(settings)
        await manager.load()

        assert manager.trades == ()
        assert (temp_data_dir / "trades.json.corrupt").read_text(encoding="utf-8") == '[{"id": 1}]'

    async def test_truncated_history_survives_next_trade(
        self, settings: JournalSettings, temp_data_dir: Path
    ) -> None:
        """A damaged trades file should be kept, not replaced by the next write."""
        writer = JournalManager(settings)
        await writer.add_trade(make_trade_input())
        await writer.add_trade(make_trade_input(pair="EURUSD"))
        original = (temp_data_dir / "trades.json").read_text(encoding="utf-8")
        (temp_data_dir / "trades.json").write_text(original[:-40], encoding="utf-8")

        manager = JournalManager(settings)
        await manager.load()
        trade = await manager.add_trade(make_trade_input(pair="GBPUSD"))

        assert manager.trades == (trade,)
        kept = (temp_data_dir / "trades.json.corrupt").read_text(encoding="utf-8")
        assert kept == original[:-40]
        stored = json.loads((temp_data_dir / "trades.json").read_text(encoding="utf-8"))
        assert [t["id"] for t in stored] == [trade.id]

    async def test_load_recomputes_stale_objectives(
        self, settings: JournalSettings, temp_data_dir: Path, notifier: AsyncMock
    ) -> None:
        """Stored progress should be refreshed from the trades on load."""
        writer = JournalManager(settings)
        await writer.add_objective(make_objective_input(target_value=400.0))
        await writer.add_trade(make_trade_input())

        documents = json.loads((temp_data_dir / "objectives.json").read_text(encoding="utf-8"))
        documents[0]["current_value"] = 0
        documents[0]["status"] = "In Progress"
        (temp_data_dir / "objectives.json").write_text(json.dumps(documents), encoding="utf-8")

        manager = JournalManager(settings, notifier=notifier)
        await manager.load()

        assert manager.objectives[0].current_value == pytest.approx(500.0)
        assert manager.objectives[0].status == ObjectiveStatus.COMPLETED
        stored = json.loads((temp_data_dir / "objectives.json").read_text(encoding="utf-8"))
        assert stored[0]["status"] == "Completed"
        assert isinstance(dispatched_events(notifier)[0], ObjectiveCompleted)


class TestQueries:
    """Tests for the read-side queries."""

    async def test_daily_summary(self, manager: JournalManager) -> None:
        await manager.add_trade(make_trade_input(trade_date=datetime(2026, 3, 18, 9, 0)))
        await manager.add_trade(
            make_trade_input(
                direction=TradeDirection.SELL,
                exit_price=10.25,
                trade_date=datetime(2026, 3, 18, 15, 0),
            )
        )
        await manager.add_trade(make_trade_input(trade_date=datetime(2026, 3, 19, 9, 0)))

        summary = manager.get_daily_summary(date(2026, 3, 18))

        assert summary["date"] == date(2026, 3, 18)
        assert summary["total_trades"] == 2
        assert summary["winning_trades"] == 1
        assert summary["losing_trades"] == 1
        assert summary["total_pnl"] == pytest.approx(250.0)
        assert summary["win_rate"] == pytest.approx(50.0)

    async def test_statistics_default_filter(self, temp_data_dir: Path) -> None:
        """Without an explicit filter, the configured default should apply."""
        manager = JournalManager(
            JournalSettings(data_dir=str(temp_data_dir), default_time_filter="Month")
        )
        await manager.add_trade(make_trade_input(trade_date=datetime(2026, 3, 18)))
        await manager.add_trade(make_trade_input(trade_date=datetime(2026, 1, 18)))

        stats = manager.get_statistics(now=datetime(2026, 3, 20))

        assert stats.time_filter == TimeFilter.MONTH
        assert stats.total_trades == 1

    async def test_monthly_summary_and_weekly_overview(self, manager: JournalManager) -> None:
        await manager.add_trade(make_trade_input(trade_date=datetime(2026, 3, 18, 9, 0)))

        summary = manager.get_monthly_summary(date(2026, 3, 1))
        overview = manager.get_weekly_overview(datetime(2026, 3, 19, 8, 0))

        assert summary.total_trades == 1
        assert summary.net_pnl == pytest.approx(500.0)
        assert overview.total_pnl == pytest.approx(500.0)

    async def test_preferences_are_copies(self, manager: JournalManager) -> None:
        """Mutating a returned preferences object should not touch the journal."""
        preferences = manager.preferences
        preferences.profile.name = "Changed"

        assert manager.preferences.profile.name == "Trader"
