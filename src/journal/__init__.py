# src/journal/__init__.py
"""Journal module for trades, wallet transactions and objectives."""

from .entity_store import EntityStore
from .events import JournalEvent, ObjectiveCompleted, TradeLost, TradeWon
from .journal_manager import JournalManager
from .metrics_calculator import MetricsCalculator
from .models import (
    JournalStatistics,
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
)
from .objective_engine import ObjectiveRecomputation, recompute_objectives
from .performance_analyzer import PerformanceAnalyzer
from .preferences import JournalPreferences, NotificationChannel
from .report_builder import REPORT_COLUMNS, build_trade_report, write_trade_report
from .settings import JournalSettings
from .storage import JsonKeyValueStore
from .trade_evaluator import CONTRACT_MULTIPLIER, evaluate_trade

__all__ = [
    "CONTRACT_MULTIPLIER",
    "EntityStore",
    "JournalEvent",
    "JournalManager",
    "JournalPreferences",
    "JournalSettings",
    "JournalStatistics",
    "JsonKeyValueStore",
    "MetricsCalculator",
    "NotificationChannel",
    "Objective",
    "ObjectiveCompleted",
    "ObjectiveInput",
    "ObjectiveRecomputation",
    "ObjectiveStatus",
    "ObjectiveType",
    "PerformanceAnalyzer",
    "REPORT_COLUMNS",
    "TimeFilter",
    "Trade",
    "TradeDirection",
    "TradeInput",
    "TradeLost",
    "TradeStatus",
    "TradeWon",
    "Transaction",
    "TransactionCategory",
    "TransactionInput",
    "TransactionKind",
    "build_trade_report",
    "evaluate_trade",
    "recompute_objectives",
    "write_trade_report",
]
