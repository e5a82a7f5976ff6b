# src/journal/serialization.py
"""Conversion between journal entities and their JSON documents."""
import json
import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from src.journal.categories import is_allowed
from src.journal.models import (
    Objective,
    ObjectiveStatus,
    ObjectiveType,
    Trade,
    TradeDirection,
    TradeStatus,
    Transaction,
    TransactionCategory,
    TransactionKind,
)
from src.journal.preferences import JournalPreferences
from src.journal.trade_evaluator import classify_result


def _number(value: Any, name: str) -> float:
    """Read a JSON number, rejecting booleans, strings and non-finite values."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite")
    return float(value)


def _positive(value: Any, name: str) -> float:
    number = _number(value, name)
    if number <= 0:
        raise ValueError(f"{name} must be positive, got {number}")
    return number


def _non_negative(value: Any, name: str) -> float:
    number = _number(value, name)
    if number < 0:
        raise ValueError(f"{name} must not be negative, got {number}")
    return number


def _optional_number(value: Any, name: str) -> float | None:
    return None if value is None else _number(value, name)


def _text(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string, got {type(value).__name__}")
    return value


def _required_text(value: Any, name: str) -> str:
    text = _text(value, name)
    if not text.strip():
        raise ValueError(f"{name} must not be blank")
    return text


def _optional_text(value: Any, name: str) -> str | None:
    return None if value is None else _text(value, name)


def _timestamp(value: Any, name: str) -> datetime:
    return datetime.fromisoformat(_text(value, name))


def trade_to_dict(trade: Trade) -> dict:
    """Convert a Trade to a dictionary for JSON storage."""
    data = {
        "id": trade.id,
        "pair": trade.pair,
        "type": trade.direction.value,
        "lot_size": trade.lot_size,
        "entry_price": trade.entry_price,
        "exit_price": trade.exit_price,
        "stop_loss": trade.stop_loss,
        "take_profit": trade.take_profit,
        "result_usd": trade.result,
        "risk_reward": trade.risk_reward,
        "status": trade.status.value,
        "date": trade.date.isoformat(),
    }
    for key in ("timeframe", "image_url", "notes"):
        value = getattr(trade, key)
        if value is not None:
            data[key] = value
    return data


def dict_to_trade(data: Mapping) -> Trade:
    """Convert a dictionary from JSON to a Trade.

    Raises:
        ValueError: If the stored status disagrees with the sign of the
            result, or a size is out of range.
    """
    result = _number(data["result_usd"], "result_usd")
    status = TradeStatus(data["status"])
    if status != classify_result(result):
        raise ValueError(f"status {status.value} does not match result_usd {result}")

    return Trade(
        id=_text(data["id"], "id"),
        pair=_required_text(data["pair"], "pair"),
        direction=TradeDirection(data["type"]),
        lot_size=_positive(data["lot_size"], "lot_size"),
        entry_price=_number(data["entry_price"], "entry_price"),
        exit_price=_number(data["exit_price"], "exit_price"),
        stop_loss=_number(data["stop_loss"], "stop_loss"),
        take_profit=_number(data["take_profit"], "take_profit"),
        result=result,
        risk_reward=_non_negative(data["risk_reward"], "risk_reward"),
        status=status,
        date=_timestamp(data["date"], "date"),
        timeframe=_optional_text(data.get("timeframe"), "timeframe"),
        notes=_optional_text(data.get("notes"), "notes"),
        image_url=_optional_text(data.get("image_url"), "image_url"),
    )


def transaction_to_dict(transaction: Transaction) -> dict:
    """Convert a Transaction to a dictionary for JSON storage."""
    return {
        "id": transaction.id,
        "type": transaction.kind.value,
        "amount": transaction.amount,
        "category": transaction.category.value,
        "description": transaction.description,
        "date": transaction.date.isoformat(),
    }


def dict_to_transaction(data: Mapping) -> Transaction:
    """Convert a dictionary from JSON to a Transaction."""
    kind = TransactionKind(data["type"])
    category = TransactionCategory(data["category"])
    if not is_allowed(kind, category):
        raise ValueError(f"category {category.value} is not valid for {kind.value}")

    return Transaction(
        id=_text(data["id"], "id"),
        kind=kind,
        amount=_positive(data["amount"], "amount"),
        category=category,
        description=_optional_text(data.get("description"), "description") or "",
        date=_timestamp(data["date"], "date"),
    )


def objective_to_dict(objective: Objective) -> dict:
    """Convert an Objective to a dictionary for JSON storage."""
    data = {
        "id": objective.id,
        "title": objective.title,
        "target_value": objective.target_value,
        "current_value": objective.current_value,
        "type": objective.objective_type.value,
        "image_url": objective.image_url,
        "start_date": objective.start_date.isoformat(),
        "end_date": objective.end_date.isoformat(),
        "status": objective.status.value,
        "deposited_funds": objective.deposited_funds,
    }
    if objective.description is not None:
        data["description"] = objective.description
    if objective.manual_progress is not None:
        data["manual_progress"] = objective.manual_progress
    return data


def dict_to_objective(data: Mapping) -> Objective:
    """Convert a dictionary from JSON to an Objective."""
    return Objective(
        id=_text(data["id"], "id"),
        title=_required_text(data["title"], "title"),
        target_value=_positive(data["target_value"], "target_value"),
        objective_type=ObjectiveType(data["type"]),
        image_url=_optional_text(data.get("image_url"), "image_url") or "",
        start_date=_timestamp(data["start_date"], "start_date"),
        end_date=_timestamp(data["end_date"], "end_date"),
        current_value=_optional_number(data.get("current_value"), "current_value") or 0.0,
        status=ObjectiveStatus(data.get("status", ObjectiveStatus.IN_PROGRESS.value)),
        deposited_funds=(
            0.0
            if data.get("deposited_funds") is None
            else _non_negative(data["deposited_funds"], "deposited_funds")
        ),
        description=_optional_text(data.get("description"), "description"),
        manual_progress=_optional_number(data.get("manual_progress"), "manual_progress"),
    )


def _parse_collection(documents: Any, parse, name: str) -> list:
    """Parse a JSON array of records, requiring unique ids."""
    if not isinstance(documents, list):
        raise TypeError(f"{name} must be a list, got {type(documents).__name__}")

    records = []
    seen_ids: set[str] = set()
    for index, document in enumerate(documents):
        if not isinstance(document, Mapping):
            raise TypeError(f"{name}[{index}] must be an object")
        try:
            record = parse(document)
        except KeyError as e:
            raise ValueError(f"{name}[{index}] is missing field {e}") from e
        if record.id in seen_ids:
            raise ValueError(f"{name}[{index}] repeats id {record.id!r}")
        seen_ids.add(record.id)
        records.append(record)
    return records


def parse_trades(documents: Any) -> list[Trade]:
    """Parse the persisted trades document."""
    return _parse_collection(documents, dict_to_trade, "trades")


def parse_transactions(documents: Any) -> list[Transaction]:
    """Parse the persisted transactions document."""
    return _parse_collection(documents, dict_to_transaction, "transactions")


def parse_objectives(documents: Any) -> list[Objective]:
    """Parse the persisted objectives document."""
    return _parse_collection(documents, dict_to_objective, "objectives")


def parse_preferences(document: Any) -> JournalPreferences:
    """Parse the persisted settings document."""
    if not isinstance(document, Mapping):
        raise TypeError(f"settings must be an object, got {type(document).__name__}")
    return JournalPreferences.model_validate(document)


@dataclass(frozen=True)
class ImportBundle:
    """Collections carried by a backup; None marks an absent key."""

    trades: list[Trade] | None = None
    transactions: list[Transaction] | None = None
    objectives: list[Objective] | None = None
    preferences: JournalPreferences | None = None


def parse_bundle(payload: str | bytes | Mapping) -> ImportBundle:
    """Parse and validate a complete backup before anything is applied.

    Args:
        payload: Backup as JSON text or an already decoded object.

    Returns:
        ImportBundle with each present key parsed.

    Raises:
        ValueError: If the payload or any record in it is malformed.
    """
    try:
        data = json.loads(payload) if isinstance(payload, (str, bytes)) else payload
        if not isinstance(data, Mapping):
            raise TypeError(f"backup must be an object, got {type(data).__name__}")

        # null is treated like an absent key
        return ImportBundle(
            trades=parse_trades(data["trades"]) if data.get("trades") is not None else None,
            transactions=(
                parse_transactions(data["transactions"])
                if data.get("transactions") is not None
                else None
            ),
            objectives=(
                parse_objectives(data["objectives"])
                if data.get("objectives") is not None
                else None
            ),
            preferences=(
                parse_preferences(data["settings"])
                if data.get("settings") is not None
                else None
            ),
        )
    except (TypeError, ValueError) as e:
        raise ValueError(f"Malformed backup: {e}") from e


def build_bundle(
    trades: list[Trade],
    transactions: list[Transaction],
    objectives: list[Objective],
    preferences: JournalPreferences,
) -> dict:
    """Assemble the export document of the whole journal."""
    return {
        "trades": [trade_to_dict(t) for t in trades],
        "transactions": [transaction_to_dict(t) for t in transactions],
        "objectives": [objective_to_dict(o) for o in objectives],
        "settings": preferences.to_document(),
    }
