# src/journal/entity_store.py
"""In-memory holder of the journal collections."""
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field

from src.journal.models import Objective, Trade, Transaction
from src.journal.preferences import JournalPreferences


def generate_id(existing: Iterable[str]) -> str:
    """Draw a random identifier not present in a collection."""
    taken = set(existing)
    while True:
        candidate = uuid.uuid4().hex[:12]
        if candidate not in taken:
            return candidate


@dataclass
class EntityStore:
    """Single source of truth for trades, transactions, objectives and preferences.

    Collections are ordered newest first. Only JournalManager mutates a store.
    """

    trades: list[Trade] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    objectives: list[Objective] = field(default_factory=list)
    preferences: JournalPreferences = field(default_factory=JournalPreferences)

    def new_trade_id(self) -> str:
        return generate_id(t.id for t in self.trades)

    def new_transaction_id(self) -> str:
        return generate_id(t.id for t in self.transactions)

    def new_objective_id(self) -> str:
        return generate_id(o.id for o in self.objectives)

    def find_objective(self, objective_id: str) -> Objective | None:
        """Get an objective by id."""
        for objective in self.objectives:
            if objective.id == objective_id:
                return objective
        return None

    def replace_objective(self, updated: Objective) -> None:
        """Swap in a new version of an objective, keeping its position."""
        self.objectives = [
            updated if o.id == updated.id else o for o in self.objectives
        ]
