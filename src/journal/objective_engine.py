# src/journal/objective_engine.py
"""Recomputes objective progress from trade history."""
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace

from src.journal.events import ObjectiveCompleted
from src.journal.metrics_calculator import win_rate_percent
from src.journal.models import (
    Objective,
    ObjectiveStatus,
    ObjectiveType,
    Trade,
    naive_local,
)


@dataclass(frozen=True)
class ObjectiveRecomputation:
    """Outcome of one recomputation pass.

    Attributes:
        objectives: Objectives with refreshed current_value and status.
        events: Completions detected in this pass.
        changed: Whether any objective differs by value from the input.
    """

    objectives: list[Objective]
    events: list[ObjectiveCompleted] = field(default_factory=list)
    changed: bool = False


def objective_base_value(objective: Objective, trades: Iterable[Trade]) -> float:
    """Progress an objective earns before deposited funds are added."""
    if objective.objective_type == ObjectiveType.PERSONAL:
        return objective.manual_progress or 0.0

    start = naive_local(objective.start_date)
    in_range = [t for t in trades if naive_local(t.date) >= start]

    if objective.objective_type == ObjectiveType.FINANCIAL:
        return sum(t.result for t in in_range)
    return win_rate_percent(in_range)


def recompute_objective(
    objective: Objective, trades: Sequence[Trade]
) -> tuple[Objective, ObjectiveCompleted | None]:
    """Refresh one objective and report a completion transition.

    Args:
        objective: Objective as currently stored.
        trades: Full trade history.

    Returns:
        Tuple of (updated objective, completion event or None).
    """
    current_value = objective_base_value(objective, trades) + objective.deposited_funds

    if current_value >= objective.target_value:
        status = ObjectiveStatus.COMPLETED
    else:
        status = ObjectiveStatus.IN_PROGRESS

    event = None
    if status == ObjectiveStatus.COMPLETED and not objective.is_completed:
        event = ObjectiveCompleted(
            objective_id=objective.id,
            title=objective.title,
            current_value=current_value,
        )

    updated = replace(objective, current_value=current_value, status=status)
    return updated, event


def recompute_objectives(
    objectives: Sequence[Objective], trades: Sequence[Trade]
) -> ObjectiveRecomputation:
    """Recompute every objective from scratch.

    Running the pass again on its own output yields the same objectives and
    no events, since a completion only fires on the transition.

    Args:
        objectives: Objectives as currently stored.
        trades: Full trade history.

    Returns:
        ObjectiveRecomputation with the new list and detected completions.
    """
    updated: list[Objective] = []
    events: list[ObjectiveCompleted] = []

    for objective in objectives:
        refreshed, event = recompute_objective(objective, trades)
        updated.append(refreshed)
        if event is not None:
            events.append(event)

    return ObjectiveRecomputation(
        objectives=updated,
        events=events,
        changed=updated != list(objectives),
    )


def select_next_objective(objectives: Iterable[Objective]) -> Objective | None:
    """Pick the in-progress objective closest to its target.

    Ties keep the earliest objective in collection order.
    """
    best: Objective | None = None
    for objective in objectives:
        if objective.status != ObjectiveStatus.IN_PROGRESS:
            continue
        if best is None or objective.progress_ratio > best.progress_ratio:
            best = objective
    return best
