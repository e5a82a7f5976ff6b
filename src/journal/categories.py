# src/journal/categories.py
"""Wallet category sets and their display metadata."""
from dataclasses import dataclass
from types import MappingProxyType

from src.journal.models import TransactionCategory, TransactionKind


@dataclass(frozen=True)
class CategoryStyle:
    """Display metadata for a wallet category.

    Attributes:
        label: Human readable name.
        icon: Material icon identifier.
        color: Accent color token.
    """

    label: str
    icon: str
    color: str


INCOME_CATEGORIES: tuple[TransactionCategory, ...] = (
    TransactionCategory.SALARY,
    TransactionCategory.FREELANCE,
    TransactionCategory.DIVIDENDS,
    TransactionCategory.SALE,
    TransactionCategory.GIFT_RECEIVED,
    TransactionCategory.OTHER,
)

EXPENSE_CATEGORIES: tuple[TransactionCategory, ...] = (
    TransactionCategory.FOOD,
    TransactionCategory.TRANSPORT,
    TransactionCategory.SUBSCRIPTION,
    TransactionCategory.SHOPPING,
    TransactionCategory.LEISURE,
    TransactionCategory.ENTERTAINMENT,
    TransactionCategory.BILLS,
    TransactionCategory.GIFT_GIVEN,
    TransactionCategory.HEALTH,
    TransactionCategory.SPORT,
    TransactionCategory.TRAVEL,
    TransactionCategory.EQUIPMENT,
    TransactionCategory.TRAINING,
    TransactionCategory.OTHER,
)

# Created by the journal itself, valid for either kind
SYSTEM_CATEGORIES: tuple[TransactionCategory, ...] = (
    TransactionCategory.WITHDRAWN_PROFIT,
    TransactionCategory.DEPOSIT,
    TransactionCategory.OBJECTIVE,
)

CATEGORY_STYLES: MappingProxyType[TransactionCategory, CategoryStyle] = MappingProxyType({
    TransactionCategory.SALARY: CategoryStyle("Salary", "payments", "emerald-500"),
    TransactionCategory.FREELANCE: CategoryStyle("Freelance", "work", "blue-500"),
    TransactionCategory.DIVIDENDS: CategoryStyle("Dividends", "savings", "amber-500"),
    TransactionCategory.SALE: CategoryStyle("Sale", "sell", "purple-500"),
    TransactionCategory.GIFT_RECEIVED: CategoryStyle("Gift received", "card_giftcard", "pink-500"),
    TransactionCategory.FOOD: CategoryStyle("Food", "lunch_dining", "orange-500"),
    TransactionCategory.TRANSPORT: CategoryStyle("Transport", "commute", "sky-500"),
    TransactionCategory.SUBSCRIPTION: CategoryStyle("Subscription", "box_edit", "indigo-500"),
    TransactionCategory.SHOPPING: CategoryStyle("Shopping", "shopping_bag", "rose-500"),
    TransactionCategory.LEISURE: CategoryStyle("Leisure", "sports_esports", "emerald-600"),
    TransactionCategory.ENTERTAINMENT: CategoryStyle("Entertainment", "theater_comedy", "violet-500"),
    TransactionCategory.BILLS: CategoryStyle("Bills", "receipt_long", "slate-500"),
    TransactionCategory.GIFT_GIVEN: CategoryStyle("Gift given", "redeem", "pink-600"),
    TransactionCategory.HEALTH: CategoryStyle("Health", "medical_services", "red-500"),
    TransactionCategory.SPORT: CategoryStyle("Sport", "fitness_center", "lime-600"),
    TransactionCategory.TRAVEL: CategoryStyle("Travel", "flight", "cyan-500"),
    TransactionCategory.EQUIPMENT: CategoryStyle("Equipment", "inventory_2", "slate-700"),
    TransactionCategory.TRAINING: CategoryStyle("Training", "auto_stories", "amber-600"),
    TransactionCategory.OTHER: CategoryStyle("Other", "category", "slate-400"),
    TransactionCategory.WITHDRAWN_PROFIT: CategoryStyle(
        "Withdrawn profit", "account_balance_wallet", "primary"
    ),
    TransactionCategory.DEPOSIT: CategoryStyle("Deposit", "add_card", "primary"),
    TransactionCategory.OBJECTIVE: CategoryStyle("Objective", "track_changes", "primary"),
})

_unstyled = set(TransactionCategory) - set(CATEGORY_STYLES)
if _unstyled:
    raise RuntimeError(f"Categories without display metadata: {sorted(c.name for c in _unstyled)}")


def categories_for(kind: TransactionKind) -> tuple[TransactionCategory, ...]:
    """Get the user-selectable categories for a transaction kind."""
    if kind == TransactionKind.INCOME:
        return INCOME_CATEGORIES
    return EXPENSE_CATEGORIES


def is_allowed(kind: TransactionKind, category: TransactionCategory) -> bool:
    """Check whether a category may be used with a transaction kind."""
    return category in SYSTEM_CATEGORIES or category in categories_for(kind)


def style_for(category: TransactionCategory) -> CategoryStyle:
    """Get display metadata for a category."""
    return CATEGORY_STYLES[category]
