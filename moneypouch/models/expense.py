"""
Expense Models

An expense is a single discrete spending record. Its identity (id) and
creation timestamp never change; only amount, category and date can be
rewritten by an update.
"""

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import Field

from moneypouch.models.base import LedgerModel, generate_id, utcnow


class ExpenseCategory(str, Enum):
    """
    Fixed set of expense categories.

    DESIGN DECISION: Explicit categories rather than free text keep the
    per-category monthly summary stable.
    """
    FOOD = "food"
    ENTERTAINMENT = "entertainment"
    TRANSPORT = "transport"
    SHOPPING = "shopping"
    HEALTH = "health"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Display name for presentation layers."""
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    ExpenseCategory.FOOD: "Food",
    ExpenseCategory.ENTERTAINMENT: "Entertainment",
    ExpenseCategory.TRANSPORT: "Transport",
    ExpenseCategory.SHOPPING: "Shopping",
    ExpenseCategory.HEALTH: "Health",
    ExpenseCategory.OTHER: "Other",
}


class Expense(LedgerModel):
    """A recorded expense."""

    id: str = Field(
        default_factory=lambda: generate_id("exp"),
        description="Immutable expense identifier"
    )
    amount: int = Field(
        ...,
        ge=0,
        description="Amount in whole currency units"
    )
    category: ExpenseCategory
    date: dt.date = Field(
        ...,
        description="Calendar day the money was spent"
    )
    timestamp: dt.datetime = Field(
        default_factory=utcnow,
        description="When the expense was recorded"
    )
    updated_at: Optional[dt.datetime] = None

    @property
    def year_month(self) -> str:
        """The ``YYYY-MM`` month this expense belongs to."""
        return self.date.strftime("%Y-%m")
