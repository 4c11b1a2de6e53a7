"""
Budget Models

Budgets are stored as a mapping keyed by ``YYYY-MM``, plus the sentinel key
``default`` that applies to every month without an explicit entry.

Daily snapshots freeze the start-of-day allowance so the displayed daily
budget only ever decreases within a calendar day.
"""

import datetime as dt
from enum import Enum

from pydantic import Field

from moneypouch.models.base import LedgerModel, utcnow


DEFAULT_BUDGET_KEY = "default"


class BudgetCalculation(str, Enum):
    """How the daily allowance is derived from the monthly balance."""
    DYNAMIC = "dynamic"  # balance spread over the remaining days
    FIXED = "fixed"      # balance spread over every day of the month


class ApplyRange(str, Enum):
    """Which months a newly saved budget applies to."""
    CURRENT = "current"  # only the month being set
    FUTURE = "future"    # the month being set and the default


class BudgetConfig(LedgerModel):
    """Budget configuration for one month (or the default)."""

    amount: int = Field(
        ...,
        gt=0,
        description="Monthly budget amount"
    )
    calculation: BudgetCalculation = BudgetCalculation.DYNAMIC
    apply_range: ApplyRange = ApplyRange.CURRENT
    created_at: dt.datetime = Field(default_factory=utcnow)


class DailyBudgetSnapshot(LedgerModel):
    """
    The frozen start-of-day allowance for one calendar date.

    Once stored, recomputation for the same date returns this value
    instead of a freshly derived one.
    """

    date: dt.date
    start_budget: int
    calculated_at: dt.datetime = Field(default_factory=utcnow)


class BalanceSummary(LedgerModel):
    """
    Derived budget metrics for a month.

    ``balance`` may be negative: overspending is representable.
    """

    year_month: str = ""
    budget: int = 0
    spent: int = 0
    balance: int = 0
    daily_budget: int = 0
    start_budget: int = 0
    remaining_days: int = 0
    spent_today: int = 0
