"""
Data Models Package

Pydantic models for every record the ledger persists or returns.
"""

from moneypouch.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)
from moneypouch.models.base import LedgerModel, generate_id, utcnow
from moneypouch.models.budget import (
    DEFAULT_BUDGET_KEY,
    ApplyRange,
    BalanceSummary,
    BudgetCalculation,
    BudgetConfig,
    DailyBudgetSnapshot,
)
from moneypouch.models.expense import Expense, ExpenseCategory
from moneypouch.models.goal import Goal
from moneypouch.models.pool import (
    PoolState,
    PoolTransaction,
    PoolTransactionType,
    TransferResult,
)

__all__ = [
    # Base
    "LedgerModel",
    "generate_id",
    "utcnow",
    # Expense models
    "Expense",
    "ExpenseCategory",
    # Budget models
    "DEFAULT_BUDGET_KEY",
    "ApplyRange",
    "BalanceSummary",
    "BudgetCalculation",
    "BudgetConfig",
    "DailyBudgetSnapshot",
    # Goal models
    "Goal",
    # Pool models
    "PoolState",
    "PoolTransaction",
    "PoolTransactionType",
    "TransferResult",
    # Activity models
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]
