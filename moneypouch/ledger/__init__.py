"""
Ledger Package

The engine components: expenses, budget metrics, goals, the savings pool
and transfers between the last two.
"""

from moneypouch.ledger.budget import BudgetCalculator
from moneypouch.ledger.errors import (
    ExpenseNotFoundError,
    GoalNotFoundError,
    InsufficientGoalBalanceError,
    InsufficientPoolError,
    LedgerError,
)
from moneypouch.ledger.expenses import ExpenseBook
from moneypouch.ledger.goals import GoalLedger
from moneypouch.ledger.pool import SavingsPool
from moneypouch.ledger.transfers import TransferOrchestrator

__all__ = [
    # Components
    "BudgetCalculator",
    "ExpenseBook",
    "GoalLedger",
    "SavingsPool",
    "TransferOrchestrator",
    # Exceptions
    "ExpenseNotFoundError",
    "GoalNotFoundError",
    "InsufficientGoalBalanceError",
    "InsufficientPoolError",
    "LedgerError",
]
