"""
Main Orchestrator for MoneyPouch

This module ties together all the ledger components over one shared
Repository, so every component reads and writes through the same cache:
1. Expenses (ExpenseBook)
2. Budget and daily allowance (BudgetCalculator)
3. Savings goals (GoalLedger)
4. Savings pool (SavingsPool) and pool/goal transfers (TransferOrchestrator)

DESIGN DECISION: Components never build their own Repository. Two
repositories over the same storage would hold two caches, and a write
through one would leave the other stale.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from moneypouch.activity import ActivityLogger, get_activity_logger
from moneypouch.config import Settings, get_settings
from moneypouch.ledger import (
    BudgetCalculator,
    ExpenseBook,
    GoalLedger,
    SavingsPool,
    TransferOrchestrator,
)
from moneypouch.models.activity import ActivityEventBuilder
from moneypouch.models.base import utcnow
from moneypouch.models.budget import ApplyRange, BudgetCalculation
from moneypouch.models.expense import ExpenseCategory
from moneypouch.services.storage import JsonFileStorage, Repository, StorageBackend


class MoneyPouch:
    """
    Facade over the ledger components.

    Presentation layers talk to the attributes directly
    (``pouch.expenses.add_expense(...)``); the facade only adds the
    whole-ledger operations.
    """

    def __init__(
        self,
        repository: Repository,
        settings: Optional[Settings] = None,
        activity_logger: Optional[ActivityLogger] = None,
        today: Callable[[], date] = date.today,
        now: Callable[[], datetime] = utcnow,
    ):
        settings = settings or get_settings()
        self._logger = get_activity_logger(activity_logger)
        self._today = today

        self.repository = repository
        self.expenses = ExpenseBook(repository, self._logger, now=now)
        self.budget = BudgetCalculator(
            repository,
            expense_book=self.expenses,
            settings=settings.ledger,
            activity_logger=self._logger,
            today=today,
        )
        self.goals = GoalLedger(repository, self._logger, now=now)
        self.pool = SavingsPool(repository, self._logger, now=now)
        self.transfers = TransferOrchestrator(self.goals, self.pool, self._logger)

    @property
    def activity_logger(self) -> ActivityLogger:
        return self._logger

    def clear_all_data(self) -> list[str]:
        """
        Remove every persisted collection.

        Destructive and not undoable. Returns the cleared collection names.
        """
        cleared = self.repository.remove_all()
        self._logger.log(ActivityEventBuilder.data_cleared(cleared))
        return cleared

    def load_sample_data(self) -> None:
        """
        Populate the ledger with a small demo data set.

        A dynamic budget for the current month, four recent expenses and
        one partly funded goal. Existing data is kept.
        """
        today = self._today()

        self.budget.save_budget(
            50000,
            calculation=BudgetCalculation.DYNAMIC,
            apply_range=ApplyRange.CURRENT,
        )

        for amount, category, days_ago in (
            (1200, ExpenseCategory.FOOD, 0),
            (650, ExpenseCategory.FOOD, 1),
            (3800, ExpenseCategory.ENTERTAINMENT, 1),
            (220, ExpenseCategory.TRANSPORT, 2),
        ):
            self.expenses.add_expense(
                amount, category, today - timedelta(days=days_ago)
            )

        self.goals.add_goal("New laptop", 150000, current_amount=35000)


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[StorageBackend] = None,
    activity_logger: Optional[ActivityLogger] = None,
) -> MoneyPouch:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use (defaults to ``get_settings()``)
        storage: Backend to persist through. Defaults to JSON files in
                 the configured data directory.
        activity_logger: Shared logger (a fresh one when omitted)

    Returns:
        A MoneyPouch facade over a single Repository
    """
    settings = settings or get_settings()
    logging.getLogger("moneypouch").setLevel(settings.app.log_level)
    activity_logger = get_activity_logger(activity_logger)

    if storage is None:
        storage_settings = settings.storage
        storage = JsonFileStorage(
            storage_settings.data_dir,
            write_retry_attempts=storage_settings.write_retry_attempts,
        )

    repository = Repository(storage, settings.storage, activity_logger)
    return MoneyPouch(repository, settings=settings, activity_logger=activity_logger)
