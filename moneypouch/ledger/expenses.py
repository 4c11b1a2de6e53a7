"""
Expense Book

CRUD over expense records plus the monthly and per-category totals the
budget calculator and UI read. Expenses keep insertion order.
"""

from datetime import date, datetime
from typing import Any, Callable, Optional

from moneypouch.activity import ActivityLogger, get_activity_logger
from moneypouch.ledger.errors import ExpenseNotFoundError
from moneypouch.models.activity import ActivityEventBuilder
from moneypouch.models.base import utcnow
from moneypouch.models.expense import Expense, ExpenseCategory
from moneypouch.services.storage import Repository
from moneypouch.validation import (
    validate_amount,
    validate_category,
    validate_date,
    validate_year_month,
)


class ExpenseBook:
    """Records, rewrites and summarises expenses."""

    def __init__(
        self,
        repository: Repository,
        activity_logger: Optional[ActivityLogger] = None,
        now: Callable[[], datetime] = utcnow,
    ):
        self._repository = repository
        self._logger = get_activity_logger(activity_logger)
        self._now = now

    def get_expenses(self) -> list[Expense]:
        """All expenses in insertion order."""
        return self._repository.load_expenses()

    def get_expense(self, expense_id: str) -> Expense:
        for expense in self._repository.load_expenses():
            if expense.id == expense_id:
                return expense
        raise ExpenseNotFoundError(expense_id)

    def add_expense(self, amount: Any, category: Any, date: Any) -> Expense:
        """
        Record a new expense.

        Raises:
            InvalidAmountError, AmountTooLargeError, InvalidCategoryError,
            InvalidDateError: on bad input (nothing is saved)
            SaveFailedError: if the expenses could not be persisted
        """
        expense = Expense(
            amount=validate_amount(amount),
            category=validate_category(category),
            date=validate_date(date),
            timestamp=self._now(),
        )
        expenses = self._repository.load_expenses()
        expenses.append(expense)
        self._repository.save_expenses(expenses)

        self._logger.log(ActivityEventBuilder.expense_added(
            expense.id, expense.amount, expense.category.value
        ))
        return expense

    def update_expense(
        self,
        expense_id: str,
        amount: Any = None,
        category: Any = None,
        date: Any = None,
    ) -> Expense:
        """
        Rewrite amount, category and/or date of an expense.

        Fields left as None keep their value; id and timestamp never change.
        """
        changes: dict[str, Any] = {}
        if amount is not None:
            changes["amount"] = validate_amount(amount)
        if category is not None:
            changes["category"] = validate_category(category)
        if date is not None:
            changes["date"] = validate_date(date)

        expenses = self._repository.load_expenses()
        for index, expense in enumerate(expenses):
            if expense.id == expense_id:
                break
        else:
            raise ExpenseNotFoundError(expense_id)

        updated = Expense.model_validate({
            **expense.model_dump(),
            **changes,
            "updated_at": self._now(),
        })
        expenses[index] = updated
        self._repository.save_expenses(expenses)

        self._logger.log(ActivityEventBuilder.expense_updated(
            expense_id, updated.model_dump(mode="json", include=set(changes))
        ))
        return updated

    def delete_expense(self, expense_id: str) -> Expense:
        """Remove an expense and return the removed record."""
        expenses = self._repository.load_expenses()
        remaining = [e for e in expenses if e.id != expense_id]
        if len(remaining) == len(expenses):
            raise ExpenseNotFoundError(expense_id)
        removed = next(e for e in expenses if e.id == expense_id)
        self._repository.save_expenses(remaining)

        self._logger.log(ActivityEventBuilder.expense_deleted(expense_id))
        return removed

    def get_expenses_by_month(self, year_month: str) -> list[Expense]:
        year_month = validate_year_month(year_month)
        return [e for e in self.get_expenses() if e.year_month == year_month]

    def get_expenses_by_date(self, day: date) -> list[Expense]:
        return [e for e in self.get_expenses() if e.date == day]

    def get_total_by_month(self, year_month: str) -> int:
        """Sum of the month's expense amounts."""
        return sum(e.amount for e in self.get_expenses_by_month(year_month))

    def get_total_by_date(self, day: date) -> int:
        return sum(e.amount for e in self.get_expenses_by_date(day))

    def get_expenses_by_category(self, year_month: str) -> dict[ExpenseCategory, int]:
        """Monthly totals per category; every category is present."""
        summary = {category: 0 for category in ExpenseCategory}
        for expense in self.get_expenses_by_month(year_month):
            summary[expense.category] += expense.amount
        return summary
