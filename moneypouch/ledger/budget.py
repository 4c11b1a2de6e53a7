"""
Budget Calculator

Derives the monthly balance and the per-day spending allowance.

DESIGN DECISION: The start-of-day allowance for the current month is
computed once per calendar date, from the balance before any of that day's
spending, and stored as a DailyBudgetSnapshot. Later
recomputations on the same date reuse the stored value, so the displayed
allowance only moves with same-day spending:

    daily_budget = max(0, start_budget - spent_today)

Without the snapshot, every new expense would also shrink the base the
allowance is derived from, and the number shown to the user would jump
around during the day.

Snapshots older than the retention window are pruned lazily whenever a new
snapshot is written.
"""

from datetime import date, timedelta
from typing import Any, Callable, Optional

from moneypouch.activity import ActivityLogger, get_activity_logger
from moneypouch.config import LedgerSettings
from moneypouch.ledger.dates import (
    current_year_month,
    days_in_month,
    remaining_days_in_month,
)
from moneypouch.ledger.expenses import ExpenseBook
from moneypouch.models.activity import ActivityEventBuilder
from moneypouch.models.budget import (
    DEFAULT_BUDGET_KEY,
    ApplyRange,
    BalanceSummary,
    BudgetCalculation,
    BudgetConfig,
    DailyBudgetSnapshot,
)
from moneypouch.services.storage import Repository
from moneypouch.validation import (
    validate_apply_range,
    validate_calculation,
    validate_positive_amount,
    validate_year_month,
)


class BudgetCalculator:
    """Budget configuration and derived daily allowance."""

    def __init__(
        self,
        repository: Repository,
        expense_book: Optional[ExpenseBook] = None,
        settings: Optional[LedgerSettings] = None,
        activity_logger: Optional[ActivityLogger] = None,
        today: Callable[[], date] = date.today,
    ):
        self._repository = repository
        self._logger = get_activity_logger(activity_logger)
        self._expenses = expense_book or ExpenseBook(repository, self._logger)
        self._settings = settings or LedgerSettings()
        self._today = today

    # Budget configuration

    def get_all_budgets(self) -> dict[str, BudgetConfig]:
        return self._repository.load_budgets()

    def get_budget(self, year_month: str) -> Optional[BudgetConfig]:
        """
        Resolve the budget for a month.

        Exact ``YYYY-MM`` entry first, then the ``default`` entry, else None.
        """
        budgets = self._repository.load_budgets()
        if year_month in budgets:
            return budgets[year_month]
        return budgets.get(DEFAULT_BUDGET_KEY)

    def get_current_budget(self) -> Optional[BudgetConfig]:
        return self.get_budget(current_year_month(self._today()))

    def save_budget(
        self,
        amount: Any,
        calculation: Any = None,
        apply_range: Any = ApplyRange.CURRENT,
        year_month: Optional[str] = None,
    ) -> BudgetConfig:
        """
        Set the budget for a month.

        With ``apply_range="future"`` the same config is also written to the
        ``default`` key, in the same save. Other month-specific entries are
        left as they are.
        """
        calculation = validate_calculation(
            calculation or self._settings.default_calculation
        )
        apply_range = validate_apply_range(apply_range)
        year_month = (
            validate_year_month(year_month)
            if year_month is not None
            else current_year_month(self._today())
        )
        config = BudgetConfig(
            amount=validate_positive_amount(amount),
            calculation=calculation,
            apply_range=apply_range,
        )

        budgets = self._repository.load_budgets()
        budgets[year_month] = config
        keys = [year_month]
        if apply_range == ApplyRange.FUTURE:
            budgets[DEFAULT_BUDGET_KEY] = config
            keys.append(DEFAULT_BUDGET_KEY)
        self._repository.save_budgets(budgets)

        self._logger.log(ActivityEventBuilder.budget_saved(year_month, config.amount, keys))
        return config

    # Derived metrics

    def calculate_balance(self, year_month: Optional[str] = None) -> BalanceSummary:
        """
        Compute budget, spending, balance and today's allowance for a month.

        Returns an all-zero summary when no budget applies.
        """
        today = self._today()
        this_month = current_year_month(today)
        year_month = validate_year_month(year_month) if year_month else this_month

        budget = self.get_budget(year_month)
        if budget is None:
            return BalanceSummary(year_month=year_month)

        spent = self._expenses.get_total_by_month(year_month)
        balance = budget.amount - spent
        remaining_days = remaining_days_in_month(year_month, today)

        if year_month == this_month:
            spent_today = self._expenses.get_total_by_date(today)
            # Derive from the balance as it stood before today's spending
            derived = self._derive_daily(
                budget, balance + spent_today, remaining_days, year_month
            )
            start_budget = self._resolve_start_budget(today, derived)
        else:
            # Other months have no "today": nothing is frozen or spent today
            spent_today = 0
            start_budget = self._derive_daily(budget, balance, remaining_days, year_month)

        return BalanceSummary(
            year_month=year_month,
            budget=budget.amount,
            spent=spent,
            balance=balance,
            daily_budget=max(0, start_budget - spent_today),
            start_budget=start_budget,
            remaining_days=remaining_days,
            spent_today=spent_today,
        )

    def _derive_daily(
        self,
        budget: BudgetConfig,
        balance: int,
        remaining_days: int,
        year_month: str,
    ) -> int:
        if budget.calculation == BudgetCalculation.DYNAMIC:
            return balance // remaining_days if remaining_days > 0 else 0
        return balance // days_in_month(year_month)

    def get_daily_snapshot(self, day: date) -> Optional[DailyBudgetSnapshot]:
        return self._repository.load_daily_budgets().get(day.isoformat())

    def _resolve_start_budget(self, today: date, derived: int) -> int:
        snapshots = self._repository.load_daily_budgets()
        key = today.isoformat()
        if key in snapshots:
            return snapshots[key].start_budget

        snapshots[key] = DailyBudgetSnapshot(date=today, start_budget=derived)
        pruned = self._prune(snapshots, today)
        self._repository.save_daily_budgets(snapshots)

        self._logger.log(ActivityEventBuilder.daily_snapshot_created(key, derived))
        if pruned:
            self._logger.log(ActivityEventBuilder.daily_snapshots_pruned(pruned))
        return derived

    def _prune(self, snapshots: dict[str, DailyBudgetSnapshot], today: date) -> list[str]:
        cutoff = today - timedelta(days=self._settings.snapshot_retention_days)
        expired = [key for key, snap in snapshots.items() if snap.date < cutoff]
        for key in expired:
            del snapshots[key]
        return expired
