"""
Tests for MoneyPouch

Test strategy:
1. Unit tests for individual components (models, validators, backends)
2. Ledger tests over in-memory storage (see conftest.py)
3. No writes outside pytest's tmp_path
"""

import json
import re
from datetime import date, datetime, timezone

import pytest

from moneypouch.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)
from moneypouch.models.base import generate_id
from moneypouch.models.budget import (
    ApplyRange,
    BalanceSummary,
    BudgetCalculation,
    BudgetConfig,
    DailyBudgetSnapshot,
)
from moneypouch.models.expense import Expense, ExpenseCategory
from moneypouch.models.goal import Goal
from moneypouch.models.pool import PoolState, PoolTransaction, PoolTransactionType


NOW = datetime(2024, 6, 21, 9, 0, tzinfo=timezone.utc)


class TestIds:
    """Tests for record id generation."""

    def test_id_format(self):
        """Ids are <prefix>_<epoch-ms>_<9 chars>."""
        assert re.fullmatch(r"exp_\d{13}_[a-z0-9]{9}", generate_id("exp"))

    def test_ids_are_unique(self):
        ids = {generate_id("goal") for _ in range(200)}
        assert len(ids) == 200


class TestExpenseModels:
    """Tests for expense models."""

    def test_expense_creation(self):
        """Test Expense model creation from an ISO date string."""
        expense = Expense(amount=1200, category="food", date="2024-06-21")
        assert expense.id.startswith("exp_")
        assert expense.category == ExpenseCategory.FOOD
        assert expense.date == date(2024, 6, 21)
        assert expense.year_month == "2024-06"
        assert expense.updated_at is None

    def test_expense_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValueError):
            Expense(amount=-1, category="food", date="2024-06-21")

    def test_expense_serializes_camel_case(self):
        """Persisted keys keep the camelCase storage layout."""
        expense = Expense(
            amount=10, category="other", date="2024-06-21", updated_at=NOW
        )
        data = json.loads(expense.model_dump_json(by_alias=True))
        assert "updatedAt" in data
        assert data["date"] == "2024-06-21"

    def test_all_categories_exist(self):
        """Test that expected categories exist."""
        expected = ["food", "entertainment", "transport", "shopping", "health", "other"]
        assert [c.value for c in ExpenseCategory] == expected

    def test_category_labels(self):
        assert ExpenseCategory.FOOD.label == "Food"
        assert ExpenseCategory.OTHER.label == "Other"


class TestBudgetModels:
    """Tests for budget models."""

    def test_budget_config_defaults(self):
        config = BudgetConfig(amount=50000)
        assert config.calculation == BudgetCalculation.DYNAMIC
        assert config.apply_range == ApplyRange.CURRENT

    def test_budget_config_rejects_zero(self):
        with pytest.raises(ValueError):
            BudgetConfig(amount=0)

    def test_snapshot_round_trips_by_alias(self):
        """Snapshots stored under camelCase keys load back."""
        snapshot = DailyBudgetSnapshot(date=date(2024, 6, 21), start_budget=5000)
        data = json.loads(snapshot.model_dump_json(by_alias=True))
        assert data["startBudget"] == 5000
        assert DailyBudgetSnapshot.model_validate(data).start_budget == 5000

    def test_balance_summary_allows_negative_balance(self):
        summary = BalanceSummary(budget=100, spent=150, balance=-50)
        assert summary.balance == -50
        assert summary.daily_budget == 0


class TestGoalModel:
    """Tests for the Goal model."""

    def test_progress_and_remaining(self):
        goal = Goal(name="Trip", amount=1000, current_amount=250)
        assert goal.progress == 0.25
        assert goal.remaining_amount == 750

    def test_progress_is_capped(self):
        goal = Goal(name="Trip", amount=1000, current_amount=1500)
        assert goal.progress == 1.0
        assert goal.remaining_amount == 0

    def test_evaluate_achievement_transitions(self):
        """achieved follows current_amount >= amount in both directions."""
        goal = Goal(name="Trip", amount=1000, current_amount=1000)
        assert goal.evaluate_achievement(NOW) is True
        assert goal.achieved is True
        assert goal.achieved_at == NOW

        assert goal.evaluate_achievement(NOW) is None

        goal.current_amount = 999
        assert goal.evaluate_achievement(NOW) is False
        assert goal.achieved is False
        assert goal.achieved_at is None

    def test_evaluate_achievement_stamps_missing_timestamp(self):
        goal = Goal(name="Trip", amount=100, current_amount=100, achieved=True)
        assert goal.achieved_at is None

        assert goal.evaluate_achievement(NOW) is None
        assert goal.achieved_at == NOW

    def test_evaluate_achievement_clears_stale_timestamp(self):
        goal = Goal(name="Trip", amount=100, current_amount=50, achieved_at=NOW)

        assert goal.evaluate_achievement(NOW) is None
        assert goal.achieved_at is None

    def test_goal_name_required(self):
        with pytest.raises(ValueError):
            Goal(name="", amount=1000)


class TestPoolModels:
    """Tests for savings pool models."""

    def test_signed_amount(self):
        add = PoolTransaction(amount=500, type=PoolTransactionType.ADD)
        withdraw = PoolTransaction(amount=200, type="withdraw")
        assert add.signed_amount == 500
        assert withdraw.signed_amount == -200
        assert add.id.startswith("pool_")

    def test_pool_state_rejects_negative_balance(self):
        with pytest.raises(ValueError):
            PoolState(amount=-1)

    def test_empty_pool(self):
        pool = PoolState()
        assert pool.amount == 0
        assert pool.history == []


class TestActivityModels:
    """Tests for activity event models."""

    def test_activity_event_creation(self):
        """Test ActivityEvent model creation."""
        event = ActivityEvent(
            event_type=ActivityEventType.EXPENSE_ADDED,
            description="Expense recorded",
        )
        assert event.event_type == ActivityEventType.EXPENSE_ADDED
        assert event.severity == ActivitySeverity.INFO

    def test_activity_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = ActivityEventBuilder.expense_added("exp_1", 1200, "food")
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "expense_added"
        assert log_dict["entity_id"] == "exp_1"
        assert log_dict["details"] == {"amount": 1200, "category": "food"}

    def test_transfer_incomplete_is_an_error(self):
        """Test ActivityEventBuilder.transfer_incomplete."""
        event = ActivityEventBuilder.transfer_incomplete(
            direction="pool_to_goal",
            goal_id="goal_1",
            amount=300,
            error_message="disk full",
        )
        assert event.severity == ActivitySeverity.ERROR
        assert event.details["amount"] == 300
        assert "300" in event.description
        assert event.error_message == "disk full"

    def test_pool_transaction_event_type(self):
        deposit = ActivityEventBuilder.pool_transaction("pool_1", "add", 10, 10, "")
        withdrawal = ActivityEventBuilder.pool_transaction("pool_2", "withdraw", 5, 5, "")
        assert deposit.event_type == ActivityEventType.POOL_DEPOSIT
        assert withdrawal.event_type == ActivityEventType.POOL_WITHDRAWAL


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
