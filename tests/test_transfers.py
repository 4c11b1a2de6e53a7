"""Tests for transfers between the savings pool and goals."""

import pytest

from moneypouch.ledger import (
    GoalNotFoundError,
    InsufficientGoalBalanceError,
    InsufficientPoolError,
)
from moneypouch.models.activity import ActivityEventType
from moneypouch.services.storage import SaveFailedError
from moneypouch.validation import AmountTooLargeError, InvalidAmountError


@pytest.fixture
def funded(goal_ledger, savings_pool):
    savings_pool.add_to_savings_pool(5000)
    return goal_ledger.add_goal("New laptop", 3000)


class TestDepositToGoal:
    """Pool → goal."""

    def test_deposit(self, transfers, funded, activity_logger):
        result = transfers.deposit_to_goal_from_pool(funded.id, 2000)

        assert result.goal.current_amount == 2000
        assert result.pool.amount == 3000
        assert result.pool.history[-1].note == 'Deposit to goal "New laptop"'
        assert activity_logger.of_type(ActivityEventType.TRANSFER_COMPLETED)

    def test_deposit_can_achieve_goal(self, transfers, funded):
        result = transfers.deposit_to_goal_from_pool(funded.id, 3000)
        assert result.goal.achieved is True
        assert result.goal.achieved_at is not None

    def test_insufficient_pool(self, transfers, goal_ledger, savings_pool):
        savings_pool.add_to_savings_pool(1000)
        goal = goal_ledger.add_goal("Trip", 5000)

        with pytest.raises(InsufficientPoolError):
            transfers.deposit_to_goal_from_pool(goal.id, 1500)

        assert savings_pool.get_balance() == 1000
        assert len(savings_pool.get_pool().history) == 1
        assert goal_ledger.get_goal(goal.id).current_amount == 0

    def test_unknown_goal_leaves_pool_untouched(self, transfers, savings_pool, funded):
        with pytest.raises(GoalNotFoundError):
            transfers.deposit_to_goal_from_pool("goal_missing", 100)
        assert savings_pool.get_balance() == 5000

    def test_invalid_amount(self, transfers, funded, savings_pool):
        with pytest.raises(InvalidAmountError):
            transfers.deposit_to_goal_from_pool(funded.id, 0)
        assert savings_pool.get_balance() == 5000


    def test_goal_total_over_maximum_leaves_pool_untouched(
        self, transfers, goal_ledger, savings_pool, activity_logger
    ):
        savings_pool.add_to_savings_pool(1_000_000)
        goal = goal_ledger.add_goal("House", 10_000_000, current_amount=9_500_000)

        with pytest.raises(AmountTooLargeError):
            transfers.deposit_to_goal_from_pool(goal.id, 600_000)

        assert savings_pool.get_balance() == 1_000_000
        assert len(savings_pool.get_pool().history) == 1
        assert goal_ledger.get_goal(goal.id).current_amount == 9_500_000
        assert activity_logger.of_type(ActivityEventType.TRANSFER_INCOMPLETE) == []


class TestWithdrawFromGoal:
    """Goal → pool."""

    def test_withdraw(self, transfers, goal_ledger, savings_pool):
        goal = goal_ledger.add_goal("Trip", 5000, current_amount=800)

        result = transfers.withdraw_from_goal_to_pool(goal.id, 300)

        assert result.goal.current_amount == 500
        assert result.pool.amount == 300
        assert result.pool.history[-1].note == 'Returned from goal "Trip"'

    def test_insufficient_goal_balance(self, transfers, goal_ledger, savings_pool):
        goal = goal_ledger.add_goal("Trip", 5000, current_amount=500)

        with pytest.raises(InsufficientGoalBalanceError) as exc_info:
            transfers.withdraw_from_goal_to_pool(goal.id, 600)

        assert exc_info.value.available == 500
        assert goal_ledger.get_goal(goal.id).current_amount == 500
        assert savings_pool.get_pool().history == []

    def test_withdraw_reopens_goal(self, transfers, goal_ledger):
        goal = goal_ledger.add_goal("Trip", 500, current_amount=500)
        result = transfers.withdraw_from_goal_to_pool(goal.id, 1)
        assert result.goal.achieved is False
        assert result.goal.achieved_at is None

    def test_unknown_goal(self, transfers):
        with pytest.raises(GoalNotFoundError):
            transfers.withdraw_from_goal_to_pool("goal_missing", 1)


class TestTransferInvariants:
    """Money is conserved across transfers."""

    def test_round_trip_restores_balances(self, transfers, goal_ledger, savings_pool, funded):
        transfers.deposit_to_goal_from_pool(funded.id, 1234)
        transfers.withdraw_from_goal_to_pool(funded.id, 1234)

        pool = savings_pool.get_pool()
        assert pool.amount == 5000
        assert len(pool.history) == 3
        assert goal_ledger.get_goal(funded.id).current_amount == 0

    def test_total_is_conserved(self, transfers, goal_ledger, savings_pool, funded):
        other = goal_ledger.add_goal("Bike", 800)

        transfers.deposit_to_goal_from_pool(funded.id, 2500)
        transfers.deposit_to_goal_from_pool(other.id, 900)
        transfers.withdraw_from_goal_to_pool(funded.id, 400)

        assert savings_pool.get_balance() + goal_ledger.get_total_savings() == 5000

    def test_failed_credit_is_reported_in_flight(
        self, transfers, goal_ledger, savings_pool, storage, storage_settings,
        activity_logger, funded,
    ):
        storage.failing_keys.add(storage_settings.goals_key)

        with pytest.raises(SaveFailedError):
            transfers.deposit_to_goal_from_pool(funded.id, 700)

        # Debit went through, credit did not: money is missing, never duplicated
        assert savings_pool.get_balance() == 4300
        assert goal_ledger.get_goal(funded.id).current_amount == 0

        event = activity_logger.of_type(ActivityEventType.TRANSFER_INCOMPLETE)[0]
        assert event.details["amount"] == 700
        assert event.entity_id == funded.id
        assert not activity_logger.of_type(ActivityEventType.TRANSFER_COMPLETED)
