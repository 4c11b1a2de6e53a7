"""
Transfer Orchestrator

Moves money between the savings pool and a goal.

DESIGN DECISION: The pool and the goals are separate persisted documents,
so a transfer is two writes, not one transaction. The orchestrator:
1. Runs every check (amount, balance, goal existence, resulting goal
   total) before any write
2. Always debits the source first, then credits the destination

If the credit fails after the debit went through, the money is "in flight"
(missing), never duplicated. That failure is logged as a
``transfer_incomplete`` event naming the amount and the exception is
re-raised; nothing is rolled back automatically.
"""

from typing import Any, Optional

from moneypouch.activity import ActivityLogger, get_activity_logger
from moneypouch.ledger.errors import (
    InsufficientGoalBalanceError,
    InsufficientPoolError,
)
from moneypouch.ledger.goals import GoalLedger
from moneypouch.ledger.pool import SavingsPool
from moneypouch.models.pool import TransferResult
from moneypouch.validation import validate_amount, validate_positive_amount


class TransferOrchestrator:
    """Pool→goal and goal→pool transfers."""

    TO_GOAL = "pool_to_goal"
    TO_POOL = "goal_to_pool"

    def __init__(
        self,
        goal_ledger: GoalLedger,
        savings_pool: SavingsPool,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._goals = goal_ledger
        self._pool = savings_pool
        self._logger = get_activity_logger(activity_logger)

    def deposit_to_goal_from_pool(self, goal_id: str, amount: Any) -> TransferResult:
        """
        Move ``amount`` from the pool into a goal.

        Raises:
            InsufficientPoolError: pool balance below ``amount``
            GoalNotFoundError: unknown goal
            AmountTooLargeError: the goal would exceed the maximum amount
        """
        amount = validate_positive_amount(amount)
        balance = self._pool.get_balance()
        if amount > balance:
            raise InsufficientPoolError(requested=amount, available=balance)
        goal = self._goals.get_goal(goal_id)
        # The credited total must itself be a valid amount
        validate_amount(goal.current_amount + amount)

        pool = self._pool.withdraw_from_savings_pool(
            amount, f'Deposit to goal "{goal.name}"'
        )
        try:
            goal = self._goals.add_to_goal(goal_id, amount)
        except Exception as e:
            self._logger.log_transfer_incomplete(self.TO_GOAL, goal_id, amount, str(e))
            raise

        self._logger.log_transfer_completed(self.TO_GOAL, goal_id, amount)
        return TransferResult(goal=goal, pool=pool)

    def withdraw_from_goal_to_pool(self, goal_id: str, amount: Any) -> TransferResult:
        """
        Move ``amount`` from a goal back into the pool.

        Raises:
            GoalNotFoundError: unknown goal
            InsufficientGoalBalanceError: goal holds less than ``amount``
        """
        amount = validate_positive_amount(amount)
        goal = self._goals.get_goal(goal_id)
        if amount > goal.current_amount:
            raise InsufficientGoalBalanceError(
                goal_id, requested=amount, available=goal.current_amount
            )

        goal = self._goals.subtract_from_goal(goal_id, amount)
        try:
            pool = self._pool.add_to_savings_pool(
                amount, f'Returned from goal "{goal.name}"'
            )
        except Exception as e:
            self._logger.log_transfer_incomplete(self.TO_POOL, goal_id, amount, str(e))
            raise

        self._logger.log_transfer_completed(self.TO_POOL, goal_id, amount)
        return TransferResult(goal=goal, pool=pool)
