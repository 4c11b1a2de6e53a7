"""
Goal Ledger

CRUD over savings goals.

CRITICAL: After every mutation a goal satisfies
``achieved == (current_amount >= amount)``. The ledger re-derives it on
create and on every update; ``achieved_at`` is stamped only on the
unachieved→achieved transition and cleared on the reverse one.
"""

from datetime import datetime
from typing import Any, Callable, Optional

from moneypouch.activity import ActivityLogger, get_activity_logger
from moneypouch.ledger.errors import GoalNotFoundError
from moneypouch.models.activity import ActivityEventBuilder, ActivityEventType
from moneypouch.models.base import utcnow
from moneypouch.models.goal import Goal
from moneypouch.services.storage import Repository
from moneypouch.validation import (
    validate_amount,
    validate_goal_name,
    validate_positive_amount,
)


class GoalLedger:
    """Creates, updates and funds savings goals."""

    def __init__(
        self,
        repository: Repository,
        activity_logger: Optional[ActivityLogger] = None,
        now: Callable[[], datetime] = utcnow,
    ):
        self._repository = repository
        self._logger = get_activity_logger(activity_logger)
        self._now = now

    def get_goals(self) -> list[Goal]:
        return self._repository.load_goals()

    def get_goal(self, goal_id: str) -> Goal:
        """
        Look up a goal by id.

        Raises:
            GoalNotFoundError: If no goal has this id
        """
        for goal in self._repository.load_goals():
            if goal.id == goal_id:
                return goal
        raise GoalNotFoundError(goal_id)

    def add_goal(
        self,
        name: Any,
        amount: Any,
        current_amount: Any = 0,
        auto_save: bool = False,
        monthly_amount: Any = 0,
    ) -> Goal:
        """Create a goal. ``monthly_amount`` only counts when ``auto_save`` is on."""
        now = self._now()
        goal = Goal(
            name=validate_goal_name(name),
            amount=validate_positive_amount(amount),
            current_amount=validate_amount(current_amount),
            auto_save=bool(auto_save),
            monthly_amount=validate_amount(monthly_amount) if auto_save else 0,
            created_at=now,
        )
        goal.evaluate_achievement(now)

        goals = self._repository.load_goals()
        goals.append(goal)
        self._repository.save_goals(goals)

        self._log(ActivityEventType.GOAL_CREATED, goal)
        if goal.achieved:
            self._log(ActivityEventType.GOAL_ACHIEVED, goal)
        return goal

    def update_goal(
        self,
        goal_id: str,
        name: Any = None,
        amount: Any = None,
        current_amount: Any = None,
        auto_save: Optional[bool] = None,
        monthly_amount: Any = None,
    ) -> Goal:
        """
        Apply field changes, then re-evaluate achievement.

        Fields left as None keep their value.

        Raises:
            GoalNotFoundError: If ``goal_id`` does not resolve
        """
        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = validate_goal_name(name)
        if amount is not None:
            changes["amount"] = validate_positive_amount(amount)
        if current_amount is not None:
            changes["current_amount"] = validate_amount(current_amount)
        if auto_save is not None:
            changes["auto_save"] = bool(auto_save)
        if monthly_amount is not None:
            changes["monthly_amount"] = validate_amount(monthly_amount)

        goals = self._repository.load_goals()
        index = self._index_of(goals, goal_id)

        now = self._now()
        goal = Goal.model_validate({
            **goals[index].model_dump(),
            **changes,
            "updated_at": now,
        })
        transition = goal.evaluate_achievement(now)

        goals[index] = goal
        self._repository.save_goals(goals)

        self._log(ActivityEventType.GOAL_UPDATED, goal, {"fields": sorted(changes)})
        if transition is True:
            self._log(ActivityEventType.GOAL_ACHIEVED, goal)
        elif transition is False:
            self._log(ActivityEventType.GOAL_REOPENED, goal)
        return goal

    def delete_goal(self, goal_id: str) -> Goal:
        """Remove a goal and return the removed record."""
        goals = self._repository.load_goals()
        index = self._index_of(goals, goal_id)
        removed = goals.pop(index)
        self._repository.save_goals(goals)

        self._log(ActivityEventType.GOAL_DELETED, removed)
        return removed

    def add_to_goal(self, goal_id: str, amount: Any) -> Goal:
        """Increase a goal's saved amount."""
        amount = validate_positive_amount(amount)
        goal = self.get_goal(goal_id)
        return self.update_goal(goal_id, current_amount=goal.current_amount + amount)

    def subtract_from_goal(self, goal_id: str, amount: Any) -> Goal:
        """
        Decrease a goal's saved amount.

        Callers check the balance first; going below zero is rejected by
        validation of the resulting amount.
        """
        amount = validate_positive_amount(amount)
        goal = self.get_goal(goal_id)
        return self.update_goal(goal_id, current_amount=goal.current_amount - amount)

    # Summaries

    def get_total_savings(self) -> int:
        """Sum of what every goal currently holds."""
        return sum(goal.current_amount for goal in self.get_goals())

    def get_achieved_goals_count(self) -> int:
        return sum(1 for goal in self.get_goals() if goal.achieved)

    def get_monthly_auto_save_amount(self) -> int:
        """Planned monthly contributions of unachieved auto-save goals."""
        return sum(
            goal.monthly_amount
            for goal in self.get_goals()
            if goal.auto_save and not goal.achieved
        )

    def _index_of(self, goals: list[Goal], goal_id: str) -> int:
        for index, goal in enumerate(goals):
            if goal.id == goal_id:
                return index
        raise GoalNotFoundError(goal_id)

    def _log(
        self,
        event_type: ActivityEventType,
        goal: Goal,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self._logger.log(ActivityEventBuilder.goal_changed(
            event_type, goal.id, goal.name, details
        ))
