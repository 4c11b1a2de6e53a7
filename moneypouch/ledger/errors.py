"""Ledger exceptions."""


class LedgerError(Exception):
    """Base exception for ledger operations that were refused."""
    pass


class ExpenseNotFoundError(LedgerError):
    """No expense with the given id."""

    def __init__(self, expense_id: str):
        self.expense_id = expense_id
        super().__init__(f"Expense not found: {expense_id}")


class GoalNotFoundError(LedgerError):
    """No goal with the given id."""

    def __init__(self, goal_id: str):
        self.goal_id = goal_id
        super().__init__(f"Goal not found: {goal_id}")


class InsufficientPoolError(LedgerError):
    """The savings pool holds less than the requested amount."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Savings pool balance {available} is less than {requested}"
        )


class InsufficientGoalBalanceError(LedgerError):
    """The goal holds less than the requested amount."""

    def __init__(self, goal_id: str, requested: int, available: int):
        self.goal_id = goal_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Goal {goal_id} holds {available}, cannot withdraw {requested}"
        )
