"""
Activity Models for MoneyPouch

Every ledger mutation and every recovered failure produces an activity
event. Events are written to the structured local log only; the sole
persisted history in the system is the savings pool's transaction list.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from moneypouch.models.base import utcnow


class ActivityEventType(str, Enum):
    """Types of events the ledger reports."""
    # Expenses
    EXPENSE_ADDED = "expense_added"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"

    # Budget
    BUDGET_SAVED = "budget_saved"
    DAILY_SNAPSHOT_CREATED = "daily_snapshot_created"
    DAILY_SNAPSHOTS_PRUNED = "daily_snapshots_pruned"

    # Goals
    GOAL_CREATED = "goal_created"
    GOAL_UPDATED = "goal_updated"
    GOAL_DELETED = "goal_deleted"
    GOAL_ACHIEVED = "goal_achieved"
    GOAL_REOPENED = "goal_reopened"

    # Savings pool
    POOL_DEPOSIT = "pool_deposit"
    POOL_WITHDRAWAL = "pool_withdrawal"

    # Transfers
    TRANSFER_COMPLETED = "transfer_completed"
    TRANSFER_INCOMPLETE = "transfer_incomplete"

    # Persistence
    LOAD_CORRUPTED = "load_corrupted"
    SAVE_FAILED = "save_failed"
    DATA_CLEARED = "data_cleared"

    # Generic
    OPERATION_FAILED = "operation_failed"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ActivityEvent(BaseModel):
    """A single activity event."""

    timestamp: datetime = Field(default_factory=utcnow)
    event_type: ActivityEventType
    severity: ActivitySeverity = ActivitySeverity.INFO

    # What entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'goal', 'pool')"
    )
    entity_id: Optional[str] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.expense_added(expense_id, 1200, "food")
        event = ActivityEventBuilder.goal_changed(ActivityEventType.GOAL_ACHIEVED, goal_id, "New laptop")
    """

    @staticmethod
    def expense_added(expense_id: str, amount: int, category: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense recorded: {category} {amount}",
            details={"amount": amount, "category": category},
        )

    @staticmethod
    def expense_updated(expense_id: str, changes: dict[str, Any]) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPENSE_UPDATED,
            entity_type="expense",
            entity_id=expense_id,
            description="Expense updated",
            details={"changes": changes},
        )

    @staticmethod
    def expense_deleted(expense_id: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=expense_id,
            description="Expense deleted",
        )

    @staticmethod
    def budget_saved(year_month: str, amount: int, keys: list[str]) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.BUDGET_SAVED,
            entity_type="budget",
            entity_id=year_month,
            description=f"Budget {amount} saved for {', '.join(keys)}",
            details={"amount": amount, "keys": keys},
        )

    @staticmethod
    def daily_snapshot_created(date: str, start_budget: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.DAILY_SNAPSHOT_CREATED,
            severity=ActivitySeverity.DEBUG,
            entity_type="daily_budget",
            entity_id=date,
            description=f"Start-of-day allowance frozen at {start_budget}",
            details={"start_budget": start_budget},
        )

    @staticmethod
    def daily_snapshots_pruned(dates: list[str]) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.DAILY_SNAPSHOTS_PRUNED,
            severity=ActivitySeverity.DEBUG,
            entity_type="daily_budget",
            description=f"Pruned {len(dates)} expired daily snapshots",
            details={"dates": dates},
        )

    @staticmethod
    def goal_changed(
        event_type: ActivityEventType,
        goal_id: str,
        name: str,
        details: Optional[dict[str, Any]] = None,
    ) -> ActivityEvent:
        descriptions = {
            ActivityEventType.GOAL_CREATED: f"Goal created: {name}",
            ActivityEventType.GOAL_UPDATED: f"Goal updated: {name}",
            ActivityEventType.GOAL_DELETED: f"Goal deleted: {name}",
            ActivityEventType.GOAL_ACHIEVED: f"Goal achieved: {name}",
            ActivityEventType.GOAL_REOPENED: f"Goal no longer achieved: {name}",
        }
        return ActivityEvent(
            event_type=event_type,
            entity_type="goal",
            entity_id=goal_id,
            description=descriptions[event_type],
            details=details or {},
        )

    @staticmethod
    def pool_transaction(
        transaction_id: str,
        transaction_type: str,
        amount: int,
        balance: int,
        note: str,
    ) -> ActivityEvent:
        event_type = (
            ActivityEventType.POOL_DEPOSIT
            if transaction_type == "add"
            else ActivityEventType.POOL_WITHDRAWAL
        )
        return ActivityEvent(
            event_type=event_type,
            entity_type="pool",
            entity_id=transaction_id,
            description=f"Savings pool {transaction_type} of {amount}",
            details={"amount": amount, "balance": balance, "note": note},
        )

    @staticmethod
    def transfer_completed(direction: str, goal_id: str, amount: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TRANSFER_COMPLETED,
            entity_type="goal",
            entity_id=goal_id,
            description=f"Transfer {direction} of {amount} completed",
            details={"direction": direction, "amount": amount},
        )

    @staticmethod
    def transfer_incomplete(
        direction: str,
        goal_id: str,
        amount: int,
        error_message: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.TRANSFER_INCOMPLETE,
            severity=ActivitySeverity.ERROR,
            entity_type="goal",
            entity_id=goal_id,
            description=(
                f"Transfer {direction} failed after the source was debited; "
                f"{amount} is in flight"
            ),
            details={"direction": direction, "amount": amount},
            error_message=error_message,
        )

    @staticmethod
    def load_corrupted(collection: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.LOAD_CORRUPTED,
            severity=ActivitySeverity.WARNING,
            entity_type="collection",
            entity_id=collection,
            description=f"Stored {collection} could not be read; using empty default",
            error_message=error_message,
        )

    @staticmethod
    def save_failed(collection: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SAVE_FAILED,
            severity=ActivitySeverity.ERROR,
            entity_type="collection",
            entity_id=collection,
            description=f"Failed to save {collection}",
            error_message=error_message,
        )

    @staticmethod
    def data_cleared(collections: list[str]) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.DATA_CLEARED,
            severity=ActivitySeverity.WARNING,
            description="All stored data removed",
            details={"collections": collections},
        )

    @staticmethod
    def operation_failed(
        context: str,
        message: str,
        error_message: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.OPERATION_FAILED,
            severity=ActivitySeverity.ERROR,
            description=message,
            details={"context": context},
            error_message=error_message,
        )
