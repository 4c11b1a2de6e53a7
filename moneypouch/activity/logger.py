"""
Activity Logger

DESIGN DECISION: Every ledger mutation and every recovered failure is logged
as a structured event. This provides:
1. Traceability of money movements during a session
2. Debugging capability for corrupted or unsaved collections
3. A single place to report failures to UI callers

The activity logger:
- Writes to the structured local log only (nothing is persisted)
- Gracefully handles failures (a failing log call doesn't abort the operation)
"""

from typing import Callable, Optional, TypeVar

import structlog

from moneypouch.models.activity import ActivityEvent, ActivityEventBuilder


T = TypeVar("T")


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class ActivityLogger:
    """Central structured logging service for the ledger."""

    def __init__(self, name: str = "moneypouch"):
        self._logger = structlog.get_logger(name)

    def log(self, event: ActivityEvent) -> None:
        """
        Write an event to the local log at its severity.

        A failing log call is reported as ``activity_log_failed`` and not
        propagated, so logging never aborts a ledger operation.
        """
        log_dict = event.to_log_dict()
        severity = event.severity.value

        try:
            if severity == "error":
                self._logger.error("activity_event", **log_dict)
            elif severity == "warning":
                self._logger.warning("activity_event", **log_dict)
            elif severity == "debug":
                self._logger.debug("activity_event", **log_dict)
            else:
                self._logger.info("activity_event", **log_dict)
        except Exception as e:
            # Report the failure but don't raise
            self._logger.error(
                "activity_log_failed",
                event_type=event.event_type.value,
                error=str(e),
            )

    def log_load_corrupted(self, collection: str, error_message: str) -> None:
        """Log a collection that could not be deserialized."""
        self.log(ActivityEventBuilder.load_corrupted(collection, error_message))

    def log_save_failed(self, collection: str, error_message: str) -> None:
        """Log a persistence write that did not go through."""
        self.log(ActivityEventBuilder.save_failed(collection, error_message))

    def log_transfer_completed(self, direction: str, goal_id: str, amount: int) -> None:
        """Log a completed pool/goal transfer."""
        self.log(ActivityEventBuilder.transfer_completed(direction, goal_id, amount))

    def log_transfer_incomplete(
        self,
        direction: str,
        goal_id: str,
        amount: int,
        error_message: str,
    ) -> None:
        """Log a transfer whose second write failed."""
        self.log(ActivityEventBuilder.transfer_incomplete(
            direction=direction,
            goal_id=goal_id,
            amount=amount,
            error_message=error_message,
        ))

    def log_error(
        self,
        context: str,
        message: str,
        error: Exception,
    ) -> None:
        """Log a failed operation with its user-facing message."""
        self.log(ActivityEventBuilder.operation_failed(
            context=context,
            message=message,
            error_message=str(error),
        ))

    def run_and_report(
        self,
        fn: Callable[[], T],
        error_message: str,
        context: str = "",
    ) -> T:
        """
        Run ``fn`` and return its result.

        On failure the error is logged together with the user-facing
        ``error_message`` and re-raised, so UI callers can show a
        notification without swallowing the exception.
        """
        try:
            return fn()
        except Exception as e:
            self.log_error(context or getattr(fn, "__name__", "operation"), error_message, e)
            raise


def get_activity_logger(logger: Optional[ActivityLogger] = None) -> ActivityLogger:
    """Return ``logger`` or a fresh default logger."""
    return logger if logger is not None else ActivityLogger()
