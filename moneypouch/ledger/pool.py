"""
Savings Pool

A single balance of unallocated savings with an append-only history.

GUARANTEES:
- The balance never goes negative
- Each successful call appends exactly one transaction
- Balance and history are persisted together in one save
"""

from datetime import datetime
from typing import Any, Callable, Optional

from moneypouch.activity import ActivityLogger, get_activity_logger
from moneypouch.ledger.errors import InsufficientPoolError
from moneypouch.models.activity import ActivityEventBuilder
from moneypouch.models.base import utcnow
from moneypouch.models.pool import PoolState, PoolTransaction, PoolTransactionType
from moneypouch.services.storage import Repository
from moneypouch.validation import validate_note, validate_positive_amount


class SavingsPool:
    """Deposits to and withdrawals from the shared savings pool."""

    def __init__(
        self,
        repository: Repository,
        activity_logger: Optional[ActivityLogger] = None,
        now: Callable[[], datetime] = utcnow,
    ):
        self._repository = repository
        self._logger = get_activity_logger(activity_logger)
        self._now = now

    def get_pool(self) -> PoolState:
        return self._repository.load_pool()

    def get_balance(self) -> int:
        return self._repository.load_pool().amount

    def add_to_savings_pool(self, amount: Any, note: str = "") -> PoolState:
        """Increase the pool balance and record an ``add`` transaction."""
        amount = validate_positive_amount(amount)
        note = validate_note(note)
        pool = self._repository.load_pool()
        return self._apply(pool, PoolTransactionType.ADD, amount, note)

    def withdraw_from_savings_pool(self, amount: Any, note: str = "") -> PoolState:
        """
        Decrease the pool balance and record a ``withdraw`` transaction.

        Raises:
            InsufficientPoolError: If ``amount`` exceeds the balance
            InvalidNoteError: If ``note`` is longer than 200 characters
        """
        amount = validate_positive_amount(amount)
        note = validate_note(note)
        pool = self._repository.load_pool()
        if amount > pool.amount:
            raise InsufficientPoolError(requested=amount, available=pool.amount)
        return self._apply(pool, PoolTransactionType.WITHDRAW, amount, note)

    def _apply(
        self,
        pool: PoolState,
        transaction_type: PoolTransactionType,
        amount: int,
        note: str,
    ) -> PoolState:
        transaction = PoolTransaction(
            amount=amount,
            type=transaction_type,
            note=note,
            timestamp=self._now(),
        )
        pool.amount += transaction.signed_amount
        pool.history.append(transaction)
        self._repository.save_pool(pool)

        self._logger.log(ActivityEventBuilder.pool_transaction(
            transaction.id,
            transaction_type.value,
            amount,
            pool.amount,
            transaction.note,
        ))
        return pool
