"""
Savings Pool Models

The pool is one unencumbered balance plus an append-only history.
Every change of ``amount`` appends exactly one transaction.
"""

from datetime import datetime
from enum import Enum

from pydantic import Field

from moneypouch.models.base import LedgerModel, generate_id, utcnow
from moneypouch.models.goal import Goal


class PoolTransactionType(str, Enum):
    """Direction of a pool transaction."""
    ADD = "add"
    WITHDRAW = "withdraw"


class PoolTransaction(LedgerModel):
    """A single movement of money into or out of the pool."""

    id: str = Field(default_factory=lambda: generate_id("pool"))
    amount: int = Field(..., gt=0)
    type: PoolTransactionType
    note: str = Field(default="", max_length=200)
    timestamp: datetime = Field(default_factory=utcnow)

    @property
    def signed_amount(self) -> int:
        """Effect on the pool balance."""
        if self.type == PoolTransactionType.WITHDRAW:
            return -self.amount
        return self.amount


class PoolState(LedgerModel):
    """The savings pool record."""

    amount: int = Field(default=0, ge=0)
    history: list[PoolTransaction] = Field(default_factory=list)


class TransferResult(LedgerModel):
    """Goal and pool as they stand after a transfer."""

    goal: Goal
    pool: PoolState
