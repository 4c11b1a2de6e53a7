"""
Savings Goal Model

CRITICAL: ``achieved`` is derived state. It must equal
``current_amount >= amount`` after every mutation, and ``achieved_at`` is set
only while the goal is achieved. Callers never set it directly; they call
``evaluate_achievement`` after changing amounts.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from moneypouch.models.base import LedgerModel, generate_id, utcnow


class Goal(LedgerModel):
    """A savings goal."""

    id: str = Field(default_factory=lambda: generate_id("goal"))
    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Goal name shown to the user"
    )
    amount: int = Field(
        ...,
        gt=0,
        description="Target amount"
    )
    current_amount: int = Field(
        default=0,
        ge=0,
        description="Amount saved towards the target so far"
    )
    auto_save: bool = False
    monthly_amount: int = Field(
        default=0,
        ge=0,
        description="Planned monthly contribution when auto_save is on"
    )
    achieved: bool = False
    achieved_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    @property
    def remaining_amount(self) -> int:
        """How much is still missing to reach the target."""
        return max(0, self.amount - self.current_amount)

    @property
    def progress(self) -> float:
        """Completion ratio, capped at 1.0."""
        return min(1.0, self.current_amount / self.amount)

    def evaluate_achievement(self, now: datetime) -> Optional[bool]:
        """
        Re-derive ``achieved`` from the amounts.

        Returns True on an unachieved→achieved transition, False on the
        reverse, and None when the state was already correct.
        """
        reached = self.current_amount >= self.amount
        if reached and not self.achieved:
            self.achieved = True
            self.achieved_at = now
            return True
        if not reached and self.achieved:
            self.achieved = False
            self.achieved_at = None
            return False
        # Already in the right state; keep achieved_at consistent with it
        if reached and self.achieved_at is None:
            self.achieved_at = now
        elif not reached and self.achieved_at is not None:
            self.achieved_at = None
        return None
