"""
Shared fixtures.

Tests never touch the user's data directory: ledger components run over
InMemoryStorage, and the JSON file backend is only exercised in tmp_path.
The clock is pinned to 2024-06-21, which leaves 10 days (counting today)
in June.
"""

from datetime import date, datetime, time, timezone

import pytest

from moneypouch.activity import ActivityLogger
from moneypouch.config import LedgerSettings, StorageSettings
from moneypouch.ledger import (
    BudgetCalculator,
    ExpenseBook,
    GoalLedger,
    SavingsPool,
    TransferOrchestrator,
)
from moneypouch.models.activity import ActivityEvent, ActivityEventType
from moneypouch.services.storage import (
    InMemoryStorage,
    Repository,
    StorageWriteError,
)


TODAY = date(2024, 6, 21)


class FakeClock:
    """Settable ``today``/``now`` pair handed to the components."""

    def __init__(self, today: date = TODAY):
        self.today = today

    def __call__(self) -> date:
        return self.today

    def now(self) -> datetime:
        return datetime.combine(self.today, time(9, 0), tzinfo=timezone.utc)


class RecordingActivityLogger(ActivityLogger):
    """ActivityLogger that also keeps the events it logged."""

    def __init__(self):
        super().__init__("moneypouch.tests")
        self.events: list[ActivityEvent] = []

    def log(self, event: ActivityEvent) -> None:
        self.events.append(event)
        super().log(event)

    def of_type(self, event_type: ActivityEventType) -> list[ActivityEvent]:
        return [e for e in self.events if e.event_type == event_type]


class FailingStorage(InMemoryStorage):
    """InMemoryStorage whose writes to selected keys fail."""

    def __init__(self):
        super().__init__()
        self.failing_keys: set[str] = set()

    def write(self, key: str, payload: str) -> None:
        if key in self.failing_keys:
            raise StorageWriteError(f"Simulated write failure for {key}")
        super().write(key, payload)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def activity_logger():
    return RecordingActivityLogger()


@pytest.fixture
def storage():
    return FailingStorage()


@pytest.fixture
def storage_settings():
    return StorageSettings()


@pytest.fixture
def ledger_settings():
    return LedgerSettings(snapshot_retention_days=30, default_calculation="dynamic")


@pytest.fixture
def repository(storage, storage_settings, activity_logger):
    return Repository(storage, storage_settings, activity_logger)


@pytest.fixture
def expense_book(repository, activity_logger, clock):
    return ExpenseBook(repository, activity_logger, now=clock.now)


@pytest.fixture
def budget_calculator(repository, expense_book, ledger_settings, activity_logger, clock):
    return BudgetCalculator(
        repository,
        expense_book=expense_book,
        settings=ledger_settings,
        activity_logger=activity_logger,
        today=clock,
    )


@pytest.fixture
def goal_ledger(repository, activity_logger, clock):
    return GoalLedger(repository, activity_logger, now=clock.now)


@pytest.fixture
def savings_pool(repository, activity_logger, clock):
    return SavingsPool(repository, activity_logger, now=clock.now)


@pytest.fixture
def transfers(goal_ledger, savings_pool, activity_logger):
    return TransferOrchestrator(goal_ledger, savings_pool, activity_logger)
