"""
Repository with Read-Through / Write-Through Cache

DESIGN DECISION: The Repository is the single owner of every persisted
collection. Each collection has one cache slot, held by the Repository
instance (never a module global, so separate instances in tests do not
interfere).

GUARANTEES:
- load(): cache hit returns a copy of the cached value; a miss reads,
  deserializes and caches the stored document. A missing document yields
  the collection's empty default.
- A corrupted document is logged and replaced by the empty default. It is
  overwritten on the next successful save.
- save(): writes synchronously first, and only then replaces the cache slot
  with the saved value. A failed write raises SaveFailedError and leaves the
  cache exactly as it was.

Values handed out and taken in are deep copies, so mutating a loaded object
never changes the cache behind the Repository's back.
"""

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import TypeAdapter, ValidationError

from moneypouch.activity import ActivityLogger, get_activity_logger
from moneypouch.config import StorageSettings
from moneypouch.models.budget import BudgetConfig, DailyBudgetSnapshot
from moneypouch.models.expense import Expense
from moneypouch.models.goal import Goal
from moneypouch.models.pool import PoolState
from moneypouch.services.storage.interface import (
    LoadCorruptedError,
    SaveFailedError,
    StorageBackend,
    StorageError,
)


class Collection(str, Enum):
    """Persisted collections owned by the Repository."""
    EXPENSES = "expenses"
    BUDGETS = "budgets"
    DAILY_BUDGETS = "daily_budgets"
    GOALS = "goals"
    SAVINGS_POOL = "savings_pool"


@dataclass(frozen=True)
class _CollectionSpec:
    adapter: TypeAdapter
    default: Callable[[], Any]


_SPECS: dict[Collection, _CollectionSpec] = {
    Collection.EXPENSES: _CollectionSpec(TypeAdapter(list[Expense]), list),
    Collection.BUDGETS: _CollectionSpec(TypeAdapter(dict[str, BudgetConfig]), dict),
    Collection.DAILY_BUDGETS: _CollectionSpec(
        TypeAdapter(dict[str, DailyBudgetSnapshot]), dict
    ),
    Collection.GOALS: _CollectionSpec(TypeAdapter(list[Goal]), list),
    Collection.SAVINGS_POOL: _CollectionSpec(TypeAdapter(PoolState), PoolState),
}


class _Empty:
    def __repr__(self) -> str:
        return "<empty>"


EMPTY = _Empty()


class CollectionCache:
    """
    One cache slot per collection.

    A slot is either EMPTY or holds the last value loaded or saved.
    """

    def __init__(self):
        self._slots: dict[Collection, Any] = {c: EMPTY for c in Collection}

    def get(self, collection: Collection) -> Any:
        """Cached value, or EMPTY."""
        return self._slots[collection]

    def is_cached(self, collection: Collection) -> bool:
        return self._slots[collection] is not EMPTY

    def replace(self, collection: Collection, value: Any) -> None:
        self._slots[collection] = value

    def invalidate(self, collection: Optional[Collection] = None) -> None:
        """Reset one slot, or every slot when ``collection`` is None."""
        if collection is None:
            for c in Collection:
                self._slots[c] = EMPTY
        else:
            self._slots[collection] = EMPTY


class Repository:
    """Load/save entry point for every ledger collection."""

    def __init__(
        self,
        storage: StorageBackend,
        settings: Optional[StorageSettings] = None,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._storage = storage
        self._settings = settings or StorageSettings()
        self._logger = get_activity_logger(activity_logger)
        self._cache = CollectionCache()

    @property
    def cache(self) -> CollectionCache:
        return self._cache

    def storage_key(self, collection: Collection) -> str:
        """Backend key a collection is stored under."""
        return {
            Collection.EXPENSES: self._settings.expenses_key,
            Collection.BUDGETS: self._settings.budget_key,
            Collection.DAILY_BUDGETS: self._settings.daily_budget_key,
            Collection.GOALS: self._settings.goals_key,
            Collection.SAVINGS_POOL: self._settings.savings_pool_key,
        }[collection]

    def _decode(self, collection: Collection, raw: str) -> Any:
        try:
            return _SPECS[collection].adapter.validate_json(raw)
        except (ValidationError, ValueError) as e:
            raise LoadCorruptedError(
                collection.value,
                f"Stored {collection.value} could not be parsed: {e}",
            ) from e

    def _encode(self, collection: Collection, value: Any) -> str:
        return _SPECS[collection].adapter.dump_json(value, by_alias=True).decode("utf-8")

    def load(self, collection: Collection) -> Any:
        """
        Return the collection, reading storage only on a cache miss.

        Never raises for missing or corrupted documents.
        """
        cached = self._cache.get(collection)
        if cached is not EMPTY:
            return copy.deepcopy(cached)

        raw = self._storage.read(self.storage_key(collection))
        if raw is None:
            value = _SPECS[collection].default()
        else:
            try:
                value = self._decode(collection, raw)
            except LoadCorruptedError as e:
                self._logger.log_load_corrupted(collection.value, str(e))
                value = _SPECS[collection].default()

        self._cache.replace(collection, value)
        return copy.deepcopy(value)

    def save(self, collection: Collection, value: Any) -> None:
        """
        Persist the collection, then make it the cached value.

        Raises:
            SaveFailedError: If the backend write fails (cache untouched)
        """
        # Validate through the adapter so nothing unserializable is cached
        snapshot = _SPECS[collection].adapter.validate_python(copy.deepcopy(value))
        payload = self._encode(collection, snapshot)
        try:
            self._storage.write(self.storage_key(collection), payload)
        except (StorageError, OSError) as e:
            self._logger.log_save_failed(collection.value, str(e))
            raise SaveFailedError(
                collection.value,
                f"Failed to save {collection.value}: {e}",
            ) from e
        self._cache.replace(collection, snapshot)

    def clear_cache(self, collection: Optional[Collection] = None) -> None:
        """Drop cached values so the next load reads storage."""
        self._cache.invalidate(collection)

    def remove_all(self) -> list[str]:
        """
        Remove every persisted collection and clear the cache.

        Destructive full reset. Returns the removed collection names.
        """
        removed = []
        for collection in Collection:
            self._storage.remove(self.storage_key(collection))
            removed.append(collection.value)
        self._cache.invalidate()
        return removed

    # Typed helpers

    def load_expenses(self) -> list[Expense]:
        return self.load(Collection.EXPENSES)

    def save_expenses(self, expenses: list[Expense]) -> None:
        self.save(Collection.EXPENSES, expenses)

    def load_budgets(self) -> dict[str, BudgetConfig]:
        return self.load(Collection.BUDGETS)

    def save_budgets(self, budgets: dict[str, BudgetConfig]) -> None:
        self.save(Collection.BUDGETS, budgets)

    def load_daily_budgets(self) -> dict[str, DailyBudgetSnapshot]:
        return self.load(Collection.DAILY_BUDGETS)

    def save_daily_budgets(self, snapshots: dict[str, DailyBudgetSnapshot]) -> None:
        self.save(Collection.DAILY_BUDGETS, snapshots)

    def load_goals(self) -> list[Goal]:
        return self.load(Collection.GOALS)

    def save_goals(self, goals: list[Goal]) -> None:
        self.save(Collection.GOALS, goals)

    def load_pool(self) -> PoolState:
        return self.load(Collection.SAVINGS_POOL)

    def save_pool(self, pool: PoolState) -> None:
        self.save(Collection.SAVINGS_POOL, pool)
