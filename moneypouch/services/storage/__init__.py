"""
Storage Services Package

Provides the keyed document backend interface, its JSON file and
in-memory implementations, and the caching Repository that the ledger
components read and write through.
"""

from moneypouch.services.storage.interface import (
    LoadCorruptedError,
    SaveFailedError,
    StorageBackend,
    StorageError,
    StorageQuotaExceededError,
    StorageWriteError,
)
from moneypouch.services.storage.json_file import JsonFileStorage
from moneypouch.services.storage.memory import InMemoryStorage
from moneypouch.services.storage.repository import (
    Collection,
    CollectionCache,
    Repository,
)

__all__ = [
    # Interface
    "StorageBackend",
    # Exceptions
    "LoadCorruptedError",
    "SaveFailedError",
    "StorageError",
    "StorageQuotaExceededError",
    "StorageWriteError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
    # Repository
    "Collection",
    "CollectionCache",
    "Repository",
]
