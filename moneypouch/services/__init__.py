"""Services package."""

from moneypouch.services.storage import (
    Collection,
    CollectionCache,
    InMemoryStorage,
    JsonFileStorage,
    LoadCorruptedError,
    Repository,
    SaveFailedError,
    StorageBackend,
    StorageError,
    StorageQuotaExceededError,
    StorageWriteError,
)

__all__ = [
    "Collection",
    "CollectionCache",
    "InMemoryStorage",
    "JsonFileStorage",
    "LoadCorruptedError",
    "Repository",
    "SaveFailedError",
    "StorageBackend",
    "StorageError",
    "StorageQuotaExceededError",
    "StorageWriteError",
]
