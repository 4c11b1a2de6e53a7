"""
Abstract Storage Interface

DESIGN DECISION: The ledger persists a handful of independent keyed
records (expenses, budgets, daily snapshots, goals, savings pool), each a
JSON document. Backends only move opaque strings under a key. This allows us to:
1. Keep the web client's localStorage layout (one document per key)
2. Use in-memory storage for testing
3. Keep caching and (de)serialization in the Repository, not the backend

The interface is intentionally tiny: read, write, remove.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageBackend(ABC):
    """
    Abstract interface for keyed document storage.

    Any storage implementation (JSON files, in-memory, ...)
    must implement these methods. All calls are blocking.
    """

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """
        Read the document stored under ``key``.

        Returns:
            The raw document, or None if nothing is stored under the key

        Raises:
            StorageError: If the backend cannot be read at all
        """
        pass

    @abstractmethod
    def write(self, key: str, payload: str) -> None:
        """
        Replace the document stored under ``key``.

        The write is all-or-nothing: on failure the previous document
        is left in place.

        Raises:
            StorageWriteError: If the write fails
            StorageQuotaExceededError: If the backend is full
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove ``key``. Removing a missing key is not an error."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageWriteError(StorageError):
    """Backend could not persist a document."""
    pass


class StorageQuotaExceededError(StorageWriteError):
    """Backend refused a write because it is out of space."""
    pass


class SaveFailedError(StorageError):
    """
    A repository save did not reach durable storage.

    Neither the cache nor the stored document were changed.
    """

    def __init__(self, collection: str, message: str):
        self.collection = collection
        super().__init__(message)


class LoadCorruptedError(StorageError):
    """
    A stored document could not be deserialized.

    Never propagated out of the Repository: it is logged and the
    collection's empty default is used instead.
    """

    def __init__(self, collection: str, message: str):
        self.collection = collection
        super().__init__(message)
