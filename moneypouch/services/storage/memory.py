"""
In-Memory Storage

Dict-backed backend for tests and throwaway sessions. An optional byte
quota reproduces the "storage full" failures of browser storage, so the
save-failure paths can be exercised without a real disk.
"""

from typing import Optional

from moneypouch.services.storage.interface import (
    StorageBackend,
    StorageQuotaExceededError,
)


class InMemoryStorage(StorageBackend):
    """Keeps documents in a dict for the lifetime of the instance."""

    def __init__(self, quota_bytes: Optional[int] = None):
        self._documents: dict[str, str] = {}
        self.quota_bytes = quota_bytes
        self.write_count = 0
        self.read_count = 0

    def _size_with(self, key: str, payload: str) -> int:
        size = len(payload.encode("utf-8"))
        for other_key, document in self._documents.items():
            if other_key != key:
                size += len(document.encode("utf-8"))
        return size

    def read(self, key: str) -> Optional[str]:
        self.read_count += 1
        return self._documents.get(key)

    def write(self, key: str, payload: str) -> None:
        if self.quota_bytes is not None:
            needed = self._size_with(key, payload)
            if needed > self.quota_bytes:
                raise StorageQuotaExceededError(
                    f"Quota of {self.quota_bytes} bytes exceeded "
                    f"({needed} bytes needed) writing {key}"
                )
        self._documents[key] = payload
        self.write_count += 1

    def remove(self, key: str) -> None:
        self._documents.pop(key, None)

    def keys(self) -> list[str]:
        """Keys currently stored."""
        return list(self._documents)
