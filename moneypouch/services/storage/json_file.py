"""
JSON File Storage Implementation

DESIGN DECISION: Each collection lives in its own ``<key>.json`` file in the
data directory, mirroring the one-document-per-key layout of the web
client's localStorage:
1. Users can inspect and back up their data with any text editor
2. No database setup required
3. A corrupted file only affects its own collection

TRADEOFFS:
- No transactions across files (transfers handle this with ordering)
- Whole-document rewrites (fine for personal-scale data)

Writes go to a temporary file first and are moved into place with
``os.replace``, so a failed write never leaves a half-written document.
"""

import errno
import os
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from moneypouch.services.storage.interface import (
    StorageBackend,
    StorageError,
    StorageQuotaExceededError,
    StorageWriteError,
)


class JsonFileStorage(StorageBackend):
    """Stores each key as a UTF-8 JSON file under ``data_dir``."""

    def __init__(self, data_dir: Path, write_retry_attempts: int = 3):
        self.data_dir = Path(data_dir)
        self._write_retry_attempts = write_retry_attempts

    def get_path(self, key: str) -> Path:
        """File path for a key."""
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self.get_path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def write(self, key: str, payload: str) -> None:
        path = self.get_path(key)
        try:
            retrying_write = retry(
                stop=stop_after_attempt(self._write_retry_attempts),
                wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
                retry=retry_if_exception_type(OSError),
                reraise=True,
            )(self._write_atomic)
            retrying_write(path, payload)
        except OSError as e:
            if e.errno == errno.ENOSPC:
                raise StorageQuotaExceededError(f"No space left writing {path}") from e
            raise StorageWriteError(f"Failed to write {path}: {e}") from e

    def _write_atomic(self, path: Path, payload: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.stem}.", suffix=".tmp", dir=path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def remove(self, key: str) -> None:
        path = self.get_path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove {path}: {e}") from e
