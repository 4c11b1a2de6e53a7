"""
Shared model configuration.

DESIGN DECISION: Persisted records keep the camelCase keys of the web client's
localStorage layout (currentAmount, achievedAt, startBudget...), while
Python code uses snake_case attribute names. Pydantic aliases bridge the two.
"""

import secrets
import string
import time
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


_ID_ALPHABET = string.ascii_lowercase + string.digits


class LedgerModel(BaseModel):
    """Base class for every persisted ledger record."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def generate_id(prefix: str) -> str:
    """
    Generate a record id of the form ``<prefix>_<epoch-ms>_<9 chars>``.

    The millisecond part keeps ids roughly sortable by creation time.
    """
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"
