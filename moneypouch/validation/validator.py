"""
Input Validation

DESIGN DECISION: Every user-supplied amount, category, date and name passes
through these functions before any ledger component mutates state.
They are pure: they parse and check, raise on bad input, and never touch
storage.

IMPORTANT: Validation never silently fixes invalid input. The only
normalisation performed is flooring amounts to whole units and rewriting
dates in ISO form.
"""

import math
from datetime import date, datetime
from decimal import ROUND_FLOOR, Decimal, InvalidOperation
from typing import Any

from moneypouch.models.budget import ApplyRange, BudgetCalculation
from moneypouch.models.expense import ExpenseCategory


MIN_AMOUNT = 0
MAX_AMOUNT = 10_000_000

MAX_NAME_LENGTH = 100
MAX_NOTE_LENGTH = 200


class LedgerValidationError(ValueError):
    """Base exception for rejected user input."""
    pass


class InvalidAmountError(LedgerValidationError):
    """Amount is not a number or is below the minimum."""
    pass


class AmountTooLargeError(LedgerValidationError):
    """Amount exceeds MAX_AMOUNT."""
    pass


class InvalidCategoryError(LedgerValidationError):
    """Category is not one of the fixed expense categories."""
    pass


class InvalidDateError(LedgerValidationError):
    """Value is not a well-formed calendar date or month."""
    pass


class InvalidNameError(LedgerValidationError):
    """Name is empty or too long."""
    pass


class InvalidOptionError(LedgerValidationError):
    """Budget calculation or apply range is not a known option."""
    pass


class InvalidNoteError(LedgerValidationError):
    """Transaction note is not text or is too long."""
    pass


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise InvalidAmountError(f"Amount must be a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidAmountError(f"Amount must be a finite number, got {value!r}")
    if isinstance(value, (int, float, Decimal)):
        number = Decimal(str(value))
    elif isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidAmountError(f"Amount must be a number, got {value!r}")
    else:
        raise InvalidAmountError(f"Amount must be a number, got {value!r}")
    if not number.is_finite():
        raise InvalidAmountError(f"Amount must be a finite number, got {value!r}")
    return number


def validate_amount(value: Any) -> int:
    """
    Parse an amount and return it floored to a whole unit.

    Raises:
        InvalidAmountError: not a number, or below MIN_AMOUNT
        AmountTooLargeError: above MAX_AMOUNT
    """
    number = _to_decimal(value)
    if number < MIN_AMOUNT:
        raise InvalidAmountError(
            f"Amount must be {MIN_AMOUNT} or more, got {value!r}"
        )
    if number > MAX_AMOUNT:
        raise AmountTooLargeError(
            f"Amount must be {MAX_AMOUNT:,} or less, got {value!r}"
        )
    return int(number.to_integral_value(rounding=ROUND_FLOOR))


def validate_positive_amount(value: Any) -> int:
    """Like ``validate_amount`` but also rejects amounts that floor to zero."""
    amount = validate_amount(value)
    if amount == 0:
        raise InvalidAmountError("Amount must be greater than zero")
    return amount


def validate_category(value: Any) -> ExpenseCategory:
    """Resolve a category value or raise InvalidCategoryError."""
    if isinstance(value, ExpenseCategory):
        return value
    try:
        return ExpenseCategory(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(c.value for c in ExpenseCategory)
        raise InvalidCategoryError(
            f"Unknown category {value!r}. Allowed: {allowed}"
        )


def validate_date(value: Any) -> str:
    """
    Check that value is a calendar date and return it as ``YYYY-MM-DD``.

    Accepts date/datetime objects and ISO date strings.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        raise InvalidDateError(f"Expected a date, got {value!r}")
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date().isoformat()
    except ValueError:
        raise InvalidDateError(f"Not a valid YYYY-MM-DD date: {value!r}")


def validate_year_month(value: Any) -> str:
    """Check that value is a ``YYYY-MM`` month and return it normalised."""
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m")
    if not isinstance(value, str):
        raise InvalidDateError(f"Expected a YYYY-MM month, got {value!r}")
    try:
        return datetime.strptime(value.strip(), "%Y-%m").strftime("%Y-%m")
    except ValueError:
        raise InvalidDateError(f"Not a valid YYYY-MM month: {value!r}")


def validate_goal_name(value: Any) -> str:
    """Strip a goal name and check its length."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidNameError("Goal name is required")
    name = value.strip()
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidNameError(
            f"Goal name must be {MAX_NAME_LENGTH} characters or fewer"
        )
    return name


def validate_note(value: Any) -> str:
    """Strip an optional free-text note and check its length."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidNoteError(f"Note must be text, got {value!r}")
    note = value.strip()
    if len(note) > MAX_NOTE_LENGTH:
        raise InvalidNoteError(
            f"Note must be {MAX_NOTE_LENGTH} characters or fewer"
        )
    return note


def validate_calculation(value: Any) -> BudgetCalculation:
    """Resolve a budget calculation strategy ("dynamic" or "fixed")."""
    try:
        return BudgetCalculation(value)
    except ValueError:
        raise InvalidOptionError(
            f"Unknown budget calculation {value!r}. Allowed: dynamic, fixed"
        )


def validate_apply_range(value: Any) -> ApplyRange:
    """Resolve a budget apply range ("current" or "future")."""
    try:
        return ApplyRange(value)
    except ValueError:
        raise InvalidOptionError(
            f"Unknown apply range {value!r}. Allowed: current, future"
        )
