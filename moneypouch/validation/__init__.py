"""Input validation package."""

from moneypouch.validation.validator import (
    MAX_AMOUNT,
    MAX_NOTE_LENGTH,
    MIN_AMOUNT,
    AmountTooLargeError,
    InvalidAmountError,
    InvalidCategoryError,
    InvalidDateError,
    InvalidNameError,
    InvalidNoteError,
    InvalidOptionError,
    LedgerValidationError,
    validate_amount,
    validate_apply_range,
    validate_calculation,
    validate_category,
    validate_date,
    validate_goal_name,
    validate_note,
    validate_positive_amount,
    validate_year_month,
)

__all__ = [
    "MAX_AMOUNT",
    "MAX_NOTE_LENGTH",
    "MIN_AMOUNT",
    "AmountTooLargeError",
    "InvalidAmountError",
    "InvalidCategoryError",
    "InvalidDateError",
    "InvalidNameError",
    "InvalidNoteError",
    "InvalidOptionError",
    "LedgerValidationError",
    "validate_amount",
    "validate_apply_range",
    "validate_calculation",
    "validate_category",
    "validate_date",
    "validate_goal_name",
    "validate_note",
    "validate_positive_amount",
    "validate_year_month",
]
