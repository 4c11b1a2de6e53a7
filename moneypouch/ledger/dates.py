"""Month and day arithmetic for budget calculations."""

import calendar
from datetime import date


def current_year_month(today: date) -> str:
    """``YYYY-MM`` of ``today``."""
    return today.strftime("%Y-%m")


def parse_year_month(year_month: str) -> tuple[int, int]:
    year, month = year_month.split("-")
    return int(year), int(month)


def days_in_month(year_month: str) -> int:
    """Number of days in a ``YYYY-MM`` month."""
    year, month = parse_year_month(year_month)
    return calendar.monthrange(year, month)[1]


def remaining_days_in_month(year_month: str, today: date) -> int:
    """
    Days left in the month, counting today.

    0 for a month already over, the full length for a month not yet started.
    """
    this_month = current_year_month(today)
    if year_month < this_month:
        return 0
    if year_month > this_month:
        return days_in_month(year_month)
    return days_in_month(year_month) - today.day + 1
