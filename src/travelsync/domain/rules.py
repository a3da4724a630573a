"""
Business rules.

Pure functions over ISO date strings and amounts; "today" is always passed in
so callers can pin the clock.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta

DATE_FORMAT = "%Y-%m-%d"

# Expenses older than this many days are locked
EXPENSE_LOCK_DAYS = 30


def parse_date(value: str | None) -> date | None:
    """Parse a YYYY-MM-DD string, returning None if it is not one."""
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        return None


def is_activity_in_past(activity_date: str, today: date) -> bool:
    """
    True if the activity happened strictly before today.

    Unparseable dates are not in the past.
    """
    parsed = parse_date(activity_date)
    return parsed is not None and parsed < today


def is_expense_too_old(expense_date: str, today: date) -> bool:
    """
    True if the expense is more than EXPENSE_LOCK_DAYS days old.

    An expense exactly EXPENSE_LOCK_DAYS days old is still editable.
    Unparseable dates are not too old.
    """
    parsed = parse_date(expense_date)
    if parsed is None:
        return False
    return parsed < today - timedelta(days=EXPENSE_LOCK_DAYS)


def trip_duration_days(start_date: str, end_date: str) -> int:
    """Whole days between start and end; 0 if either is unparseable."""
    start = parse_date(start_date)
    end = parse_date(end_date)
    if start is None or end is None:
        return 0
    return (end - start).days


def is_valid_date_range(start_date: str, end_date: str) -> bool:
    """Both dates parse and start is not after end."""
    start = parse_date(start_date)
    end = parse_date(end_date)
    return start is not None and end is not None and start <= end


def is_valid_amount(amount: object) -> bool:
    """A finite, strictly positive number (booleans are not amounts)."""
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return False
    try:
        value = float(amount)
    except OverflowError:
        return False
    return math.isfinite(value) and value > 0
