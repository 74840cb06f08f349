"""Selling-day calendar — pure date math, no I/O.

Monday through Saturday are selling days; Sunday is not. Every bound is a
calendar date, never an instant, so the weekday cannot drift with time of day
or time zone.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

from salesdesk.exceptions import ParseError

SUNDAY = 6  # date.weekday()


def parse_date(value: date | str) -> date:
    """Return ``value`` as a calendar date; strings must be ``YYYY-MM-DD``.

    A datetime is cut down to its date so it compares against plain dates.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, TypeError, ValueError):
        raise ParseError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def first_day_of_month(day: date) -> date:
    return day.replace(day=1)


def last_day_of_month(day: date) -> date:
    _, last = calendar.monthrange(day.year, day.month)
    return day.replace(day=last)


def is_selling_day(day: date) -> bool:
    return day.weekday() != SUNDAY


def count_selling_days(from_inclusive: date | str, to_inclusive: date | str) -> int:
    """Count non-Sunday days in the closed interval [from_inclusive, to_inclusive].

    Returns 0 when the interval is empty (from > to).
    """
    start = parse_date(from_inclusive)
    end = parse_date(to_inclusive)
    if start > end:
        return 0

    total_days = (end - start).days + 1
    full_weeks, leftover = divmod(total_days, 7)
    count = full_weeks * 6
    for offset in range(leftover):
        if is_selling_day(start + timedelta(days=full_weeks * 7 + offset)):
            count += 1
    return count
