from __future__ import annotations

from datetime import date, timedelta
from typing import Iterator

MONTH_SHORT_NAMES = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def month_short_name(month: int) -> str:
    return MONTH_SHORT_NAMES[month - 1]


def next_month_first_day(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def days_in_month(year: int, month: int) -> int:
    """Length of the month, taken as the day before the next month's first day."""
    return (next_month_first_day(date(year, month, 1)) - timedelta(days=1)).day


def first_day_of_month(day: date) -> date:
    return day.replace(day=1)


def last_day_of_month(day: date) -> date:
    return next_month_first_day(day) - timedelta(days=1)


def iter_months(start: date, end: date) -> Iterator[tuple[int, int]]:
    """Yield (year, month) for every month touched by [start, end]."""
    cursor = first_day_of_month(start)
    while cursor <= end:
        yield cursor.year, cursor.month
        cursor = next_month_first_day(cursor)
