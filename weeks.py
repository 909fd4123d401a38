# weeks.py
"""Monday-Sunday week windows for a month or a whole year."""
from __future__ import annotations

from datetime import date, timedelta
from typing import List

from domain import WeekWindow

WEEK = timedelta(days=7)


def start_of_week(d: date) -> date:
    return d - timedelta(days=d.weekday())


def month_range(year: int, month: int) -> tuple[date, date]:
    d1 = date(year, month, 1)
    d2 = (date(year + 1, 1, 1) - timedelta(days=1)) if month == 12 else (date(year, month + 1, 1) - timedelta(days=1))
    return d1, d2


def _windows(first: date, last: date) -> List[WeekWindow]:
    weeks = []
    cursor = start_of_week(first)
    while cursor <= last:
        window = WeekWindow(start=cursor, end=cursor + timedelta(days=6))
        if window.end >= first and window.start <= last:
            weeks.append(window)
        cursor += WEEK
    return weeks


def weeks_for_month(year: int, month: int) -> List[WeekWindow]:
    """Windows overlapping the month (month is 1-12). Always between 4 and 6 of them."""
    return _windows(*month_range(year, month))


def weeks_for_year(year: int) -> List[WeekWindow]:
    """
    Every window starting on or before Dec 31, beginning with the one that
    holds Jan 1. The first and last windows may reach into the adjacent years.
    """
    return _windows(date(year, 1, 1), date(year, 12, 31))
