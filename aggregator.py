# aggregator.py
"""
Time-accounting rollups over DailyWorkRecords.

Only days with a shift contribute hours. Every scan runs in chronological
order (Monday first for weekdays), and every "top" keeps the first candidate
with strictly more hours, so ties resolve to the earliest one.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, List, Mapping, Optional, Sequence

from domain import DailyWorkRecord, WeekWindow
from timeparse import iso_key
from weeks import weeks_for_month, weeks_for_year


@dataclass(frozen=True)
class Top:
    """Winning bucket of a top selection: its position and its hours."""
    index: int
    hours: float


@dataclass(frozen=True)
class HourTotals:
    effective: float = 0.0
    raw: float = 0.0
    lunch: float = 0.0
    days: int = 0


@dataclass(frozen=True)
class Coverage:
    with_shift: int
    without_shift: int


@dataclass(frozen=True)
class MonthSummary:
    year: int
    month: int
    weeks: List[WeekWindow]
    week_totals: List[float]
    weeks_total: float
    weekday_totals: List[float]
    totals: HourTotals
    top_day: Optional[DailyWorkRecord]
    top_week: Optional[Top]
    weekly_average: float
    top_weekday: Optional[Top]
    lunch_days: List[DailyWorkRecord] = field(default_factory=list)


@dataclass(frozen=True)
class YearSummary:
    year: int
    totals: HourTotals
    coverage: Coverage
    monthly_totals: List[float]
    monthly_raw_totals: List[float]
    monthly_average: float
    top_month: Optional[Top]
    top_weekday: Optional[Top]
    weeks: List[WeekWindow]
    week_totals: List[float]
    top_week: Optional[Top]


def shift_days(records: Iterable[DailyWorkRecord]) -> List[DailyWorkRecord]:
    """Days with a shift, oldest first."""
    return sorted((r for r in records if r.has_shift), key=lambda r: r.work_date)


def in_month(records: Iterable[DailyWorkRecord], year: int, month: int) -> List[DailyWorkRecord]:
    return [r for r in records if r.year == year and r.month == month]


def in_year(records: Iterable[DailyWorkRecord], year: int) -> List[DailyWorkRecord]:
    return [r for r in records if r.year == year]


def weekday_totals(records: Iterable[DailyWorkRecord]) -> List[float]:
    totals = [0.0] * 7
    for r in shift_days(records):
        totals[r.weekday] += r.effective_hours
    return totals


def week_weekday_totals(records: Iterable[DailyWorkRecord], window: WeekWindow) -> List[float]:
    """Per-weekday hours inside one window, whatever month each day belongs to."""
    return weekday_totals(r for r in records if window.contains(r.work_date))


def week_totals(records: Iterable[DailyWorkRecord], windows: Sequence[WeekWindow]) -> List[float]:
    """
    Hours per window, scanning every record given. A window that crosses a
    month boundary sums the days of both months.
    """
    days = shift_days(records)
    return [
        sum(r.effective_hours for r in days if w.contains(r.work_date))
        for w in windows
    ]


def hour_totals(records: Iterable[DailyWorkRecord]) -> HourTotals:
    days = shift_days(records)
    return HourTotals(
        effective=sum(r.effective_hours for r in days),
        raw=sum(r.raw_hours for r in days),
        lunch=sum(r.lunch_hours for r in days),
        days=len(days),
    )


def month_totals(records: Iterable[DailyWorkRecord], year: int, month: int) -> HourTotals:
    return hour_totals(in_month(records, year, month))


def year_totals(records: Iterable[DailyWorkRecord], year: int) -> HourTotals:
    return hour_totals(in_year(records, year))


def monthly_totals(records: Iterable[DailyWorkRecord], year: int, attr: str = "effective_hours") -> List[float]:
    """Twelve buckets, January first. attr picks effective_hours, raw_hours or lunch_hours."""
    totals = [0.0] * 12
    for r in shift_days(in_year(records, year)):
        totals[r.month - 1] += getattr(r, attr)
    return totals


def top_day(records: Iterable[DailyWorkRecord]) -> Optional[DailyWorkRecord]:
    """Same rule as top_index: days without effective hours never win."""
    best = None
    for r in shift_days(records):
        if r.effective_hours <= 0:
            continue
        if best is None or r.effective_hours > best.effective_hours:
            best = r
    return best


def top_index(values: Sequence[float]) -> Optional[Top]:
    """First bucket with the most hours. Buckets without hours never win."""
    best = None
    for i, v in enumerate(values):
        if v <= 0:
            continue
        if best is None or v > best.hours:
            best = Top(index=i, hours=v)
    return best


def weekly_average(totals: Sequence[float]) -> float:
    """Mean over every window, empty weeks included."""
    return sum(totals) / len(totals) if totals else 0.0


def monthly_average(totals: Sequence[float]) -> float:
    """Always over 12 months, with or without data."""
    return sum(totals) / 12


def lunch_days(records: Iterable[DailyWorkRecord]) -> List[DailyWorkRecord]:
    return [r for r in shift_days(records) if r.has_lunch]


def year_coverage(lookup: Mapping[str, DailyWorkRecord], year: int) -> Coverage:
    """Counts every date of the year; dates without any row count as uncovered."""
    with_shift = without_shift = 0
    d = date(year, 1, 1)
    last = date(year, 12, 31)
    while d <= last:
        rec = lookup.get(iso_key(d))
        if rec is not None and rec.has_shift:
            with_shift += 1
        else:
            without_shift += 1
        d += timedelta(days=1)
    return Coverage(with_shift=with_shift, without_shift=without_shift)


def summarize_month(records: Sequence[DailyWorkRecord], year: int, month: int) -> MonthSummary:
    month_records = in_month(records, year, month)
    weeks = weeks_for_month(year, month)
    per_week = week_totals(records, weeks)
    per_weekday = weekday_totals(month_records)
    return MonthSummary(
        year=year,
        month=month,
        weeks=weeks,
        week_totals=per_week,
        weeks_total=sum(per_week),
        weekday_totals=per_weekday,
        totals=hour_totals(month_records),
        top_day=top_day(month_records),
        top_week=top_index(per_week),
        weekly_average=weekly_average(per_week),
        top_weekday=top_index(per_weekday),
        lunch_days=lunch_days(month_records),
    )


def summarize_year(records: Sequence[DailyWorkRecord], lookup: Mapping[str, DailyWorkRecord],
                   year: int) -> YearSummary:
    year_records = in_year(records, year)
    monthly = monthly_totals(year_records, year)
    weeks = weeks_for_year(year)
    per_week = week_totals(year_records, weeks)
    return YearSummary(
        year=year,
        totals=hour_totals(year_records),
        coverage=year_coverage(lookup, year),
        monthly_totals=monthly,
        monthly_raw_totals=monthly_totals(year_records, year, "raw_hours"),
        monthly_average=monthly_average(monthly),
        top_month=top_index(monthly),
        top_weekday=top_index(weekday_totals(year_records)),
        weeks=weeks,
        week_totals=per_week,
        top_week=top_index(per_week),
    )
