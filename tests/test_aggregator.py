from datetime import date

import pytest

from aggregator import (
    Coverage, Top, hour_totals, lunch_days, month_totals, monthly_average, monthly_totals, summarize_month,
    summarize_year, top_day, top_index, week_totals, week_weekday_totals, weekday_totals,
    weekly_average, year_coverage, year_totals,
)
from domain import WeekWindow
from weeks import weeks_for_month
from helpers import YEAR, shift


@pytest.fixture
def cross_month(build):
    # Sat 31 Jan and Sun 1 Feb 2026, 9h raw / 8h effective each
    records = build(shift("31/1/2026", "08:00", "17:00"), shift("1/2/2026", "08:00", "17:00"))
    return records


def test_week_crossing_months_sums_both_months(cross_month):
    records = list(cross_month.values())
    window = WeekWindow(date(2026, 1, 26), date(2026, 2, 1))
    assert week_totals(records, [window]) == [16.0]

    jan = summarize_month(records, YEAR, 1)
    feb = summarize_month(records, YEAR, 2)
    assert jan.week_totals[-1] == 16.0
    assert feb.week_totals[0] == 16.0
    assert jan.totals.effective == 8.0
    assert feb.totals.effective == 8.0
    assert jan.weeks_total == 16.0


def test_week_weekday_totals(cross_month):
    window = WeekWindow(date(2026, 1, 26), date(2026, 2, 1))
    assert week_weekday_totals(cross_month.values(), window) == [0, 0, 0, 0, 0, 8.0, 8.0]


def test_weekday_totals_ignore_days_without_shift(build):
    records = build(
        shift("2/3/2026", "08:00", "12:00"),
        shift("9/3/2026", "08:00", "12:00"),
        shift("3/3/2026", "-", "-", note="Libre"),
    )
    assert weekday_totals(records.values()) == [8.0, 0, 0, 0, 0, 0, 0]


def test_hour_totals(build):
    records = build(
        shift("2/3/2026", "08:00", "16:00"),
        shift("3/3/2026", "08:00", "12:00"),
        shift("4/3/2026", "", "", note="Libre"),
    )
    totals = hour_totals(records.values())
    assert totals.effective == 11.0
    assert totals.raw == 12.0
    assert totals.lunch == 1.0
    assert totals.days == 2


def test_month_and_year_totals_filter(build):
    records = list(build(
        shift("2/3/2026", "08:00", "12:00"),
        shift("2/4/2026", "08:00", "12:00"),
    ).values())
    assert month_totals(records, YEAR, 3).effective == 4.0
    assert month_totals(records, YEAR, 5).effective == 0.0
    assert year_totals(records, YEAR).effective == 8.0
    assert monthly_totals(records, YEAR)[2:4] == [4.0, 4.0]
    assert monthly_totals(records, YEAR, "raw_hours")[0] == 0.0


def test_top_day_tie_keeps_earliest(build):
    records = build(
        shift("5/3/2026", "08:00", "17:00"),
        shift("3/3/2026", "08:00", "12:00"),
        shift("2/3/2026", "09:00", "18:00"),
    )
    best = top_day(records.values())
    assert best.work_date == date(2026, 3, 2)


def test_top_day_without_shifts_is_none(build):
    records = build(shift("2/3/2026", "", "", note="Libre"))
    assert top_day(records.values()) is None
    assert top_day([]) is None


def test_top_index_tie_and_no_data():
    assert top_index([1.0, 3.0, 3.0, 2.0]) == Top(index=1, hours=3.0)
    assert top_index([0.0, 0.0]) is None
    assert top_index([]) is None


def test_weekly_average_counts_empty_weeks(cross_month):
    records = list(cross_month.values())
    weeks = weeks_for_month(YEAR, 1)
    totals = week_totals(records, weeks)
    assert len(totals) == 5
    assert weekly_average(totals) == pytest.approx(16.0 / 5)
    assert weekly_average([]) == 0.0


def test_monthly_average_divides_by_twelve():
    assert monthly_average([12.0] + [0.0] * 11) == 1.0


def test_lunch_days(build):
    records = build(
        shift("3/3/2026", "08:00", "16:00"),
        shift("2/3/2026", "08:00", "14:00"),
        shift("4/3/2026", "08:00", "18:00"),
    )
    assert [d.work_date.day for d in lunch_days(records.values())] == [3, 4]


def test_year_coverage(cross_month, build):
    assert year_coverage({}, 2026) == Coverage(with_shift=0, without_shift=365)
    assert year_coverage({}, 2024).without_shift == 366

    records = dict(cross_month)
    records.update(build(shift("3/3/2026", "", "", note="Libre")))
    cov = year_coverage(records, 2026)
    assert cov.with_shift == 2
    assert cov.without_shift == 363


def test_month_summary_for_empty_input():
    s = summarize_month([], YEAR, 3)
    assert s.top_day is None
    assert s.top_week is None
    assert s.top_weekday is None
    assert s.totals.effective == 0
    assert s.week_totals == [0.0] * 6
    assert s.weekly_average == 0.0
    assert s.lunch_days == []


def test_year_summary(build):
    records = build(
        shift("2/3/2026", "08:00", "16:00"),
        shift("3/3/2026", "08:00", "16:00"),
        shift("6/7/2026", "08:00", "12:00"),
    )
    s = summarize_year(sorted(records.values(), key=lambda r: r.work_date), records, YEAR)
    assert s.totals.effective == 18.0
    assert s.totals.raw == 20.0
    assert s.totals.lunch == 2.0
    assert s.top_month == Top(index=2, hours=14.0)
    assert s.monthly_raw_totals[2] == 16.0
    assert s.monthly_average == pytest.approx(18.0 / 12)
    assert s.top_weekday == Top(index=0, hours=11.0)
    assert s.weeks[s.top_week.index].start == date(2026, 3, 2)
    assert s.coverage.with_shift == 3


def test_year_summary_for_empty_input():
    s = summarize_year([], {}, YEAR)
    assert s.top_month is None
    assert s.top_week is None
    assert s.top_weekday is None
    assert s.coverage.without_shift == 365
    assert s.monthly_average == 0.0


def test_zero_hour_shifts_never_top_anything(build):
    records = build(shift("2/3/2026", "08:00", "08:00"), shift("3/3/2026", "10:00", "09:00"))
    s = summarize_month(list(records.values()), YEAR, 3)
    assert s.totals.days == 2
    assert s.top_day is None
    assert s.top_week is None
    assert s.top_weekday is None
