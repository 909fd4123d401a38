from datetime import date

import pytest

from timeparse import format_minutes, iso_key, parse_date, parse_time


@pytest.mark.parametrize("text, expected", [
    ("01/03/2026", date(2026, 3, 1)),
    ("1/3/2026", date(2026, 3, 1)),
    ("31/12/2026", date(2026, 12, 31)),
    (" 7/10/2026 ", date(2026, 10, 7)),
])
def test_parse_date_accepts_day_month_year(text, expected):
    assert parse_date(text) == expected


@pytest.mark.parametrize("text", [
    None, "", "2026-03-01", "1/3", "0/3/2026", "1/0/2026", "1/3/0", "a/3/2026",
])
def test_parse_date_rejects(text):
    assert parse_date(text) is None


@pytest.mark.parametrize("text, expected", [
    ("08:00", 480),
    ("8:00", 480),
    ("8", 480),
    ("8:30am", 510),
    ("8:30 PM", 20 * 60 + 30),
    ("12am", 0),
    ("12pm", 720),
    ("1pm", 780),
    ("12:15 am", 15),
    ("23:59", 1439),
])
def test_parse_time(text, expected):
    assert parse_time(text) == expected


@pytest.mark.parametrize("text", [None, "", "-", "pm", "abc", "8:xx", "24:00", "8:60"])
def test_parse_time_rejects(text):
    assert parse_time(text) is None


def test_format_minutes_round_trips_every_minute_of_the_day():
    for h in range(24):
        for m in range(60):
            minutes = h * 60 + m
            assert parse_time(format_minutes(minutes)) == minutes


def test_format_minutes_pads():
    assert format_minutes(0) == "00:00"
    assert format_minutes(545) == "09:05"


def test_iso_key():
    assert iso_key(date(2026, 3, 1)) == "2026-03-01"


@pytest.mark.parametrize("text, expected", [
    ("31/2/2026", date(2026, 3, 3)),
    ("32/12/2026", date(2027, 1, 1)),
    ("1/13/2026", date(2027, 1, 1)),
    ("-1/3/2026", date(2026, 2, 27)),
])
def test_parse_date_carries_overflowing_days_and_months(text, expected):
    assert parse_date(text) == expected
