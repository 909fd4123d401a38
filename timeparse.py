# timeparse.py
"""Text tokens from the schedule sheet -> dates and minutes since midnight."""
from __future__ import annotations

import re
from datetime import date, timedelta

_WHITESPACE = re.compile(r"\s+")
_MERIDIEM = re.compile(r"am|pm")


def _to_int(token: str) -> int | None:
    try:
        return int(token)
    except (TypeError, ValueError):
        return None


def parse_date(text: str | None) -> date | None:
    """
    Parses D/M/YYYY. A 0 in any component is rejected, same as a blank one.
    Days and months past the end carry over: 31/2/2026 is 3 March, 1/13/2026 is 1 January 2027.
    """
    if not text:
        return None
    parts = str(text).strip().split("/")
    if len(parts) < 3:
        return None
    d, m, y = (_to_int(p) for p in parts[:3])
    if not d or not m or not y:
        return None
    y += (m - 1) // 12
    m = (m - 1) % 12 + 1
    try:
        return date(y, m, 1) + timedelta(days=d - 1)
    except (ValueError, OverflowError):
        return None


def parse_time(text: str | None) -> int | None:
    """
    Accepts "08:00", "8:00", "8", "8:00am", "8:00 PM".
    Returns minutes since midnight, or None for "", "-" and unparseable input.
    """
    if not text or text == "-":
        return None
    cleaned = _WHITESPACE.sub("", str(text).lower())
    is_pm = "pm" in cleaned
    is_am = "am" in cleaned

    parts = _MERIDIEM.sub("", cleaned).split(":")
    if not parts[0]:
        return None
    h = _to_int(parts[0])
    m = _to_int(parts[1]) if len(parts) > 1 and parts[1] else 0
    if h is None or m is None:
        return None

    if is_pm and h != 12:
        h += 12
    if is_am and h == 12:
        h = 0

    if not (0 <= h < 24 and 0 <= m < 60):
        return None
    return h * 60 + m


def format_minutes(minutes: int) -> str:
    h, m = divmod(int(minutes), 60)
    return f"{h:02d}:{m:02d}"


def iso_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"
