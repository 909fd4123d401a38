# domain.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DailyWorkRecord:
    """One calendar date of the schedule: a shift, a note, or both."""
    work_date: date
    iso_key: str
    weekday: int  # 0 = lunes ... 6 = domingo
    has_shift: bool
    start_minutes: int | None = None
    end_minutes: int | None = None
    raw_hours: float = 0.0
    lunch_hours: float = 0.0
    effective_hours: float = 0.0
    label: str = ""
    note: str = ""

    @property
    def year(self) -> int:
        return self.work_date.year

    @property
    def month(self) -> int:
        return self.work_date.month

    @property
    def day(self) -> int:
        return self.work_date.day

    @property
    def has_lunch(self) -> bool:
        return self.lunch_hours > 0


@dataclass(frozen=True)
class WeekWindow:
    """Monday to Sunday, both days inclusive."""
    start: date
    end: date

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end


@dataclass(frozen=True)
class ColumnMapping:
    """Column index per role. Defaults are the layout of the published sheet."""
    date: int = 1
    start: int = 2
    end: int = 3
    note: int = 5
    note_fallback: int = 4
    has_header: bool = False
