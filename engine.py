# engine.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from types import MappingProxyType
from typing import Mapping, Tuple

from aggregator import MonthSummary, YearSummary, summarize_month, summarize_year, week_weekday_totals
from domain import DailyWorkRecord, WeekWindow
from fetcher import FetchError
from services import RecordBuilder
from timeparse import iso_key
from weeks import weeks_for_month

logger = logging.getLogger(__name__)


class DataUnavailableError(RuntimeError):
    """Neither the sheet nor a fresh cached copy could be loaded."""


@dataclass
class Selection:
    """Month (1-12) and week shown by the calendar."""
    month: int = 1
    week_index: int = 0

    def shift_month(self, delta: int) -> None:
        self.month = (self.month - 1 + delta) % 12 + 1
        self.week_index = 0

    def shift_week(self, delta: int, n_weeks: int) -> None:
        self.week_index = max(0, min(self.week_index + delta, n_weeks - 1))


def initial_selection(year: int, today: date) -> Selection:
    return Selection(month=today.month if today.year == year else 1, week_index=0)


class PlannerEngine:
    """
    Owns the records of the configured year.

    `lookup` (iso key -> record) and `records` (chronological) always come
    from the same build: `rebuild` computes both and only then replaces them.
    """
    def __init__(self, year: int, builder: RecordBuilder | None = None, fetcher=None, cache=None):
        self.year = year
        self.builder = builder or RecordBuilder(year)
        self.fetcher = fetcher
        self.cache = cache
        self._lookup: Mapping[str, DailyWorkRecord] = MappingProxyType({})
        self._records: Tuple[DailyWorkRecord, ...] = ()

    @property
    def lookup(self) -> Mapping[str, DailyWorkRecord]:
        return self._lookup

    @property
    def records(self) -> Tuple[DailyWorkRecord, ...]:
        return self._records

    def rebuild(self, raw_text: str | None) -> int:
        built = self.builder.build(raw_text)
        ordered = tuple(sorted(built.values(), key=lambda r: r.work_date))
        self._lookup, self._records = MappingProxyType(built), ordered
        return len(ordered)

    def load(self) -> str:
        """
        Network first, cache second. Returns "network" or "cache".
        Raises DataUnavailableError when both fail.
        """
        try:
            if self.fetcher is None:
                raise FetchError("No fetcher configured")
            raw = self.fetcher.fetch()
        except FetchError as e:
            logger.warning("Sheet fetch failed: %s", e)
            cached = self.cache.read() if self.cache is not None else None
            if cached is None:
                raise DataUnavailableError(
                    "Error cargando datos. Revisa la URL TSV, permisos del Sheet o tu conexión."
                ) from e
            n = self.rebuild(cached)
            logger.warning("Using cached sheet data (%d records)", n)
            return "cache"

        if self.cache is not None:
            self.cache.write(raw)
        n = self.rebuild(raw)
        logger.info("Loaded %d records for %d", n, self.year)
        return "network"

    def record_for(self, d: date) -> DailyWorkRecord | None:
        return self._lookup.get(iso_key(d))

    def month_weeks(self, month: int) -> list[WeekWindow]:
        return weeks_for_month(self.year, month)

    def week_bars(self, window: WeekWindow) -> list[float]:
        return week_weekday_totals(self._records, window)

    def month_summary(self, month: int) -> MonthSummary:
        return summarize_month(self._records, self.year, month)

    def year_summary(self) -> YearSummary:
        return summarize_year(self._records, self._lookup, self.year)


__all__ = ["DataUnavailableError", "PlannerEngine", "Selection", "initial_selection"]
