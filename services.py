# services.py
from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from domain import ColumnMapping, DailyWorkRecord
from timeparse import format_minutes, iso_key, parse_date, parse_time

logger = logging.getLogger(__name__)

NO_SHIFT_LABEL = "Sin jornada"

# Header keywords per role, in the order the roles are resolved.
ROLE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("date", ("fecha", "date")),
    ("start", ("inicio", "entrada", "start", "entry")),
    ("end", ("fin", "salida", "end", "exit")),
    ("note", ("nota", "observ", "coment", "note", "comment")),
)
# Marks row 0 as a header without mapping any column.
HEADER_ONLY_KEYWORDS: tuple[str, ...] = ("día",)


class WorkHoursCalculator:
    """Business rules for raw hours and the lunch deduction."""
    def __init__(self, lunch_threshold: float = 6.0, lunch_hours: float = 1.0):
        self.lunch_threshold = lunch_threshold
        self.lunch_hours = lunch_hours

    def calculate_raw_hours(self, start_minutes: int, end_minutes: int) -> float:
        """Shift length in hours. Shifts ending before they start count as 0."""
        return max(0.0, (end_minutes - start_minutes) / 60.0)

    def lunch_deduction(self, raw_hours: float) -> float:
        """Step rule: strictly above the threshold loses the full lunch, otherwise nothing."""
        return self.lunch_hours if raw_hours > self.lunch_threshold else 0.0

    def effective_hours(self, raw_hours: float) -> float:
        return max(0.0, raw_hours - self.lunch_deduction(raw_hours))


def tsv_to_rows(text: str | None, delimiter: str = "\t") -> List[List[str]]:
    rows = []
    for line in str(text or "").replace("\r", "").split("\n"):
        if not line.strip():
            continue
        rows.append([field.strip() for field in line.split(delimiter)])
    return rows


def detect_columns(header_row: Sequence[str]) -> ColumnMapping:
    """
    Looks for known header words in row 0 (case-insensitive substrings).
    Roles without a matching column keep the fallback index.
    """
    cells = [str(c or "").lower() for c in header_row]
    found: Dict[str, int] = {}
    for role, keywords in ROLE_KEYWORDS:
        for idx, cell in enumerate(cells):
            if any(k in cell for k in keywords):
                found[role] = idx
                break

    has_header = bool(found) or any(
        k in cell for cell in cells for k in HEADER_ONLY_KEYWORDS
    )
    if not has_header:
        return ColumnMapping()

    default = ColumnMapping()
    note = found.get("note")
    return ColumnMapping(
        date=found.get("date", default.date),
        start=found.get("start", default.start),
        end=found.get("end", default.end),
        note=default.note if note is None else note,
        note_fallback=default.note_fallback if note is None else note,
        has_header=True,
    )


def _cell(row: Sequence[str], idx: int) -> str:
    return row[idx] if 0 <= idx < len(row) else ""


class RecordBuilder:
    """Turns the raw sheet export into one DailyWorkRecord per date of the target year."""
    def __init__(self, year: int, calculator: WorkHoursCalculator | None = None,
                 delimiter: str = "\t"):
        self.year = year
        self.calculator = calculator or WorkHoursCalculator()
        self.delimiter = delimiter

    def build(self, text: str | None) -> Dict[str, DailyWorkRecord]:
        """Returns {iso_key: record}. Unusable rows are skipped; the last row for a date wins."""
        rows = tsv_to_rows(text, self.delimiter)
        if not rows:
            return {}

        mapping = detect_columns(rows[0])
        first = 1 if mapping.has_header else 0

        records: Dict[str, DailyWorkRecord] = {}
        skipped = 0
        for row in rows[first:]:
            rec = self.build_record(row, mapping)
            if rec is None:
                skipped += 1
                continue
            records[rec.iso_key] = rec

        logger.debug(
            "Built %d records for %d from %d rows (%d skipped, header=%s)",
            len(records), self.year, len(rows) - first, skipped, mapping.has_header,
        )
        return records

    def build_record(self, row: Sequence[str], mapping: ColumnMapping) -> DailyWorkRecord | None:
        work_date = parse_date(_cell(row, mapping.date))
        if work_date is None or work_date.year != self.year:
            return None

        start = parse_time(_cell(row, mapping.start))
        end = parse_time(_cell(row, mapping.end))
        has_shift = start is not None and end is not None

        note = (_cell(row, mapping.note) or _cell(row, mapping.note_fallback)).strip()

        if has_shift:
            raw = self.calculator.calculate_raw_hours(start, end)
            lunch = self.calculator.lunch_deduction(raw)
            hours = self.calculator.effective_hours(raw)
            label = f"{format_minutes(start)} – {format_minutes(end)}"
        else:
            raw = lunch = hours = 0.0
            label = note or NO_SHIFT_LABEL

        return DailyWorkRecord(
            work_date=work_date,
            iso_key=iso_key(work_date),
            weekday=work_date.weekday(),
            has_shift=has_shift,
            start_minutes=start if has_shift else None,
            end_minutes=end if has_shift else None,
            raw_hours=raw,
            lunch_hours=lunch,
            effective_hours=hours,
            label=label,
            note=note,
        )


__all__ = [
    "NO_SHIFT_LABEL",
    "RecordBuilder",
    "WorkHoursCalculator",
    "detect_columns",
    "tsv_to_rows",
]
