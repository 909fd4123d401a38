# utils.py
from __future__ import annotations

import calendar
from datetime import date
from typing import Iterable, Mapping, Sequence

import pandas as pd

from config import DAYS, MONTHS
from domain import DailyWorkRecord, WeekWindow
from services import NO_SHIFT_LABEL
from timeparse import iso_key

LUNCH_MARK = " 🍽️"


def fmt_hours(hours: float) -> str:
    """One decimal, only for display."""
    return f"{hours:.1f}h"


def fmt_dm(d: date) -> str:
    return f"{d.day:02d}/{d.month:02d}"


def month_title(year: int, month: int) -> str:
    return f"{MONTHS[month - 1]} {year}"


def week_title(index: int, window: WeekWindow) -> str:
    return f"Semana {index + 1} · Del {fmt_dm(window.start)} al {fmt_dm(window.end)}"


def cell_text(rec: DailyWorkRecord | None) -> str:
    if rec is None:
        return NO_SHIFT_LABEL
    if not rec.has_shift:
        return rec.label
    mark = LUNCH_MARK if rec.has_lunch else ""
    return f"{fmt_hours(rec.effective_hours)} · {rec.label}{mark}"


def calendar_grid(lookup: Mapping[str, DailyWorkRecord], year: int, month: int) -> pd.DataFrame:
    """6x7 frame, Monday first. Cells outside the month are empty."""
    offset = date(year, month, 1).weekday()
    days_in_month = calendar.monthrange(year, month)[1]
    cells = []
    for i in range(42):
        day = i - offset + 1
        if day < 1 or day > days_in_month:
            cells.append("")
            continue
        rec = lookup.get(iso_key(date(year, month, day)))
        cells.append(f"{day} · {cell_text(rec)}")
    rows = [cells[r * 7:(r + 1) * 7] for r in range(6)]
    return pd.DataFrame(rows, columns=DAYS)


def month_list_dataframe(lookup: Mapping[str, DailyWorkRecord], year: int, month: int) -> pd.DataFrame:
    """One row per day of the month (list view for small screens)."""
    rows = []
    for day in range(1, calendar.monthrange(year, month)[1] + 1):
        d = date(year, month, day)
        rec = lookup.get(iso_key(d))
        on = rec is not None and rec.has_shift
        rows.append({
            "Día": f"{DAYS[d.weekday()]} {day}",
            "Fecha": fmt_dm(d),
            "Horas": round(rec.effective_hours, 1) if on else 0.0,
            "Jornada": rec.label if rec is not None else NO_SHIFT_LABEL,
            "Almuerzo": "🍽️" if on and rec.has_lunch else "",
            "Nota": rec.note if rec is not None and on else "",
        })
    return pd.DataFrame(rows)


def records_to_dataframe(records: Iterable[DailyWorkRecord]) -> pd.DataFrame:
    rows = []
    for r in records:
        rows.append({
            "Fecha": r.iso_key,
            "Día": DAYS[r.weekday],
            "Jornada": r.label,
            "Horas brutas": r.raw_hours,
            "Almuerzo (h)": r.lunch_hours,
            "Horas efectivas": r.effective_hours,
            "Nota": r.note,
        })
    df = pd.DataFrame(rows)
    if not df.empty:
        df = df.sort_values(["Fecha"]).reset_index(drop=True)
    return df


def weekday_frame(totals: Sequence[float]) -> pd.DataFrame:
    """Bar chart input; the index keeps the Monday-first order."""
    idx = pd.CategoricalIndex(DAYS, categories=DAYS, ordered=True, name="Día")
    return pd.DataFrame({"Horas": [round(t, 1) for t in totals]}, index=idx)


def week_totals_frame(weeks: Sequence[WeekWindow], totals: Sequence[float]) -> pd.DataFrame:
    rows = []
    for i, (w, h) in enumerate(zip(weeks, totals)):
        rows.append({
            "Semana": f"Semana {i + 1}",
            "Del": fmt_dm(w.start),
            "Al": fmt_dm(w.end),
            "Horas": round(h, 1),
        })
    return pd.DataFrame(rows)


def monthly_frame(totals: Sequence[float], raw_totals: Sequence[float]) -> pd.DataFrame:
    return pd.DataFrame({
        "Mes": MONTHS,
        "Efectivas": [round(t, 1) for t in totals],
        "Sin descuento": [round(t, 1) for t in raw_totals],
    })
