# app.py
# -----------------------------------------------
# 🗓️ Planner de Jornadas (Streamlit)
# -----------------------------------------------
# Requiere: streamlit, sqlmodel, pandas, httpx (psycopg2-binary si usas Postgres)
# Lee el TSV publicado del Sheet; si la red falla usa la última copia (3 días).

import logging
from datetime import date, datetime
from zoneinfo import ZoneInfo

import streamlit as st

from config import DAYS, LIST_VIEW_DEFAULT, MONTHS, load_config
from engine import DataUnavailableError, PlannerEngine, initial_selection
from fetcher import TsvFetcher
from repository import TsvCacheRepository
from services import RecordBuilder
from utils import (
    LUNCH_MARK, calendar_grid, fmt_dm, fmt_hours, month_list_dataframe, month_title,
    monthly_frame, records_to_dataframe, week_title, week_totals_frame, weekday_frame,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")
logger = logging.getLogger("planner")

CFG = load_config()
TZ = ZoneInfo(CFG.timezone)


def hoy_local() -> date:
    return datetime.now(TZ).date()


# =========================
# Motor + caché
# =========================
@st.cache_resource
def get_cache(url: str, key: str, ttl_seconds: float):
    return TsvCacheRepository(url, key=key, ttl_seconds=ttl_seconds)


def get_engine() -> PlannerEngine:
    cache = get_cache(CFG.db_url, CFG.cache_key, CFG.cache_ttl.total_seconds())
    return PlannerEngine(
        CFG.year,
        builder=RecordBuilder(CFG.year, delimiter=CFG.delimiter),
        fetcher=TsvFetcher(CFG.tsv_url, timeout=CFG.http_timeout),
        cache=cache,
    )


# =========================
# Configuración de página
# =========================
st.set_page_config(page_title="Planner de Jornadas", page_icon="🗓️", layout="wide")
st.title("🗓️ Planner de Jornadas")

if st.sidebar.button("🔄 Recargar datos", use_container_width=True):
    st.session_state.pop("engine", None)

# Se carga una vez por sesión; los agregados se recalculan en cada render.
if "engine" not in st.session_state:
    engine = get_engine()
    try:
        st.session_state["source"] = engine.load()
    except DataUnavailableError as e:
        logger.error("No data available: %s", e)
        st.error(str(e))
        st.stop()
    st.session_state["engine"] = engine

engine = st.session_state["engine"]
if st.session_state.get("source") == "cache":
    st.info("Sin conexión con el Sheet: mostrando la última copia guardada.", icon="ℹ️")

# =========================
# Estado de navegación (mes / semana)
# =========================
if "selection" not in st.session_state:
    st.session_state["selection"] = initial_selection(CFG.year, hoy_local())
sel = st.session_state["selection"]

c1, c2, c3 = st.columns([1, 3, 1])
if c1.button("◀ Mes", use_container_width=True):
    sel.shift_month(-1)
if c3.button("Mes ▶", use_container_width=True):
    sel.shift_month(1)
c2.subheader(month_title(CFG.year, sel.month))

weeks = engine.month_weeks(sel.month)
sel.shift_week(0, len(weeks))

# =========================
# 📅 Calendario (grid o lista)
# =========================
vista_lista = st.toggle("Vista lista", value=LIST_VIEW_DEFAULT)
if vista_lista:
    st.dataframe(month_list_dataframe(engine.lookup, CFG.year, sel.month),
                 hide_index=True, use_container_width=True)
else:
    st.dataframe(calendar_grid(engine.lookup, CFG.year, sel.month),
                 hide_index=True, use_container_width=True)

# =========================
# 📊 Semana seleccionada (horas efectivas)
# =========================
w1, w2, w3 = st.columns([1, 3, 1])
if w1.button("◀ Semana", use_container_width=True):
    sel.shift_week(-1, len(weeks))
if w3.button("Semana ▶", use_container_width=True):
    sel.shift_week(1, len(weeks))
week = weeks[sel.week_index]
w2.markdown(f"**{week_title(sel.week_index, week)}**")
st.bar_chart(weekday_frame(engine.week_bars(week)))

# =========================
# 🧮 Totales del mes
# =========================
ms = engine.month_summary(sel.month)

t1, t2 = st.columns(2)
with t1:
    st.markdown("**Totales por día (mes) · efectivas**")
    for name, h in zip(DAYS, ms.weekday_totals):
        st.markdown(f"- {name}: {fmt_hours(h)}")
with t2:
    st.markdown("**Totales por semana (mes) · efectivas**")
    st.dataframe(week_totals_frame(ms.weeks, ms.week_totals), hide_index=True, use_container_width=True)
    st.markdown(f"**Total mes:** {fmt_hours(ms.weeks_total)}")

# =========================
# KPIs mensuales
# =========================
st.subheader("KPIs del mes")
k = st.columns(3)
if ms.top_day:
    lunch = LUNCH_MARK if ms.top_day.has_lunch else ""
    k[0].metric("Día con mayor jornada", fmt_dm(ms.top_day.work_date),
                help=f"{fmt_hours(ms.top_day.effective_hours)} · {ms.top_day.label}{lunch}")
else:
    k[0].metric("Día con mayor jornada", "--", help="No hay jornadas en este mes")

if ms.top_week:
    tw = ms.weeks[ms.top_week.index]
    k[1].metric("Semana más cargada", f"Semana {ms.top_week.index + 1}",
                help=f"{fmt_hours(ms.top_week.hours)} · Del {fmt_dm(tw.start)} al {fmt_dm(tw.end)}")
else:
    k[1].metric("Semana más cargada", "--", help="Sin horas en las semanas del mes")

k[2].metric("Total mes", fmt_hours(ms.totals.effective), help="Horas efectivas (almuerzo ya descontado)")

k = st.columns(3)
k[0].metric("Promedio semanal", fmt_hours(ms.weekly_average), help="Promedio semanal efectivo")
if ms.top_weekday:
    k[1].metric("Día de semana más pesado", DAYS[ms.top_weekday.index],
                help=f"{fmt_hours(ms.top_weekday.hours)} acumuladas")
else:
    k[1].metric("Día de semana más pesado", "--")
k[2].metric("Días con jornada", ms.totals.days, help=f"Días con horario asignado en {MONTHS[sel.month - 1]}")

k = st.columns(3)
k[0].metric("Días con almuerzo", len(ms.lunch_days), help="Jornadas > 6h (se descuenta 1h)")
k[1].metric("Horas de almuerzo", fmt_hours(ms.totals.lunch), help="Horas descontadas (no suman)")
k[2].metric("Total sin descuento", fmt_hours(ms.totals.raw), help="Informativo: horas sin descuento")

st.markdown("**Días donde aplicó almuerzo**")
if not ms.lunch_days:
    st.caption("Este mes no hay días que requieran almuerzo según la regla (> 6h).")
else:
    st.markdown(" · ".join(
        f"{DAYS[d.weekday]} {fmt_dm(d.work_date)} {fmt_hours(d.effective_hours)} (−{d.lunch_hours:g}h{LUNCH_MARK})"
        for d in ms.lunch_days
    ))

# =========================
# KPIs anuales
# =========================
ys = engine.year_summary()
st.subheader(f"KPIs {CFG.year}")

k = st.columns(3)
k[0].metric("Total año", fmt_hours(ys.totals.effective), help="Horas efectivas del año (almuerzo ya descontado)")
k[1].metric("Promedio mensual", fmt_hours(ys.monthly_average), help="Promedio mensual efectivo (12 meses)")
if ys.top_month:
    m = ys.top_month.index
    k[2].metric("Mes más cargado", MONTHS[m],
                help=f"{fmt_hours(ys.monthly_totals[m])} efectivas · {fmt_hours(ys.monthly_raw_totals[m])} sin descuento")
else:
    k[2].metric("Mes más cargado", "--")

k = st.columns(3)
if ys.top_week:
    yw = ys.weeks[ys.top_week.index]
    k[0].metric("Semana más cargada del año", f"Semana {ys.top_week.index + 1}",
                help=f"{fmt_hours(ys.top_week.hours)} · Del {fmt_dm(yw.start)} al {fmt_dm(yw.end)}")
else:
    k[0].metric("Semana más cargada del año", "--")
if ys.top_weekday:
    k[1].metric("Día de semana más pesado", DAYS[ys.top_weekday.index],
                help=f"{fmt_hours(ys.top_weekday.hours)} acumuladas")
else:
    k[1].metric("Día de semana más pesado", "--")
k[2].metric("Horas de almuerzo", fmt_hours(ys.totals.lunch), help="Horas descontadas por la regla (>6h) en el año")

k = st.columns(3)
k[0].metric("Días con jornada", ys.coverage.with_shift, help="Días con horario asignado en el año")
k[1].metric("Días sin jornada", ys.coverage.without_shift, help="Días sin jornada (incluye días sin registro)")
k[2].metric("Total año sin descuento", fmt_hours(ys.totals.raw),
            help="Informativo: horas del año sin descuento de almuerzo")

with st.expander("Horas por mes", expanded=False):
    st.dataframe(monthly_frame(ys.monthly_totals, ys.monthly_raw_totals), hide_index=True, use_container_width=True)

with st.expander("Registros del año", expanded=False):
    st.dataframe(records_to_dataframe(engine.records), hide_index=True, use_container_width=True)
