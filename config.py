# config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

# =========================
# Etiquetas fijas
# =========================
DAYS = ["Lun", "Mar", "Mié", "Jue", "Vie", "Sáb", "Dom"]
MONTHS = [
    "Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio",
    "Julio", "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre",
]

DEFAULT_TSV_URL = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vQLTq9ULbDXOOu4zULhyAVkUuq12Te36kwu-bPGgC4ZgvfwvLRk5jipXc7qLfwp_QrPYotp4gijN5MK"
    "/pub?gid=0&single=true&output=tsv"
)
DEFAULT_YEAR = 2026
CACHE_KEY = "planner_tsv_cache_v1"
CACHE_TTL_HOURS = 24 * 3
DEFAULT_TZ = "Europe/Madrid"
HTTP_TIMEOUT_S = 15.0

# Vista lista por defecto (pantallas pequeñas)
LIST_VIEW_DEFAULT = False


def _pick_data_dir() -> Path:
    candidates = []
    env = os.getenv("DATA_DIR")
    if env:
        candidates.append(Path(env))
    candidates += [Path("/data"), Path.cwd() / "data"]

    for p in candidates:
        try:
            p.mkdir(parents=True, exist_ok=True)
            t = p / ".rwtest"
            t.write_text("ok")
            t.unlink(missing_ok=True)
            return p
        except OSError:
            continue
    return Path.cwd()


@dataclass
class PlannerConfig:
    tsv_url: str = DEFAULT_TSV_URL
    year: int = DEFAULT_YEAR
    cache_key: str = CACHE_KEY
    cache_ttl: timedelta = timedelta(hours=CACHE_TTL_HOURS)
    db_url: str = "sqlite:///planner_cache.db"
    timezone: str = DEFAULT_TZ
    delimiter: str = "\t"
    http_timeout: float = HTTP_TIMEOUT_S


def load_config() -> PlannerConfig:
    """Settings from the environment; anything unset keeps its default."""
    data_dir = _pick_data_dir()
    default_sqlite = f"sqlite:///{(data_dir / 'planner_cache.db').as_posix()}"
    return PlannerConfig(
        tsv_url=os.getenv("PLANNER_TSV_URL", DEFAULT_TSV_URL),
        year=int(os.getenv("PLANNER_YEAR", DEFAULT_YEAR)),
        cache_ttl=timedelta(hours=float(os.getenv("PLANNER_CACHE_TTL_HOURS", CACHE_TTL_HOURS))),
        db_url=os.getenv("DATABASE_URL", default_sqlite),
        timezone=os.getenv("PLANNER_TZ", DEFAULT_TZ),
    )
