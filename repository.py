# repository.py
from __future__ import annotations

import logging
import time
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel, Field, Session, create_engine

logger = logging.getLogger(__name__)


class TsvCacheDB(SQLModel, table=True):
    key: str = Field(primary_key=True)
    saved_at: float | None = None  # epoch seconds
    raw_text: str | None = None


def build_engine(db_url: str, echo: bool = False):
    is_sqlite = db_url.startswith("sqlite")
    kwargs = {
        "echo": echo,
        "pool_pre_ping": True,
        "connect_args": {},
    }
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["poolclass"] = NullPool
        kwargs["connect_args"] = {"connect_timeout": 10}
        if "sslmode=" not in db_url:
            db_url += ("&" if "?" in db_url else "?") + "sslmode=require"
    return create_engine(db_url, **kwargs)


class TsvCacheRepository:
    """Last downloaded TSV with its timestamp. Entries older than ttl_seconds read as missing."""
    def __init__(self, url: str = "sqlite:///planner_cache.db", key: str = "planner_tsv_cache_v1",
                 ttl_seconds: float = 3 * 24 * 3600, echo: bool = False,
                 clock: Callable[[], float] = time.time):
        self.key = key
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self.engine = build_engine(url, echo=echo)
        SQLModel.metadata.create_all(self.engine)

    def write(self, raw_text: str) -> None:
        """Stores the text with the current timestamp. Storage errors are logged, not raised."""
        try:
            with Session(self.engine) as session:
                row = session.get(TsvCacheDB, self.key) or TsvCacheDB(key=self.key)
                row.saved_at = self.clock()
                row.raw_text = str(raw_text or "")
                session.add(row)
                session.commit()
        except SQLAlchemyError as e:
            logger.warning("Could not write TSV cache %r: %s", self.key, e)

    def read(self) -> str | None:
        try:
            with Session(self.engine) as session:
                row = session.get(TsvCacheDB, self.key)
                entry = None if row is None else (row.saved_at, row.raw_text)
        except SQLAlchemyError as e:
            logger.warning("Could not read TSV cache %r: %s", self.key, e)
            return None

        if entry is None:
            return None
        saved_at, raw_text = entry
        if not raw_text or not saved_at:
            logger.info("Ignoring malformed TSV cache entry %r", self.key)
            return None
        age = self.clock() - saved_at
        if age > self.ttl_seconds:
            logger.info("TSV cache %r expired (%.0f s old)", self.key, age)
            return None
        return raw_text


__all__ = ["TsvCacheDB", "TsvCacheRepository", "build_engine"]
