# core/database.py
# Central SQLAlchemy setup: engine, session factory, Base and the Store that owns them.
# All models across the app must import THIS Base.

import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# Base class for all models
Base = declarative_base()

# Collections guarded by their own lock; the order here is the lock order
COLLECTIONS = ("users", "posts", "comments")

# Signed 64-bit INTEGER range of SQLite and BIGINT columns
MIN_INTEGER = -(2**63)
MAX_INTEGER = 2**63 - 1


def is_storable_id(value: int) -> bool:
    """Ids are assigned from 1 up; anything outside that and the column range cannot exist."""
    return 1 <= value <= MAX_INTEGER


def _is_memory_sqlite(url) -> bool:
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def build_engine(database_url: str):
    url = make_url(database_url)
    kwargs = {"echo": False, "future": True}
    if url.get_backend_name() == "sqlite":
        # For SQLite + threadpool request handlers, allow cross-thread use
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(url):
            # One shared connection, otherwise every checkout gets an empty database
            kwargs["poolclass"] = StaticPool
    engine = create_engine(url, **kwargs)

    if url.get_backend_name() == "sqlite" and not _is_memory_sqlite(url):
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            # WAL reduces writer blocks on readers; NORMAL is fine for dev durability
            cursor.execute("PRAGMA journal_mode=WAL;")
            cursor.execute("PRAGMA synchronous=NORMAL;")
            cursor.close()

    return engine


class Store:
    """Process-owned resource store.

    Holds the engine, the session factory and one mutex per collection.
    Writers take the lock of every collection they mutate, in COLLECTIONS
    order, so id assignment and cascading deletes never interleave.
    """

    def __init__(self, database_url: str):
        self.engine = build_engine(database_url)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
            future=True,
            expire_on_commit=False,
        )
        self._locks: Dict[str, threading.Lock] = {name: threading.Lock() for name in COLLECTIONS}

    def create_all(self) -> None:
        # Import models so they register on Base.metadata
        from blog_api import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def locked(self, *collections: str) -> Iterator[None]:
        """Hold the locks of ``collections`` (acquired in canonical order)."""
        unknown = set(collections) - set(COLLECTIONS)
        if unknown:
            raise KeyError(f"unknown collection(s): {sorted(unknown)}")
        ordered = [name for name in COLLECTIONS if name in collections]
        acquired = []
        try:
            for name in ordered:
                self._locks[name].acquire()
                acquired.append(name)
            yield
        finally:
            for name in reversed(acquired):
                self._locks[name].release()

    def session(self) -> Session:
        return self.SessionLocal()

    def reset(self, *collections: str) -> None:
        """Delete every row of ``collections`` and restart their id sequences at 1."""
        from blog_api.models import Comment, Post, User

        tables = {"users": User.__table__, "posts": Post.__table__, "comments": Comment.__table__}
        with self.locked(*collections), self.engine.begin() as conn:
            for name in collections:
                conn.execute(tables[name].delete())
            if self.engine.dialect.name == "sqlite":
                names = ", ".join(f"'{tables[n].name}'" for n in collections)
                # sqlite_sequence only exists once an AUTOINCREMENT table got a row
                has_seq = conn.execute(
                    text("SELECT 1 FROM sqlite_master WHERE type='table' AND name='sqlite_sequence'")
                ).first()
                if has_seq:
                    conn.execute(text(f"DELETE FROM sqlite_sequence WHERE name IN ({names})"))
            elif self.engine.dialect.name == "postgresql":
                for name in collections:
                    conn.execute(text(f"ALTER SEQUENCE {tables[name].name}_id_seq RESTART WITH 1"))
        logger.info("Store reset: %s", ", ".join(collections))

    def dispose(self) -> None:
        self.engine.dispose()
