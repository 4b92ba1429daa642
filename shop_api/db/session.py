"""SQLAlchemy plumbing: declarative base plus one `Database` handle per URL."""
from __future__ import annotations

from contextlib import contextmanager
from threading import Lock
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()


class Database:
    """Engine and session factory for the account store."""

    def __init__(self, url: str) -> None:
        url = (url or "").strip()
        if not url:
            raise RuntimeError("DATABASE_URL must be configured for the account store.")
        self.url = url
        self.engine: Engine = create_engine(url, pool_pre_ping=True)
        self._session_factory = sessionmaker(bind=self.engine, autoflush=False)

    @contextmanager
    def session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
        finally:
            session.close()

    def create_schema(self) -> None:
        from . import models  # noqa: F401  registers the tables on Base.metadata

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


_handles: dict[str, Database] = {}
_handles_lock = Lock()


def database_for(url: str) -> Database:
    """Shared handle so the app, the repository and the scripts reuse one pool."""
    key = (url or "").strip()
    with _handles_lock:
        db = _handles.get(key)
        if db is None:
            db = _handles[key] = Database(key)
        return db


def reset_databases() -> None:
    """Dispose every cached handle (tests switch databases between cases)."""
    with _handles_lock:
        for db in _handles.values():
            db.dispose()
        _handles.clear()
