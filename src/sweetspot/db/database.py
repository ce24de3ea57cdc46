"""Database helpers for Sweet Spot."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from sweetspot.config import get_settings
from sweetspot.db.models import Base

settings = get_settings()
engine = create_engine(str(settings.database_url), future=True, echo=False)

__all__ = ["engine", "SessionLocal", "get_session", "init_db", "make_session_factory"]


def make_session_factory(bind: Engine) -> sessionmaker[Session]:
    """Sessions keep loaded rows usable after commit; flushing is explicit."""

    return sessionmaker(bind=bind, class_=Session, expire_on_commit=False, autoflush=False)


SessionLocal = make_session_factory(engine)


def init_db(bind: Engine | None = None) -> None:
    """Create any missing tables (backtest run tables included)."""

    Base.metadata.create_all(bind or engine)


@contextmanager
def get_session(factory: sessionmaker[Session] | None = None) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations.

    ``factory`` defaults to the configured ``SessionLocal``; pass another one to
    run the same scope against a different engine.
    """

    session = (factory or SessionLocal)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
