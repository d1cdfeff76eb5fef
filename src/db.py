"""Database engine/session helpers for read-only snapshot access."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def create_db_engine(db_url: str, *, echo: bool = False) -> Engine:
    """Create a SQLAlchemy engine; in-memory SQLite shares one connection."""
    url = make_url(db_url)
    if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, echo=echo, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a session factory bound to the provided engine."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@contextmanager
def read_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    """Yield a session whose transaction is always rolled back; the engine never writes."""
    with session_factory() as session:
        try:
            yield session
        finally:
            session.rollback()
