"""Database engine and per-request sessions for the users table."""

from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from useraccounts.config import get_settings

settings = get_settings()


def make_engine(database_url: str) -> Engine:
    """Create an engine, letting SQLite connections cross threads.

    Sync route handlers run in FastAPI's threadpool, so a SQLite connection
    may be used by a different thread than the one that opened it.
    """
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


engine = make_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Open a session and always close it, rolling back anything uncommitted."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    with session_scope() as db:
        yield db


def init_db() -> None:
    """Create the users table if it does not exist yet."""
    # Register the models with Base.metadata
    from useraccounts import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
