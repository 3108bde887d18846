"""Database engine and session configuration."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from murmur.core.settings import Settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


def build_engine(settings: Settings) -> Engine:
    """Create the engine for the configured store."""
    kwargs: dict[str, object] = {"echo": settings.sql_debug}
    if settings.is_sqlite:
        # Requests run in FastAPI's threadpool.
        kwargs["connect_args"] = {"check_same_thread": False}
        if settings.is_in_memory:
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(settings.database_url, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    """Return a session factory bound to ``engine``."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def create_tables(engine: Engine) -> None:
    """Create all database tables."""
    # Ensure model modules are imported so that metadata is populated.
    import murmur.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_tables(engine: Engine) -> None:
    """Drop all database tables."""
    import murmur.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
