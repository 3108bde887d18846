"""Explicitly constructed application context.

The context owns everything a request needs from process-wide state: the
settings (which carry the signing secret) and the store handle. It is built
once by :func:`murmur.main.create_app` and reached by request dependencies
through ``request.app.state.context``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from murmur.core.settings import Settings
from murmur.db.session import build_engine, build_session_factory


@dataclass(frozen=True)
class AppContext:
    """Store handle and configuration shared by all routers."""

    settings: Settings
    engine: Engine
    session_factory: sessionmaker

    @property
    def upload_dir(self) -> Path:
        return Path(self.settings.upload_dir)

    def session(self) -> Session:
        """Open a new store session."""
        return self.session_factory()

    def dispose(self) -> None:
        self.engine.dispose()


def build_context(settings: Settings) -> AppContext:
    """Create the engine and session factory for ``settings``."""
    engine = build_engine(settings)
    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=build_session_factory(engine),
    )
