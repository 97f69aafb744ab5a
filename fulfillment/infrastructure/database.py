"""Database configuration and session management.

Provides the SQLAlchemy engine, session factory and declarative base.
Nothing connects at import time; callers build an engine from settings.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from fulfillment.infrastructure.config import Settings, get_settings

# Base class for models
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    """Turn on FK enforcement so ON DELETE CASCADE works on SQLite."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings | None = None, **engine_kwargs: Any) -> Engine:
    """Create an engine for the configured database.

    Args:
        settings: Settings to read the URL from; defaults to ``get_settings()``.
        **engine_kwargs: Extra arguments passed to ``create_engine``.

    Returns:
        Configured Engine.
    """
    settings = settings or get_settings()
    engine_kwargs.setdefault("echo", settings.database_echo)
    engine_kwargs.setdefault("pool_pre_ping", True)
    engine = create_engine(settings.database_url, **engine_kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create the session factory used by repositories.

    Args:
        engine: Engine to bind sessions to.

    Returns:
        Session factory.
    """
    return sessionmaker(
        engine,
        class_=Session,
        expire_on_commit=False,
    )


def create_schema(engine: Engine) -> None:
    """Create all tables declared on ``Base`` that do not exist yet."""
    # Import models so they register on Base.metadata
    from fulfillment.infrastructure import models  # noqa: F401

    Base.metadata.create_all(engine)


@contextmanager
def session_scope(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    """Provide a transactional session.

    Commits when the block succeeds and rolls back on any exception.

    Yields:
        Session for database operations.
    """
    with session_factory() as session:
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
