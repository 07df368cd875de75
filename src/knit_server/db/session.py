"""Database session configuration."""

from __future__ import annotations

import logging
from collections.abc import Generator

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from knit_server.core.settings import Settings
from knit_server.errors import StorageConfigurationError, StorageUnavailableError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import knit_server.models  # noqa: E402,F401


def build_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine for the configured store.

    The access key is injected as the connection password unless the URL
    already carries one.

    Raises:
        StorageConfigurationError: If the storage URL or access key is missing.
    """
    if not settings.storage_url or not settings.storage_key:
        raise StorageConfigurationError(
            "KNIT_STORAGE_URL and KNIT_STORAGE_KEY must both be set"
        )

    url = make_url(settings.storage_url)
    kwargs: dict[str, object] = {"echo": settings.sql_debug}
    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        if url.password is None:
            url = url.set(password=settings.storage_key)
        kwargs["pool_pre_ping"] = True

    return create_engine(url, **kwargs)


def build_session_factory(settings: Settings) -> sessionmaker[Session]:
    """Return a session factory bound to a freshly built engine."""
    engine = build_engine(settings)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a database session for dependency injection.

    Raises:
        StorageUnavailableError: If the app started without storage configuration.
    """
    factory: sessionmaker[Session] | None = getattr(request.app.state, "session_factory", None)
    if factory is None:
        raise StorageUnavailableError("Data layer is not configured")
    db = factory()
    try:
        yield db
    finally:
        db.close()


def create_tables(engine: Engine) -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def drop_tables(engine: Engine) -> None:
    """Drop all database tables."""
    Base.metadata.drop_all(bind=engine)
