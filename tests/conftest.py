# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import timedelta
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("KNIT_STORAGE_URL", "sqlite://")
os.environ.setdefault("KNIT_STORAGE_KEY", "test-storage-key")
os.environ.setdefault("KNIT_AUTH_JWT_SECRET", "test-jwt-secret")

from knit_server.core.settings import Settings
from knit_server.db.session import Base
from knit_server.db.session import get_db as app_get_session
from knit_server.db.time import utcnow
from knit_server.main import app as fastapi_app
from knit_server.models import Community, CommunityMember, Event, Post, Profile
from knit_server.services.gateway import KnitGateway

TEST_DB_URL = "sqlite://"

_TEST_SETTINGS_INSTANCE = Settings()


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide a Settings instance aligned with runtime configuration."""
    return _TEST_SETTINGS_INSTANCE


@pytest.fixture()
def gateway(db_session: Session) -> KnitGateway:
    """Return a gateway bound to the test session."""
    return KnitGateway(db_session)


def make_token(user_id: str, settings: Settings = _TEST_SETTINGS_INSTANCE, **claims: Any) -> str:
    """Mint an identity-provider style access token for ``user_id``."""
    payload: dict[str, Any] = {
        "sub": user_id,
        "aud": settings.auth_jwt_audience,
        "exp": utcnow() + timedelta(hours=1),
    }
    payload.update(claims)
    return jwt.encode(payload, settings.auth_jwt_secret, algorithm=settings.auth_jwt_algorithm)


@pytest.fixture()
def token_factory() -> Callable[..., str]:
    """Return the token minting helper for tests that need custom claims."""
    return make_token


def _add(db_session: Session, row: Any) -> Any:
    db_session.add(row)
    db_session.flush()
    db_session.refresh(row)
    return row


@pytest.fixture()
def test_user(db_session: Session) -> Iterator[Profile]:
    """Create and return a persisted mentor profile."""
    yield _add(
        db_session,
        Profile(
            name="Sarah Chen",
            email="sarah@example.com",
            bio="Retired engineer who loves teaching",
            age=67,
            location="San Francisco",
            skills=["Python", "Woodworking"],
            interests=["Technology", "Crafts"],
            role="mentor",
        ),
    )


@pytest.fixture()
def other_user(db_session: Session) -> Iterator[Profile]:
    """Create and return a persisted mentee profile."""
    yield _add(
        db_session,
        Profile(
            name="James Park",
            email="james@example.com",
            bio="Student learning to bake",
            age=21,
            skills=["Video editing"],
            interests=["Cooking"],
            role="mentee",
        ),
    )


@pytest.fixture()
def auth_token(test_user: Profile) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return {"Authorization": f"Bearer {make_token(test_user.id)}"}


@pytest.fixture()
def other_auth_token(other_user: Profile) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return {"Authorization": f"Bearer {make_token(other_user.id)}"}


@pytest.fixture()
def community(db_session: Session) -> Iterator[Community]:
    """Create a default test community with no members or posts."""
    yield _add(
        db_session,
        Community(
            name="Tech & Digital Skills",
            description="Young tech enthusiasts teaching seniors",
            categories=["Technology", "Programming"],
            featured=True,
        ),
    )


@pytest.fixture()
def membership(db_session: Session, community: Community, test_user: Profile) -> CommunityMember:
    """Make the primary test user a member of the test community."""
    return _add(db_session, CommunityMember(community_id=community.id, user_id=test_user.id))


@pytest.fixture()
def test_post(db_session: Session, community: Community, test_user: Profile, membership) -> Post:
    """Create a post by the primary test user."""
    return _add(
        db_session,
        Post(
            community_id=community.id,
            author_id=test_user.id,
            title="Woodworking basics",
            content="Start with a sharp chisel.",
            tags=["crafts"],
        ),
    )


@pytest.fixture()
def test_event(db_session: Session, test_user: Profile) -> Event:
    """Create an upcoming workshop organized by the primary test user."""
    start = utcnow() + timedelta(days=2)
    return _add(
        db_session,
        Event(
            title="Intro to Python",
            description="A gentle first workshop",
            organizer_id=test_user.id,
            event_type="workshop",
            location="Community Center",
            latitude=37.77,
            longitude=-122.42,
            start_time=start,
            end_time=start + timedelta(hours=2),
            max_attendees=2,
            tags=["python"],
        ),
    )
