"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from vibesync.config import VibeConfig
from vibesync.database.models import Base, User
from vibesync.services import user_service

TEST_CONFIG = VibeConfig(
    app_name="VibeSync Test",
    app_motto="Testing the vibe",
    api_port=8000,
    vibe_point_reward=10,
    feed_default_limit=20,
    feed_max_limit=100,
)


@pytest.fixture
def db_engine() -> Engine:
    """Create an in-memory SQLite engine with all VibeSync tables.

    Uses StaticPool so all threads (TestClient runs sync handlers on a
    threadpool) share the same in-memory database.
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_session(db_engine: Engine):
    """Provide a session that rolls back after each test."""
    with Session(db_engine, expire_on_commit=False) as session:
        yield session
        session.rollback()


def make_user(session: Session, name: str, **kwargs) -> User:
    """Register a user named *name* with derived username/email."""
    return user_service.create_user(
        session,
        username=name.lower(),
        email=f"{name.lower()}@example.com",
        display_name=name,
        **kwargs,
    )


@pytest.fixture
def spotify_client():
    """An unconfigured music-service client (no token)."""
    from vibesync.services.spotify_client import SpotifyClient

    return SpotifyClient(None)


@pytest.fixture
def client(db_engine, spotify_client):
    """FastAPI TestClient wired to the test engine and config."""
    from fastapi.testclient import TestClient

    from vibesync.api.deps import get_config, get_engine, get_spotify
    from vibesync.api.main import app

    app.dependency_overrides[get_engine] = lambda: db_engine
    app.dependency_overrides[get_config] = lambda: TEST_CONFIG
    app.dependency_overrides[get_spotify] = lambda: spotify_client
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
