"""
vibesync.api.deps — FastAPI dependency injection
=================================================

The store is built once per process and handed to every handler
through these dependencies; tests swap them via
``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from vibesync.config import VibeConfig, load_config
from vibesync.database.engine import create_db_engine, init_db
from vibesync.services.spotify_client import SpotifyClient


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    engine = create_db_engine()
    init_db(engine)
    return engine


@lru_cache(maxsize=1)
def get_config() -> VibeConfig:
    return load_config()


@lru_cache(maxsize=1)
def get_spotify() -> SpotifyClient:
    return SpotifyClient.from_env()


def get_session(engine: Annotated[Engine, Depends(get_engine)]):
    with Session(engine, expire_on_commit=False) as session:
        yield session
