"""
vibesync.database.engine — Database Connection & Session Helper
=================================================================

The store is private to one process.  With no ``DATABASE_URL`` set, the
engine is an in-memory SQLite database behind a :class:`StaticPool`, so
every request handler shares the same single connection and the data
disappears when the process exits.

Usage::

    from vibesync.database.engine import create_db_engine, init_db, get_session

    engine = create_db_engine()          # in-memory unless DATABASE_URL is set
    init_db(engine)                      # CREATE TABLE IF NOT EXISTS …

    with get_session(engine) as session:
        session.add(User(username="drew", email="d@example.com", display_name="Drew"))
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from vibesync.database.models import Base

logger = logging.getLogger(__name__)

IN_MEMORY_URL = "sqlite://"


# ---------------------------------------------------------------------------
# Engine creation
# ---------------------------------------------------------------------------
def create_db_engine(url: str | None = None) -> Engine:
    """Build a SQLAlchemy :class:`Engine`.

    Parameters
    ----------
    url:
        Database URL.  Falls back to ``DATABASE_URL`` and then to a
        process-private in-memory SQLite database.

    Returns
    -------
    Engine
        A configured SQLAlchemy engine instance.
    """
    url = url or os.getenv("DATABASE_URL") or IN_MEMORY_URL

    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            echo=False,
            # FastAPI runs sync handlers on a threadpool
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(
            url,
            echo=False,
            pool_pre_ping=True,
            pool_timeout=10,
        )
    logger.info("Database engine created → %s", engine.url.render_as_string(hide_password=True))
    return engine


# ---------------------------------------------------------------------------
# Schema initialization
# ---------------------------------------------------------------------------
def init_db(engine: Engine) -> None:
    """Create all tables defined in :mod:`vibesync.database.models`.

    Safe to call on every startup (``CREATE TABLE IF NOT EXISTS``
    under the hood).
    """
    Base.metadata.create_all(engine)
    logger.info("Database tables verified / created.")


# ---------------------------------------------------------------------------
# Session helper
# ---------------------------------------------------------------------------
@contextmanager
def get_session(engine: Engine):
    """Yield a :class:`Session` that auto-commits on success and rolls back
    on exception.
    """
    session = Session(engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
