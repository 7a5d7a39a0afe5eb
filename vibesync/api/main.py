"""
vibesync.api.main — FastAPI application entry point
=====================================================

Run with::

    uvicorn vibesync.api.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from vibesync.api.deps import get_engine  # noqa: E402
from vibesync.api.routes.auth import router as auth_router  # noqa: E402
from vibesync.api.routes.posts import router as posts_router  # noqa: E402
from vibesync.api.routes.quests import router as quests_router  # noqa: E402
from vibesync.api.routes.social import router as social_router  # noqa: E402
from vibesync.api.routes.spotify import router as spotify_router  # noqa: E402
from vibesync.api.routes.users import router as users_router  # noqa: E402
from vibesync.database.seed import seed_demo_data  # noqa: E402

logger = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    """Resolve allowed CORS origins from env.

    Priority:
      1) CORS_ALLOW_ORIGINS (comma-separated)
      2) FRONTEND_URL (single origin)
    """
    raw = os.getenv("CORS_ALLOW_ORIGINS", "").strip()
    if raw:
        return [origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip()]

    frontend_url = os.getenv("FRONTEND_URL", "").strip()
    if frontend_url:
        return [frontend_url.rstrip("/")]

    return []


def _seed_enabled() -> bool:
    return os.getenv("VIBESYNC_SEED_DEMO", "").strip().lower() in {"1", "true", "yes"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle: build the store once."""
    engine = get_engine()
    if _seed_enabled():
        seed_demo_data(engine)
    logger.info("VibeSync API started, store ready (%s)", engine.url.drivername)
    yield
    logger.info("VibeSync API shutting down")


app = FastAPI(
    title="VibeSync API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routers
app.include_router(auth_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(posts_router, prefix="/api")
app.include_router(social_router, prefix="/api")
app.include_router(quests_router, prefix="/api")
app.include_router(spotify_router, prefix="/api")


@app.get("/api/health")
def health():
    return {"status": "ok"}
