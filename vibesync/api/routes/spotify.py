"""
vibesync.api.routes.spotify — Music-service passthrough
========================================================

Failures never touch the store: an unconfigured client answers 503,
an upstream error 502.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from vibesync.api.deps import get_spotify
from vibesync.services.spotify_client import (
    SpotifyClient,
    SpotifyError,
    SpotifyNotConfigured,
)

router = APIRouter(prefix="/spotify", tags=["spotify"])


def _raise_for(exc: SpotifyError, message: str) -> None:
    if isinstance(exc, SpotifyNotConfigured):
        raise HTTPException(503, f"{message}: Spotify not connected")
    raise HTTPException(502, f"{message}: {exc}")


@router.get("/profile")
async def get_profile(client: SpotifyClient = Depends(get_spotify)):
    try:
        return await client.get_profile()
    except SpotifyError as exc:
        _raise_for(exc, "Could not get Spotify profile")


@router.get("/currently-playing")
async def get_currently_playing(client: SpotifyClient = Depends(get_spotify)):
    try:
        return await client.get_currently_playing()
    except SpotifyError as exc:
        _raise_for(exc, "Could not get currently playing track")


@router.get("/top-tracks")
async def get_top_tracks(
    limit: int = Query(10, ge=1, le=50),
    client: SpotifyClient = Depends(get_spotify),
):
    try:
        return await client.get_top_tracks(limit)
    except SpotifyError as exc:
        _raise_for(exc, "Could not get top tracks")
