"""
vibesync.services.spotify_client — "Currently Playing" Lookups
===============================================================

Thin async client for the Spotify Web API.  It is best effort: every
failure surfaces as :class:`SpotifyError` for the caller to report, and
nothing here touches the local store.

Configuration (environment):
    SPOTIFY_ACCESS_TOKEN — bearer token; without it every call raises
                           :class:`SpotifyNotConfigured`.
    SPOTIFY_API_BASE     — API root, defaults to the public endpoint.
"""

from __future__ import annotations

import logging
import os

import httpx

logger = logging.getLogger(__name__)

SPOTIFY_API = "https://api.spotify.com/v1"


class SpotifyError(Exception):
    """The music service could not answer."""


class SpotifyNotConfigured(SpotifyError):
    """No access token is available."""


class SpotifyClient:
    """Async wrapper around the three endpoints the app displays."""

    def __init__(
        self,
        access_token: str | None,
        *,
        base_url: str = SPOTIFY_API,
        timeout: float = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_env(cls) -> SpotifyClient:
        return cls(
            os.getenv("SPOTIFY_ACCESS_TOKEN", "").strip() or None,
            base_url=os.getenv("SPOTIFY_API_BASE", SPOTIFY_API),
        )

    @property
    def configured(self) -> bool:
        return bool(self.access_token)

    async def _get(self, path: str, params: dict | None = None) -> httpx.Response:
        if not self.configured:
            raise SpotifyNotConfigured("Spotify is not connected")

        headers = {"Authorization": f"Bearer {self.access_token}"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(f"{self.base_url}{path}", params=params, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("Spotify request %s failed: %s", path, exc)
            raise SpotifyError(f"Spotify request failed: {exc}") from exc

        if resp.status_code >= 400:
            logger.warning("Spotify %s returned %d", path, resp.status_code)
            raise SpotifyError(f"Spotify returned HTTP {resp.status_code}")
        return resp

    @staticmethod
    def _json(resp: httpx.Response) -> dict:
        try:
            data = resp.json()
        except ValueError as exc:
            logger.warning("Spotify returned a non-JSON body: %s", exc)
            raise SpotifyError("Spotify returned invalid JSON") from exc
        if not isinstance(data, dict):
            raise SpotifyError("Spotify returned invalid JSON")
        return data

    async def get_profile(self) -> dict:
        """The connected account's profile."""
        resp = await self._get("/me")
        data = self._json(resp)
        return {
            "id": data.get("id"),
            "display_name": data.get("display_name"),
            "product": data.get("product"),
        }

    async def get_currently_playing(self) -> dict | None:
        """The track playing right now, or ``None`` when nothing is."""
        resp = await self._get("/me/player/currently-playing")
        if resp.status_code == 204 or not resp.content:
            return None

        data = self._json(resp)
        item = data.get("item") or {}
        return {
            "is_playing": bool(data.get("is_playing")),
            "track_name": item.get("name"),
            "artist_name": ", ".join(a.get("name", "") for a in item.get("artists", [])),
            "progress_ms": data.get("progress_ms"),
        }

    async def get_top_tracks(self, limit: int = 10) -> list[dict]:
        resp = await self._get("/me/top/tracks", params={"limit": limit})
        return [
            {
                "track_name": item.get("name"),
                "artist_name": ", ".join(a.get("name", "") for a in item.get("artists", [])),
            }
            for item in self._json(resp).get("items", [])
        ]
