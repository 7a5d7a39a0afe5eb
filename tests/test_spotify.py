"""
tests/test_spotify.py — Music-service client and passthrough routes
====================================================================

The Spotify API is replaced by an ``httpx.MockTransport``; no network
traffic leaves the test.
"""

from __future__ import annotations

import asyncio

import httpx
import pytest

from vibesync.services.spotify_client import (
    SpotifyClient,
    SpotifyError,
    SpotifyNotConfigured,
)


def run_async(coro):
    """Run an async coroutine to completion without pytest-asyncio."""
    return asyncio.run(coro)


def _client(handler) -> SpotifyClient:
    return SpotifyClient(
        "test-token",
        base_url="https://spotify.test/v1",
        transport=httpx.MockTransport(handler),
    )


PLAYING = {
    "is_playing": True,
    "progress_ms": 42000,
    "item": {"name": "Midnight City", "artists": [{"name": "M83"}]},
}


# ===========================================================================
# Client
# ===========================================================================
class TestSpotifyClient:
    def test_sends_bearer_token(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers["Authorization"]
            seen["path"] = request.url.path
            return httpx.Response(200, json={"id": "u1", "display_name": "Ada", "product": "premium"})

        profile = run_async(_client(handler).get_profile())
        assert profile == {"id": "u1", "display_name": "Ada", "product": "premium"}
        assert seen == {"auth": "Bearer test-token", "path": "/v1/me"}

    def test_currently_playing(self):
        client = _client(lambda request: httpx.Response(200, json=PLAYING))
        track = run_async(client.get_currently_playing())
        assert track == {
            "is_playing": True,
            "track_name": "Midnight City",
            "artist_name": "M83",
            "progress_ms": 42000,
        }

    def test_nothing_playing(self):
        client = _client(lambda request: httpx.Response(204))
        assert run_async(client.get_currently_playing()) is None

    def test_top_tracks_limit(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["limit"] == "2"
            return httpx.Response(200, json={"items": [
                {"name": "A", "artists": [{"name": "X"}, {"name": "Y"}]},
                {"name": "B", "artists": []},
            ]})

        tracks = run_async(_client(handler).get_top_tracks(2))
        assert tracks == [
            {"track_name": "A", "artist_name": "X, Y"},
            {"track_name": "B", "artist_name": ""},
        ]

    def test_upstream_error(self):
        client = _client(lambda request: httpx.Response(401, json={"error": "expired"}))
        with pytest.raises(SpotifyError, match="401"):
            run_async(client.get_profile())

    def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("down", request=request)

        with pytest.raises(SpotifyError):
            run_async(_client(handler).get_profile())

    def test_invalid_json_body(self):
        client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))
        with pytest.raises(SpotifyError, match="invalid JSON"):
            run_async(client.get_profile())

    def test_non_object_json_body(self):
        client = _client(lambda request: httpx.Response(200, json=["not", "a", "dict"]))
        with pytest.raises(SpotifyError, match="invalid JSON"):
            run_async(client.get_top_tracks())

    def test_failed_request_is_not_retried(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.path)
            raise httpx.ConnectError("down", request=request)

        with pytest.raises(SpotifyError):
            run_async(_client(handler).get_currently_playing())
        assert calls == ["/v1/me/player/currently-playing"]

    def test_not_configured(self):
        with pytest.raises(SpotifyNotConfigured):
            run_async(SpotifyClient(None).get_profile())

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SPOTIFY_ACCESS_TOKEN", "  abc  ")
        monkeypatch.setenv("SPOTIFY_API_BASE", "https://example.test/v1/")
        client = SpotifyClient.from_env()
        assert client.configured
        assert client.access_token == "abc"
        assert client.base_url == "https://example.test/v1"


# ===========================================================================
# Routes
# ===========================================================================
class TestSpotifyRoutes:
    def test_unconfigured_is_503(self, client):
        resp = client.get("/api/spotify/profile")
        assert resp.status_code == 503

    def test_upstream_error_is_502(self, client):
        from vibesync.api.deps import get_spotify
        from vibesync.api.main import app

        app.dependency_overrides[get_spotify] = lambda: _client(
            lambda request: httpx.Response(500)
        )
        resp = client.get("/api/spotify/top-tracks")
        assert resp.status_code == 502

    def test_html_body_is_502(self, client):
        from vibesync.api.deps import get_spotify
        from vibesync.api.main import app

        app.dependency_overrides[get_spotify] = lambda: _client(
            lambda request: httpx.Response(200, text="<html>oops</html>")
        )
        resp = client.get("/api/spotify/profile")
        assert resp.status_code == 502
        assert "invalid JSON" in resp.json()["detail"]

    def test_currently_playing_passthrough(self, client):
        from vibesync.api.deps import get_spotify
        from vibesync.api.main import app

        app.dependency_overrides[get_spotify] = lambda: _client(
            lambda request: httpx.Response(200, json=PLAYING)
        )
        resp = client.get("/api/spotify/currently-playing")
        assert resp.status_code == 200
        assert resp.json()["track_name"] == "Midnight City"

    def test_top_tracks_limit_validation(self, client):
        assert client.get("/api/spotify/top-tracks", params={"limit": 0}).status_code == 422
