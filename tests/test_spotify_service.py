import asyncio

import httpx
import pytest

from moodscale.errors import UpstreamError
from moodscale.services.spotify_service import SpotifyService, extract_playlist_id, track_from_item

PLAYLIST_ID = "37i9dQZF1DXcBWIGoYBM5M"


def playlist_handler(calls):
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if request.url.host == "accounts.spotify.com":
            assert request.headers["Authorization"].startswith("Basic ")
            return httpx.Response(200, json={"access_token": "tok", "token_type": "Bearer"})
        assert request.headers["Authorization"] == "Bearer tok"
        if request.url.path.endswith("/tracks"):
            assert request.url.params["limit"] == "50"
            return httpx.Response(200, json={"items": [
                {"track": {
                    "name": "Levitating",
                    "artists": [{"name": "Dua Lipa"}, {"name": "DaBaby"}],
                    "album": {"name": "Future Nostalgia", "release_date": "2020-03-27"},
                    "duration_ms": 203064,
                }},
                {"track": None},
                {"track": {
                    "name": "Blinding Lights",
                    "artists": [{"name": "The Weeknd"}],
                    "album": {"name": "After Hours", "release_date": "2020"},
                    "duration_ms": 200040,
                }},
            ]})
        return httpx.Response(200, json={"name": "Today's Top Hits", "tracks": {"total": 120}})
    return handler


def make_service(handler, client_id="id", client_secret="secret"):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SpotifyService(client_id, client_secret, http_client=client)


@pytest.mark.parametrize("value, expected", [
    (f"spotify:playlist:{PLAYLIST_ID}", PLAYLIST_ID),
    (f"https://open.spotify.com/playlist/{PLAYLIST_ID}?si=abc123", PLAYLIST_ID),
    (f"  {PLAYLIST_ID}  ", PLAYLIST_ID),
    ("https://example.com/playlist/123", None),
    ("https://open.spotify.com/album/abc", None),
    ("", None),
])
def test_extract_playlist_id(value, expected):
    assert extract_playlist_id(value) == expected


def test_access_token_is_none_when_unconfigured():
    calls = []
    service = make_service(playlist_handler(calls), client_id=None)

    assert asyncio.run(service.get_access_token()) is None
    assert calls == []


def test_fetch_playlist_tracks():
    calls = []
    service = make_service(playlist_handler(calls))

    async def run():
        token = await service.get_access_token()
        return await service.get_playlist_tracks(PLAYLIST_ID, token)

    data = asyncio.run(run())

    assert data.playlist_name == "Today's Top Hits"
    assert data.total_tracks == 120
    assert [t.title for t in data.tracks] == ["Levitating", "Blinding Lights"]
    first = data.tracks[0]
    assert first.artist == "Dua Lipa, DaBaby"
    assert first.album == "Future Nostalgia"
    assert first.year == 2020
    assert first.duration == 203
    assert len(calls) == 3


def test_fetch_failure_raises_upstream_error():
    service = make_service(lambda request: httpx.Response(404, json={"error": "not found"}))

    with pytest.raises(UpstreamError) as excinfo:
        asyncio.run(service.get_playlist_tracks(PLAYLIST_ID, "tok"))
    assert excinfo.value.status_code == 400


def test_token_failure_raises_upstream_error():
    service = make_service(lambda request: httpx.Response(401, json={"error": "invalid_client"}))

    with pytest.raises(UpstreamError):
        asyncio.run(service.get_access_token())


def test_track_from_item_skips_missing_tracks():
    assert track_from_item({"track": None}) is None
    assert track_from_item({"track": {"name": ""}}) is None
