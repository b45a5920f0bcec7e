import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import httpx

from moodscale.config import Settings
from moodscale.errors import UpstreamError
from moodscale.models.music import PlaylistTrack

logger = logging.getLogger(__name__)

TOKEN_URL = "https://accounts.spotify.com/api/token"
API_BASE_URL = "https://api.spotify.com/v1"
MAX_FETCHED_TRACKS = 50

FETCH_FAILED_MESSAGE = (
    "Failed to fetch playlist from Spotify. "
    "Please check the URL and make sure the playlist is public."
)

# Checked in order, first match wins
PLAYLIST_ID_PATTERNS: List[Tuple[re.Pattern, Callable[[re.Match], str]]] = [
    (re.compile(r"spotify:playlist:([a-zA-Z0-9]+)"), lambda m: m.group(1)),
    (re.compile(r"open\.spotify\.com/playlist/([a-zA-Z0-9]+)"), lambda m: m.group(1)),
    (re.compile(r"^([a-zA-Z0-9]+)$"), lambda m: m.group(1)),
]


def extract_playlist_id(url_or_id: str) -> Optional[str]:
    value = (url_or_id or "").strip()
    for pattern, extract in PLAYLIST_ID_PATTERNS:
        match = pattern.search(value)
        if match:
            return extract(match)
    return None


def _release_year(release_date: Optional[str]) -> Optional[int]:
    # "2019", "2019-06" and "2019-06-21" are all valid release dates
    if release_date and release_date[:4].isdigit():
        return int(release_date[:4])
    return None


def track_from_item(item: dict) -> Optional[PlaylistTrack]:
    track = item.get("track")
    if not track or not track.get("name"):
        return None

    album = track.get("album") or {}
    duration_ms = track.get("duration_ms")
    return PlaylistTrack(
        title=track["name"],
        artist=", ".join(a["name"] for a in track.get("artists") or [] if a.get("name")) or "Unknown Artist",
        album=album.get("name") or None,
        year=_release_year(album.get("release_date")),
        duration=duration_ms // 1000 if duration_ms is not None else None,
    )


@dataclass
class PlaylistTracks:
    tracks: List[PlaylistTrack]
    total_tracks: int
    playlist_name: str


class SpotifyService:
    """Gateway to the Spotify Web API using the client-credentials flow."""

    def __init__(
        self,
        client_id: Optional[str],
        client_secret: Optional[str],
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.http_client = http_client

    @classmethod
    def from_settings(cls, settings: Settings) -> "SpotifyService":
        return cls(settings.spotify_client_id, settings.spotify_client_secret)

    @property
    def enabled(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def _client(self) -> httpx.AsyncClient:
        return self.http_client or httpx.AsyncClient()

    async def get_access_token(self) -> Optional[str]:
        if not self.enabled:
            logger.info("Spotify credentials not configured")
            return None

        try:
            client = self._client()
            try:
                resp = await client.post(
                    TOKEN_URL,
                    data={"grant_type": "client_credentials"},
                    auth=(self.client_id, self.client_secret),
                )
            finally:
                if client is not self.http_client:
                    await client.aclose()
            resp.raise_for_status()
            return resp.json()["access_token"]
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.error("Error getting Spotify access token: %s", e)
            raise UpstreamError("Failed to authenticate with Spotify", status_code=400) from e

    async def get_playlist_tracks(self, playlist_id: str, access_token: str) -> PlaylistTracks:
        headers = {"Authorization": f"Bearer {access_token}"}
        client = self._client()
        try:
            info = await client.get(
                f"{API_BASE_URL}/playlists/{playlist_id}",
                headers=headers,
                params={"fields": "name,tracks(total)"},
            )
            info.raise_for_status()
            info_data = info.json()

            # Only the first page is analysed; the total is still reported
            items = await client.get(
                f"{API_BASE_URL}/playlists/{playlist_id}/tracks",
                headers=headers,
                params={
                    "limit": MAX_FETCHED_TRACKS,
                    "fields": "items(track(name,artists(name),album(name,release_date),duration_ms))",
                },
            )
            items.raise_for_status()
            items_data = items.json()

            tracks = []
            for item in items_data.get("items") or []:
                track = track_from_item(item)
                if track is not None:
                    tracks.append(track)

            return PlaylistTracks(
                tracks=tracks[:MAX_FETCHED_TRACKS],
                total_tracks=info_data["tracks"]["total"],
                playlist_name=info_data.get("name") or "",
            )
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            logger.error("Error fetching Spotify playlist %s: %s", playlist_id, e)
            raise UpstreamError(FETCH_FAILED_MESSAGE, status_code=400) from e
        finally:
            if client is not self.http_client:
                await client.aclose()
