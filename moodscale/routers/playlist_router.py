import logging
from typing import List

from fastapi import APIRouter, Depends

from moodscale.errors import ParseError, ServiceUnavailableError, UpstreamError, ValidationError
from moodscale.models.music import PlaylistAnalyzeRequest, PlaylistTrack
from moodscale.routers.dependencies import get_ai_service, get_spotify_service
from moodscale.services.ai_service import AIService, ParseOk
from moodscale.services.music_service import build_playlist_metadata
from moodscale.services.prompts import playlist_personality_prompt
from moodscale.services.spotify_service import MAX_FETCHED_TRACKS, SpotifyService, extract_playlist_id

logger = logging.getLogger(__name__)

MIN_MANUAL_TRACKS = 3
MANUAL_PLAYLIST_NAME = "Manual Playlist"

router = APIRouter(
    prefix="/api/playlist",
    tags=["Playlist"]
)


async def _load_spotify_tracks(spotify: SpotifyService, spotify_url: str):
    playlist_id = extract_playlist_id(spotify_url)
    if not playlist_id:
        raise ValidationError(
            "Invalid Spotify URL. Please provide a valid Spotify playlist URL or ID."
        )

    access_token = await spotify.get_access_token()
    if not access_token:
        raise ValidationError(
            "Spotify integration not configured. "
            "Please set SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET."
        )

    data = await spotify.get_playlist_tracks(playlist_id, access_token)
    return data.tracks, data.total_tracks, data.playlist_name


def _manual_tracks(tracks: List[PlaylistTrack]):
    if len(tracks) < MIN_MANUAL_TRACKS:
        raise ValidationError(f"Please provide at least {MIN_MANUAL_TRACKS} tracks.")
    return tracks[:MAX_FETCHED_TRACKS], len(tracks), MANUAL_PLAYLIST_NAME


@router.post("/analyze")
async def analyze_playlist(
    request: PlaylistAnalyzeRequest,
    ai: AIService = Depends(get_ai_service),
    spotify: SpotifyService = Depends(get_spotify_service),
):
    if request.spotifyUrl and request.tracks:
        raise ValidationError("Provide either a Spotify playlist URL or an array of tracks, not both.")

    if request.spotifyUrl:
        tracks, total_tracks, playlist_name = await _load_spotify_tracks(spotify, request.spotifyUrl)
    elif request.tracks:
        tracks, total_tracks, playlist_name = _manual_tracks(request.tracks)
    else:
        raise ValidationError("Please provide either a Spotify playlist URL or an array of tracks.")

    if not tracks:
        raise ValidationError("No tracks found in the playlist.")

    if not ai.enabled:
        raise ServiceUnavailableError("AI service not configured")

    metadata = build_playlist_metadata(tracks, total_tracks, playlist_name)
    prompt = playlist_personality_prompt(tracks, metadata.model_dump())

    try:
        result = await ai.generate_json(prompt)
    except UpstreamError as e:
        raise UpstreamError("Failed to analyze playlist", status_code=500) from e

    if not isinstance(result, ParseOk) or not isinstance(result.value, dict):
        raise ParseError("Failed to analyze playlist - invalid AI response format")

    logger.info("Analyzed playlist %r (%d tracks)", playlist_name, len(tracks))
    return {**result.value, "playlistMetadata": metadata.model_dump()}
