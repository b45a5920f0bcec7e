import random
from typing import List, Optional

from moodscale.models.music import PlaylistMetadata, PlaylistTrack, SongRecommendations

TOP_ARTISTS = 5


def sample_audio_features(rng: Optional[random.Random] = None) -> dict:
    """Placeholder audio features.

    Nothing is measured: no audio-analysis integration exists yet, so the
    values are drawn at random inside the ranges a real analyser reports.
    """
    rng = rng or random.Random()
    return {
        "energy": rng.random(),
        "valence": rng.random(),
        "danceability": rng.random(),
        "tempo": 120 + rng.random() * 60,
    }


def unique_artists(tracks: List[PlaylistTrack]) -> List[str]:
    return list(dict.fromkeys(t.artist for t in tracks))


def year_range(tracks: List[PlaylistTrack]) -> str:
    years = [t.year for t in tracks if t.year is not None]
    if not years:
        return "Various"
    return f"{min(years)} - {max(years)}"


def build_playlist_metadata(
    tracks: List[PlaylistTrack], total_tracks: int, playlist_name: str
) -> PlaylistMetadata:
    artists = unique_artists(tracks)
    diversity = len(artists) / len(tracks) * 100 if tracks else 0.0
    return PlaylistMetadata(
        playlistName=playlist_name,
        totalTracks=total_tracks,
        analyzedTracks=len(tracks),
        uniqueArtists=len(artists),
        yearRange=year_range(tracks),
        artistDiversity=f"{diversity:.1f}%",
        topArtists=artists[:TOP_ARTISTS],
    )


def fallback_recommendations(mood: int) -> SongRecommendations:
    upbeat = mood >= 3
    songs = [
        {
            "title": "Here Comes the Sun",
            "artist": "The Beatles",
            "reason": "A timeless uplifting classic that brightens any mood.",
            "energy": 3.8,
            "mood_match": 4.0,
        },
        {
            "title": "Good as Hell",
            "artist": "Lizzo",
            "reason": "Empowering and energetic, perfect for self-love.",
            "energy": 4.5,
            "mood_match": 4.2 if upbeat else 3.0,
        },
        {
            "title": "Weightless",
            "artist": "Marconi Union",
            "reason": "Scientifically designed to reduce anxiety and stress.",
            "energy": 1.5,
            "mood_match": 4.0 if mood <= 2 else 2.5,
        },
    ]
    return SongRecommendations(
        recommendations=songs[:2] if upbeat else songs,
        playlist_vibe="Upbeat and energizing vibes" if upbeat else "Calming and restorative atmosphere",
    )
