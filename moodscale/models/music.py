from pydantic import BaseModel, Field, StrictInt, field_validator
from typing import Any, List, Optional

from moodscale.models.mood import MOOD_MIN, MOOD_MAX, NOTE_MAX_LENGTH, blank_to_none


class MusicAnalyzeRequest(BaseModel):
    songUrl: str
    title: Optional[str] = None
    artist: Optional[str] = None

    @field_validator("title", "artist", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        return blank_to_none(value)


class MusicAnalysis(BaseModel):
    title: str
    artist: str
    energy: float
    valence: float
    danceability: float
    tempo: float
    moodPrediction: str


class PlaylistTrack(BaseModel):
    title: str = Field(..., min_length=1)
    artist: str = Field(..., min_length=1)
    album: Optional[str] = None
    year: Optional[int] = None
    duration: Optional[int] = None  # seconds
    genre: Optional[str] = None


class PlaylistAnalyzeRequest(BaseModel):
    spotifyUrl: Optional[str] = None
    tracks: Optional[List[PlaylistTrack]] = None

    @field_validator("spotifyUrl", mode="before")
    @classmethod
    def _strip_url(cls, value: Any) -> Any:
        return blank_to_none(value)


class PlaylistMetadata(BaseModel):
    playlistName: str
    totalTracks: int
    analyzedTracks: int
    uniqueArtists: int
    yearRange: str
    artistDiversity: str
    topArtists: List[str]


class SongRecommendationRequest(BaseModel):
    mood: StrictInt = Field(..., ge=MOOD_MIN, le=MOOD_MAX)
    note: Optional[str] = Field(None, max_length=NOTE_MAX_LENGTH)
    genre: Optional[str] = None
    previousSongs: Optional[List[str]] = None

    @field_validator("note", "genre", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        return blank_to_none(value)


class SongRecommendation(BaseModel):
    title: str
    artist: str
    reason: str = ""
    energy: Optional[float] = None
    mood_match: Optional[float] = None


class SongRecommendations(BaseModel):
    recommendations: List[SongRecommendation] = Field(..., min_length=1)
    playlist_vibe: str
