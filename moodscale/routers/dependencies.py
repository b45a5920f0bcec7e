import random

from fastapi import Depends, Request

from moodscale.config import Settings
from moodscale.db.database import get_mood_collection
from moodscale.db.mood_repository import MoodRepository
from moodscale.services.ai_service import AIService
from moodscale.services.spotify_service import SpotifyService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_mood_repository(settings: Settings = Depends(get_settings)) -> MoodRepository:
    return MoodRepository(get_mood_collection(settings))


def get_ai_service(request: Request) -> AIService:
    return request.app.state.ai_service


def get_spotify_service(request: Request) -> SpotifyService:
    return request.app.state.spotify_service


def get_random() -> random.Random:
    return random.Random()
