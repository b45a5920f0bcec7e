import logging
import random

from fastapi import APIRouter, Depends
from pydantic import ValidationError as PydanticValidationError

from moodscale.errors import MoodScaleError, ServiceUnavailableError
from moodscale.models.music import (
    MusicAnalysis, MusicAnalyzeRequest, SongRecommendationRequest, SongRecommendations,
)
from moodscale.routers.dependencies import get_ai_service, get_random
from moodscale.services.ai_service import AIService, ParseOk
from moodscale.services.music_service import fallback_recommendations, sample_audio_features
from moodscale.services.prompts import mood_prediction_prompt, song_recommendation_prompt

logger = logging.getLogger(__name__)

DEFAULT_MOOD_PREDICTION = "Neutral"

router = APIRouter(
    prefix="/api",
    tags=["Music"]
)


@router.post("/music/analyze", response_model=MusicAnalysis)
async def analyze_music(
    request: MusicAnalyzeRequest,
    ai: AIService = Depends(get_ai_service),
    rng: random.Random = Depends(get_random),
):
    title = request.title or "Unknown Song"
    artist = request.artist or "Unknown Artist"
    features = sample_audio_features(rng)

    prediction = DEFAULT_MOOD_PREDICTION
    if ai.enabled:
        try:
            prediction = await ai.generate_text(mood_prediction_prompt(features, title, artist))
        except MoodScaleError as e:
            logger.warning("AI mood prediction failed for %s: %s", request.songUrl, e.message)
        prediction = prediction or DEFAULT_MOOD_PREDICTION

    return MusicAnalysis(title=title, artist=artist, moodPrediction=prediction, **features)


@router.post("/recommend-songs")
async def recommend_songs(
    request: SongRecommendationRequest,
    ai: AIService = Depends(get_ai_service),
):
    if not ai.enabled:
        raise ServiceUnavailableError("AI service not configured")

    prompt = song_recommendation_prompt(
        request.mood, request.note, request.genre, request.previousSongs
    )
    try:
        result = await ai.generate_json(prompt)
    except MoodScaleError as e:
        logger.warning("AI song recommendation failed: %s", e.message)
        return fallback_recommendations(request.mood)

    if isinstance(result, ParseOk):
        try:
            SongRecommendations.model_validate(result.value)
            # Shape checked; extra keys from the model are passed through
            return result.value
        except PydanticValidationError as e:
            logger.warning("AI recommendations have an unexpected shape: %s", e)
    return fallback_recommendations(request.mood)
