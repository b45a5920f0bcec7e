import logging
from typing import List

from fastapi import APIRouter, Depends, Query

from moodscale.db.mood_repository import MAX_LIST_LIMIT, MoodRepository
from moodscale.errors import MoodScaleError
from moodscale.models.mood import MoodEntry, MoodEntryCreate, MoodEntryCreated, MoodEntryDeleted
from moodscale.routers.dependencies import get_ai_service, get_mood_repository
from moodscale.services.ai_service import AIService
from moodscale.services.prompts import mood_insight_prompt

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/moods",
    tags=["Moods"]
)


@router.get("", response_model=List[MoodEntry])
async def list_moods(
    limit: int = Query(MAX_LIST_LIMIT, ge=1, le=MAX_LIST_LIMIT, description="Maximum number of entries"),
    repo: MoodRepository = Depends(get_mood_repository),
):
    return repo.list_recent(limit)


@router.post("", response_model=MoodEntryCreated)
async def create_mood(
    request: MoodEntryCreate,
    repo: MoodRepository = Depends(get_mood_repository),
    ai: AIService = Depends(get_ai_service),
):
    entry = repo.create(request.mood, note=request.note, song=request.song)

    # The entry is already saved; a failed insight must not fail the request
    ai_insight = None
    if ai.enabled:
        try:
            ai_insight = await ai.generate_text(mood_insight_prompt(entry.mood, entry.note))
        except MoodScaleError as e:
            logger.warning("AI insight generation failed for %s: %s", entry.id, e.message)

    return MoodEntryCreated(entry=entry, aiInsight=ai_insight)


@router.delete("/{entry_id}", response_model=MoodEntryDeleted)
async def delete_mood(
    entry_id: str,
    repo: MoodRepository = Depends(get_mood_repository),
):
    entry = repo.delete_by_id(entry_id)
    return MoodEntryDeleted(message="Mood entry deleted successfully", entry=entry)
