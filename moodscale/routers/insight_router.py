import logging

from fastapi import APIRouter, Depends

from moodscale.db.mood_repository import MoodRepository
from moodscale.errors import MoodScaleError
from moodscale.models.stat import InsightsResponse
from moodscale.routers.dependencies import get_ai_service, get_mood_repository
from moodscale.services.ai_service import AIService, ParseOk
from moodscale.services.prompts import insights_prompt
from moodscale.services import stat_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Insights"]
)


def _string_list(value) -> list:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item]


@router.get("/insights", response_model=InsightsResponse)
async def get_insights(
    repo: MoodRepository = Depends(get_mood_repository),
    ai: AIService = Depends(get_ai_service),
):
    entries = repo.list_all()

    if not entries:
        return InsightsResponse(
            insights=stat_service.EMPTY_INSIGHTS,
            recommendations=stat_service.EMPTY_RECOMMENDATIONS,
            averageMood=stat_service.EMPTY_AVERAGE_MOOD,
            streak=0,
            totalDays=0,
            dailyAverages=[],
        )

    daily = stat_service.compute_daily_averages(entries)
    streak = stat_service.calculate_streak(stat_service.entry_day(e) for e in entries)
    average = stat_service.overall_average(daily)

    insights = stat_service.templated_insights(average, streak, len(daily))
    recommendations = list(stat_service.DEFAULT_RECOMMENDATIONS)

    if ai.enabled:
        prompt = insights_prompt(
            [row.averageMood for row in daily[:stat_service.RECENT_DAYS_FOR_AI]],
            average,
            streak,
            len(daily),
            stat_service.recent_notes(entries),
        )
        try:
            result = await ai.generate_json(prompt)
        except MoodScaleError as e:
            logger.warning("AI insights generation failed: %s", e.message)
            result = None

        if isinstance(result, ParseOk) and isinstance(result.value, dict):
            insights = _string_list(result.value.get("insights"))
            recommendations = _string_list(result.value.get("recommendations"))
        elif result is not None:
            logger.warning("Using templated insights, AI response was unusable")

    return InsightsResponse(
        insights=insights,
        recommendations=recommendations,
        averageMood=average,
        streak=streak,
        totalDays=len(daily),
        dailyAverages=daily[:stat_service.DAILY_AVERAGES_RETURNED],
    )
