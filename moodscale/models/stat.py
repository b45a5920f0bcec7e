from pydantic import BaseModel
from typing import List


class DailyAverage(BaseModel):
    date: str  # YYYY-MM-DD, UTC calendar day
    averageMood: float
    entryCount: int


class InsightsResponse(BaseModel):
    insights: List[str]
    recommendations: List[str]
    # Mean of the daily averages, so each day weighs the same
    averageMood: float
    streak: int
    totalDays: int
    dailyAverages: List[DailyAverage]
