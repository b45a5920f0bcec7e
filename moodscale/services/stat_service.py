from collections import OrderedDict
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, List, Optional

from moodscale.models.mood import MoodEntry
from moodscale.models.stat import DailyAverage

RECENT_DAYS_FOR_AI = 7
DAILY_AVERAGES_RETURNED = 30
RECENT_NOTES_FOR_AI = 3

EMPTY_INSIGHTS = ["Start tracking your mood to get personalized insights!"]
EMPTY_RECOMMENDATIONS = ["Record your first mood entry to begin your journey."]
EMPTY_AVERAGE_MOOD = 2.0

DEFAULT_RECOMMENDATIONS = [
    "Keep tracking your mood daily for better insights!",
    "Try to identify patterns in your mood changes.",
]


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def entry_day(entry: MoodEntry) -> date:
    return entry.timestamp.astimezone(timezone.utc).date()


def compute_daily_averages(entries: Iterable[MoodEntry]) -> List[DailyAverage]:
    """Group entries by UTC calendar day, most recent day first."""
    by_day = OrderedDict()
    for entry in entries:
        by_day.setdefault(entry_day(entry), []).append(entry.mood)

    rows = [
        DailyAverage(
            date=day.isoformat(),
            averageMood=sum(moods) / len(moods),
            entryCount=len(moods),
        )
        for day, moods in by_day.items()
    ]
    rows.sort(key=lambda row: row.date, reverse=True)
    return rows


def calculate_streak(days: Iterable[date], today: Optional[date] = None) -> int:
    """Consecutive days with entries, walking back from today. A gap ends it."""
    if today is None:
        today = utc_today()

    active = set(days)
    streak = 0
    check_date = today
    while check_date in active:
        streak += 1
        check_date -= timedelta(days=1)
    return streak


def overall_average(daily: List[DailyAverage]) -> float:
    # Average of daily averages, not of raw entries
    if not daily:
        return EMPTY_AVERAGE_MOOD
    return sum(row.averageMood for row in daily) / len(daily)


def templated_insights(average: float, streak: int, total_days: int) -> List[str]:
    return [
        f"Your average daily mood is {average:.1f}/4 across {total_days} days.",
        f"You have a {streak}-day tracking streak!",
    ]


def recent_notes(entries: List[MoodEntry], limit: int = RECENT_NOTES_FOR_AI) -> List[str]:
    """Notes among the most recent entries; entries must be newest first."""
    return [e.note for e in entries[:limit] if e.note]
