"""Record Store for mood entries.

A thin wrapper over a single MongoDB collection. Entries are created and
deleted, never updated; every read is sorted by ``timestamp`` descending.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.collection import Collection

from moodscale.errors import NotFoundError, ValidationError
from moodscale.models.mood import (
    MoodEntry, MOOD_MIN, MOOD_MAX, NOTE_MAX_LENGTH, SONG_MAX_LENGTH, blank_to_none,
)

logger = logging.getLogger(__name__)

MAX_LIST_LIMIT = 50
MOOD_RANGE_MESSAGE = f"Mood must be an integer between {MOOD_MIN} and {MOOD_MAX}"


def utc_now() -> datetime:
    return to_storage_time(datetime.now(timezone.utc))


def to_storage_time(value: datetime) -> datetime:
    """Naive UTC at millisecond precision, which is what BSON keeps."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def validate_mood(mood) -> int:
    # bool is an int subclass; True is not a mood
    if isinstance(mood, bool) or not isinstance(mood, int):
        raise ValidationError(MOOD_RANGE_MESSAGE)
    if not MOOD_MIN <= mood <= MOOD_MAX:
        raise ValidationError(MOOD_RANGE_MESSAGE)
    return mood


def _bounded_text(name: str, value: Optional[str], max_length: int) -> Optional[str]:
    value = blank_to_none(value)
    if value is not None and len(value) > max_length:
        raise ValidationError(f"{name.capitalize()} must be at most {max_length} characters")
    return value


class MoodRepository:
    def __init__(self, collection: Collection):
        self.collection = collection

    def create(
        self,
        mood: int,
        note: Optional[str] = None,
        song: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> MoodEntry:
        mood = validate_mood(mood)
        note = _bounded_text("note", note, NOTE_MAX_LENGTH)
        song = _bounded_text("song", song, SONG_MAX_LENGTH)

        now = utc_now()
        document = {
            "mood": mood,
            "timestamp": to_storage_time(timestamp) if timestamp else now,
            "createdAt": now,
            "updatedAt": now,
        }
        # Absent, not empty: consumers never see ""
        if note is not None:
            document["note"] = note
        if song is not None:
            document["song"] = song

        result = self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info("Saved mood entry %s (mood=%d)", result.inserted_id, mood)
        return MoodEntry.model_validate(document)

    def list_recent(self, limit: int = MAX_LIST_LIMIT) -> List[MoodEntry]:
        limit = max(1, min(limit, MAX_LIST_LIMIT))
        cursor = self.collection.find().sort("timestamp", DESCENDING).limit(limit)
        return [MoodEntry.model_validate(doc) for doc in cursor]

    def list_all(self) -> List[MoodEntry]:
        cursor = self.collection.find().sort("timestamp", DESCENDING)
        return [MoodEntry.model_validate(doc) for doc in cursor]

    def delete_by_id(self, entry_id: str) -> MoodEntry:
        if not ObjectId.is_valid(entry_id):
            raise NotFoundError("Mood entry not found")

        deleted = self.collection.find_one_and_delete({"_id": ObjectId(entry_id)})
        if deleted is None:
            raise NotFoundError("Mood entry not found")

        logger.info("Deleted mood entry %s", entry_id)
        return MoodEntry.model_validate(deleted)
