from typing import Optional, Any
from pydantic import (
    BaseModel, Field, GetCoreSchemaHandler, GetJsonSchemaHandler, ConfigDict,
    AliasChoices, StrictInt, field_validator,
)
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from datetime import datetime, timezone
from bson import ObjectId

MOOD_MIN = 0
MOOD_MAX = 4
NOTE_MAX_LENGTH = 500
SONG_MAX_LENGTH = 200


class PyObjectId(ObjectId):

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:

        def validate_object_id(v: Any) -> ObjectId:
            if not ObjectId.is_valid(v):
                raise ValueError("Invalid objectid")
            return ObjectId(v)

        from_input_schema = core_schema.no_info_plain_validator_function(validate_object_id)

        return core_schema.json_or_python_schema(
            json_schema=from_input_schema,
            python_schema=core_schema.union_schema([
                core_schema.is_instance_schema(ObjectId),
                from_input_schema,
            ]),
            serialization=core_schema.to_string_ser_schema()
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, core_schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {'type': 'string'}


def blank_to_none(value: Any) -> Any:
    """Trim free text; an empty string means "no value"."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def as_utc(value: datetime) -> datetime:
    # pymongo hands back naive datetimes that are already UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class MoodEntry(BaseModel):
    id: PyObjectId = Field(validation_alias=AliasChoices("_id", "id"))
    mood: int = Field(..., ge=MOOD_MIN, le=MOOD_MAX)
    timestamp: datetime
    note: Optional[str] = None
    song: Optional[str] = None
    createdAt: datetime
    updatedAt: datetime

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    @field_validator("timestamp", "createdAt", "updatedAt")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class MoodEntryCreate(BaseModel):
    mood: StrictInt = Field(..., ge=MOOD_MIN, le=MOOD_MAX)
    note: Optional[str] = Field(None, max_length=NOTE_MAX_LENGTH)
    song: Optional[str] = Field(None, max_length=SONG_MAX_LENGTH)

    @field_validator("note", "song", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        return blank_to_none(value)


class MoodEntryCreated(BaseModel):
    entry: MoodEntry
    aiInsight: Optional[str] = None


class MoodEntryDeleted(BaseModel):
    message: str
    entry: MoodEntry
