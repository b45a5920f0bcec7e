import logging
from functools import lru_cache

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from moodscale.config import Settings

logger = logging.getLogger(__name__)

MOOD_COLLECTION = "mood_entries"


@lru_cache
def _client_for(mongo_uri: str) -> MongoClient:
    # MongoClient connects lazily, so a missing server does not block startup
    logger.info("Creating MongoDB client")
    return MongoClient(mongo_uri)


def get_client(settings: Settings) -> MongoClient:
    return _client_for(settings.mongo_uri)


def get_database(settings: Settings) -> Database:
    return get_client(settings)[settings.db_name]


def get_mood_collection(settings: Settings) -> Collection:
    return get_database(settings)[MOOD_COLLECTION]

