from datetime import datetime, time, timedelta, timezone

import mongomock
import pytest
from fastapi.testclient import TestClient

from moodscale.config import Settings
from moodscale.db.mood_repository import MoodRepository
from moodscale.errors import ServiceUnavailableError
from moodscale.main import create_app
from moodscale.routers.dependencies import get_ai_service, get_mood_repository
from moodscale.services.ai_service import parse_json_response


class FakeAIService:
    """Stands in for the Gemini gateway; replies are served in order."""

    def __init__(self, replies=None, enabled=True, error=None):
        self.replies = list(replies or [])
        self.enabled = enabled
        self.error = error
        self.prompts = []

    async def generate_text(self, prompt):
        if not self.enabled:
            raise ServiceUnavailableError("AI service not configured")
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.replies.pop(0).strip() if self.replies else ""

    async def generate_json(self, prompt):
        return parse_json_response(await self.generate_text(prompt))


def day_at_noon(days_ago: int) -> datetime:
    today = datetime.now(timezone.utc).date()
    return datetime.combine(today - timedelta(days=days_ago), time(12, 0), tzinfo=timezone.utc)


@pytest.fixture
def collection():
    return mongomock.MongoClient().moodscale_test.mood_entries


@pytest.fixture
def repo(collection):
    return MoodRepository(collection)


@pytest.fixture
def ai():
    return FakeAIService()


@pytest.fixture
def app(repo, ai):
    app = create_app(Settings())
    app.dependency_overrides[get_mood_repository] = lambda: repo
    app.dependency_overrides[get_ai_service] = lambda: ai
    return app


@pytest.fixture
def client(app):
    return TestClient(app)
