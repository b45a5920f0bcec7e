from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId

from moodscale.errors import UpstreamError


def test_health(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "OK"
    assert body["timestamp"].endswith("Z")


def test_create_mood_returns_entry_and_insight(client, ai, collection):
    ai.replies = ["Every small step counts. Be gentle with yourself today."]

    resp = client.post("/api/moods", json={"mood": 1, "note": "tired", "song": " Weightless "})

    assert resp.status_code == 200
    body = resp.json()
    assert body["aiInsight"] == "Every small step counts. Be gentle with yourself today."
    entry = body["entry"]
    assert entry["mood"] == 1
    assert entry["note"] == "tired"
    assert entry["song"] == "Weightless"
    assert ObjectId.is_valid(entry["id"])
    assert '"sad" mood with the note: "tired"' in ai.prompts[0]
    assert collection.count_documents({}) == 1


def test_create_mood_without_ai_has_null_insight(client, ai):
    ai.enabled = False

    resp = client.post("/api/moods", json={"mood": 4})

    assert resp.status_code == 200
    assert resp.json()["aiInsight"] is None
    assert resp.json()["entry"]["note"] is None
    assert ai.prompts == []


def test_create_mood_keeps_entry_when_ai_fails(client, ai, collection):
    ai.error = UpstreamError("AI request failed: quota exceeded")

    resp = client.post("/api/moods", json={"mood": 2})

    assert resp.status_code == 200
    assert resp.json()["aiInsight"] is None
    assert collection.count_documents({}) == 1


@pytest.mark.parametrize("body", [
    {"mood": -1},
    {"mood": 5},
    {"mood": 2.5},
    {"mood": "3"},
    {"mood": True},
    {"mood": None},
    {"note": "no mood"},
])
def test_create_mood_rejects_invalid_mood(client, collection, body):
    resp = client.post("/api/moods", json=body)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Mood must be an integer between 0 and 4"}
    assert collection.count_documents({}) == 0


def test_create_mood_rejects_overlong_note(client, collection):
    resp = client.post("/api/moods", json={"mood": 2, "note": "x" * 501})

    assert resp.status_code == 400
    assert "error" in resp.json()
    assert collection.count_documents({}) == 0


def test_list_moods_newest_first_and_capped(client, repo):
    base = datetime(2026, 5, 1, tzinfo=timezone.utc)
    for i in range(60):
        repo.create(i % 5, timestamp=base + timedelta(minutes=i))
    repo.delete_by_id(str(repo.list_recent(1)[0].id))

    resp = client.get("/api/moods")

    assert resp.status_code == 200
    entries = resp.json()
    assert len(entries) == 50
    stamps = [e["timestamp"] for e in entries]
    assert stamps == sorted(stamps, reverse=True)


def test_list_moods_honours_limit(client, repo):
    for mood in range(4):
        repo.create(mood)

    resp = client.get("/api/moods", params={"limit": 2})

    assert resp.status_code == 200
    assert len(resp.json()) == 2


def test_delete_mood(client, repo):
    entry = repo.create(3, note="sunny")

    resp = client.delete(f"/api/moods/{entry.id}")

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Mood entry deleted successfully"
    assert body["entry"]["id"] == str(entry.id)
    assert repo.list_all() == []


@pytest.mark.parametrize("entry_id", [str(ObjectId()), "nope"])
def test_delete_missing_mood_returns_404(client, repo, entry_id):
    repo.create(3)

    resp = client.delete(f"/api/moods/{entry_id}")

    assert resp.status_code == 404
    assert resp.json() == {"error": "Mood entry not found"}
    assert len(repo.list_all()) == 1


def test_framework_errors_use_error_body(client):
    resp = client.delete("/api/moods")

    assert resp.status_code == 405
    assert resp.json() == {"error": "Method Not Allowed"}


def test_unknown_route_uses_error_body(client):
    resp = client.get("/api/does-not-exist")

    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}
