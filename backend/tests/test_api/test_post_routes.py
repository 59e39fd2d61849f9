"""Tests for post editing, publishing, scheduling, and AI assist endpoints."""
import re
from datetime import datetime, timedelta, timezone

import pytest
from blogai.config import get_settings
from blogai.services.content_store import ContentStore
from blogai.services.errors import RateLimitedError

ALICE = {"X-User-Id": "alice"}
BOB = {"X-User-Id": "bob"}


@pytest.fixture
def post(db_session):
    return ContentStore(db_session).create_artifact({
        "user_id": "alice",
        "title": "Remote Work Tips",
        "slug": "remote-work-tips-1792400000000",
        "content": "# Remote Work Tips\n\nShort draft.",
        "excerpt": " Remote Work Tips\n\nShort draft.",
        "word_count": 6,
        "reading_time_minutes": 1,
    })


class TestGetPost:
    def test_owner_reads_post(self, client, post):
        resp = client.get(f"/api/v1/posts/{post.id}", headers=ALICE)
        assert resp.status_code == 200
        assert resp.json()["slug"] == post.slug

    def test_other_owner_not_found(self, client, post):
        assert client.get(f"/api/v1/posts/{post.id}", headers=BOB).status_code == 404


class TestSaveContent:
    def test_recomputes_counts(self, client, post):
        content = " ".join(["word"] * 450)
        resp = client.post(f"/api/v1/posts/{post.id}/content", json={"content": content}, headers=ALICE)
        assert resp.status_code == 200
        body = resp.json()
        assert body["word_count"] == 450
        assert body["reading_time_minutes"] == 3

    def test_title_kept_when_omitted(self, client, post):
        client.post(f"/api/v1/posts/{post.id}/content", json={"content": "new"}, headers=ALICE)
        assert client.get(f"/api/v1/posts/{post.id}", headers=ALICE).json()["title"] == "Remote Work Tips"


class TestSaveMetadata:
    def test_slug_regenerated(self, client, post):
        resp = client.post(
            f"/api/v1/posts/{post.id}/metadata",
            json={"slug": "My Custom Slug!", "meta_description": "About remote work", "category": "Work"},
            headers=ALICE,
        )
        assert resp.status_code == 200
        assert re.fullmatch(r"my-custom-slug-\d+", resp.json()["detail"])

        saved = client.get(f"/api/v1/posts/{post.id}", headers=ALICE).json()
        assert saved["meta_description"] == "About remote work"
        assert saved["category"] == "Work"


class TestPublishAndSchedule:
    def test_publish(self, client, post, monkeypatch):
        monkeypatch.setattr(get_settings(), "APP_URL", "https://blog.example.com/")
        resp = client.post(f"/api/v1/posts/{post.id}/publish", headers=ALICE)
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "published"
        assert body["public_url"] == f"https://blog.example.com/posts/{post.slug}"
        assert body["published_at"] is not None

    def test_schedule_in_future(self, client, post):
        when = (datetime.now(timezone.utc) + timedelta(days=1)).isoformat()
        resp = client.post(f"/api/v1/posts/{post.id}/schedule", json={"scheduled_at": when}, headers=ALICE)
        assert resp.status_code == 200
        assert resp.json()["status"] == "scheduled"

    def test_schedule_in_past_rejected(self, client, post):
        when = (datetime.now(timezone.utc) - timedelta(hours=1)).isoformat()
        resp = client.post(f"/api/v1/posts/{post.id}/schedule", json={"scheduled_at": when}, headers=ALICE)
        assert resp.status_code == 400

    def test_publish_other_owner(self, client, post):
        assert client.post(f"/api/v1/posts/{post.id}/publish", headers=BOB).status_code == 404


class TestAssist:
    def test_rewrite(self, client):
        resp = client.post(
            "/api/v1/ai/rewrite",
            json={"text": "Some text", "instruction": "shorten"},
            headers=ALICE,
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["original_text"] == "Some text"
        assert body["rewritten_text"] == "shorten: Some text"

    def test_rewrite_failure(self, client, fake_client):
        fake_client.error = RateLimitedError("Rate limit exceeded")
        resp = client.post(
            "/api/v1/ai/rewrite",
            json={"text": "Some text", "instruction": "expand"},
            headers=ALICE,
        )
        assert resp.status_code == 502

    def test_rewrite_requires_identity(self, client):
        resp = client.post("/api/v1/ai/rewrite", json={"text": "t", "instruction": "expand"})
        assert resp.status_code == 401

    def test_extract_keywords(self, client):
        resp = client.post(
            "/api/v1/ai/extract-keywords", json={"content": "Remote work...", "count": 1}, headers=ALICE,
        )
        assert resp.status_code == 200
        assert resp.json()["keywords"] == ["remote work"]
