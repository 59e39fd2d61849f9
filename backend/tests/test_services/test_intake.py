"""Tests for job intake and the daily generation quota."""
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest
from blogai.models import GenerationJob
from blogai.schemas.generation import GenerationRequest
from blogai.services.errors import JobValidationError, QuotaExceededError
from blogai.services.intake import submit_job
from blogai.services.job_state import check_invariants
from blogai.services.quota import local_day_start

UTC = ZoneInfo("UTC")
NOW = datetime(2026, 10, 19, 10, 0, tzinfo=timezone.utc)


def _request(topic="Remote work"):
    return GenerationRequest(topic=topic)


class TestSubmitJob:
    def test_creates_queued_job(self, db_session):
        job = submit_job(db_session, "alice", _request("  Remote work  "), now=NOW, tz=UTC)
        assert job.status == "queued"
        assert job.topic == "Remote work"
        assert job.processing_started_at is None
        assert check_invariants(job) == []

    def test_stores_parameters(self, db_session):
        request = GenerationRequest(
            topic="Kubernetes basics",
            tone="casual",
            length_preference="long",
            target_audience="developers, students",
            sections=["introduction", "faq_section"],
        )
        job = submit_job(db_session, "alice", request, now=NOW, tz=UTC)
        assert job.tone == "casual"
        assert job.length_preference == "long"
        assert job.target_audience == ["developers", "students"]
        assert job.sections == ["introduction", "faq_section"]

    @pytest.mark.parametrize("topic", ["", "   "])
    def test_empty_topic_rejected(self, db_session, topic):
        with pytest.raises(JobValidationError, match="Topic is required"):
            submit_job(db_session, "alice", _request(topic), now=NOW, tz=UTC)
        assert db_session.query(GenerationJob).count() == 0


class TestDailyQuota:
    def test_sixth_job_rejected(self, db_session):
        for i in range(5):
            submit_job(db_session, "alice", _request(), now=NOW + timedelta(minutes=i), tz=UTC)
        with pytest.raises(QuotaExceededError) as exc:
            submit_job(db_session, "alice", _request(), now=NOW + timedelta(minutes=10), tz=UTC)
        assert "5 posts per day" in str(exc.value)
        assert db_session.query(GenerationJob).count() == 5

    def test_quota_is_per_owner(self, db_session):
        for i in range(5):
            submit_job(db_session, "alice", _request(), now=NOW + timedelta(minutes=i), tz=UTC)
        job = submit_job(db_session, "bob", _request(), now=NOW, tz=UTC)
        assert job.user_id == "bob"

    def test_resets_next_day(self, db_session):
        for i in range(5):
            submit_job(db_session, "alice", _request(), now=NOW + timedelta(minutes=i), tz=UTC)
        tomorrow = datetime(2026, 10, 20, 0, 0, 1, tzinfo=timezone.utc)
        assert submit_job(db_session, "alice", _request(), now=tomorrow, tz=UTC).status == "queued"

    def test_failed_jobs_still_count(self, db_session, job_store):
        for i in range(5):
            job = submit_job(db_session, "alice", _request(), now=NOW + timedelta(minutes=i), tz=UTC)
            job_store.update_lifecycle(job.id, "queued", {"status": "generating", "processing_started_at": NOW})
            job_store.update_lifecycle(
                job.id, "generating", {"status": "failed", "error_message": "boom", "completed_at": NOW},
            )
        with pytest.raises(QuotaExceededError):
            submit_job(db_session, "alice", _request(), now=NOW + timedelta(hours=1), tz=UTC)

    def test_custom_limit(self, db_session):
        submit_job(db_session, "alice", _request(), now=NOW, daily_limit=1, tz=UTC)
        with pytest.raises(QuotaExceededError):
            submit_job(db_session, "alice", _request(), now=NOW, daily_limit=1, tz=UTC)

    def test_day_boundary_follows_timezone(self, db_session):
        new_york = ZoneInfo("America/New_York")
        # 23:00 on Oct 18 in New York; same local day as the jobs below
        late_evening = datetime(2026, 10, 19, 3, 0, tzinfo=timezone.utc)
        for i in range(5):
            submit_job(db_session, "alice", _request(), now=late_evening - timedelta(hours=i), tz=new_york)
        with pytest.raises(QuotaExceededError):
            submit_job(db_session, "alice", _request(), now=late_evening, tz=new_york)
        # 00:30 on Oct 19 in New York
        after_midnight = datetime(2026, 10, 19, 4, 30, tzinfo=timezone.utc)
        assert submit_job(db_session, "alice", _request(), now=after_midnight, tz=new_york)


class TestLocalDayStart:
    def test_utc(self):
        assert local_day_start(NOW, UTC) == datetime(2026, 10, 19, tzinfo=timezone.utc)

    def test_offset_zone(self):
        start = local_day_start(datetime(2026, 10, 19, 3, 0, tzinfo=timezone.utc), ZoneInfo("America/New_York"))
        assert start == datetime(2026, 10, 18, 4, 0, tzinfo=timezone.utc)
