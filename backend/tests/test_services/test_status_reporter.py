"""Tests for job status and progress reporting."""
from datetime import datetime, timedelta, timezone

import pytest
from blogai.services.errors import JobNotFoundError
from blogai.services.job_state import transition
from blogai.services.status_reporter import build_status, compute_progress, get_job_status

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class TestComputeProgress:
    def test_queued(self):
        assert compute_progress("queued", None, NOW) == 5

    def test_completed(self):
        assert compute_progress("completed", NOW, NOW) == 100

    def test_failed(self):
        assert compute_progress("failed", NOW, NOW) == 0

    @pytest.mark.parametrize("elapsed,expected", [
        (0, 0),
        (0.9, 0),
        (1, 15),
        (3.5, 45),
        (6, 90),
        (7, 90),
        (600, 90),
    ])
    def test_generating_climbs_and_caps(self, elapsed, expected):
        started = NOW - timedelta(seconds=elapsed)
        assert compute_progress("generating", started, NOW) == expected

    def test_generating_monotonic(self):
        started = NOW
        values = [compute_progress("generating", started, NOW + timedelta(seconds=s)) for s in range(12)]
        assert values == sorted(values)
        assert max(values) == 90

    def test_clock_skew_does_not_go_negative(self):
        assert compute_progress("generating", NOW + timedelta(seconds=5), NOW) == 0

    def test_naive_start_treated_as_utc(self):
        started = (NOW - timedelta(seconds=2)).replace(tzinfo=None)
        assert compute_progress("generating", started, NOW) == 30


class TestBuildStatus:
    def test_queued_job(self, make_job):
        job = make_job()
        status = build_status(job, NOW)
        assert status.status.value == "queued"
        assert status.progress == 5
        assert status.processing_started_at is None
        assert status.result is None and status.error is None

    def test_failed_job_exposes_error(self, make_job, job_store):
        job = make_job()
        job_store.update_lifecycle(job.id, "queued", transition("queued", "generating", NOW))
        job_store.update_lifecycle(
            job.id, "generating",
            transition("generating", "failed", NOW, error_message="Rate limit exceeded"),
        )
        status = build_status(job_store.get(job.id), NOW)
        assert status.status.value == "failed"
        assert status.error == "Rate limit exceeded"
        assert status.result is None

    def test_completed_job_exposes_result(self, make_job, job_store):
        job = make_job()
        job_store.update_lifecycle(job.id, "queued", transition("queued", "generating", NOW))
        job_store.update_lifecycle(
            job.id, "generating", transition("generating", "completed", NOW, result="# Done"),
        )
        status = build_status(job_store.get(job.id), NOW + timedelta(seconds=30))
        assert status.progress == 100
        assert status.result == "# Done"
        assert status.completed_at == NOW


class TestGetJobStatus:
    def test_owner_can_read(self, make_job, job_store):
        job = make_job(owner="alice")
        assert get_job_status(job_store, job.id, "alice", NOW).job_id == job.id

    def test_other_owner_gets_not_found(self, make_job, job_store):
        job = make_job(owner="alice")
        with pytest.raises(JobNotFoundError):
            get_job_status(job_store, job.id, "bob", NOW)

    def test_unknown_id(self, job_store):
        with pytest.raises(JobNotFoundError):
            get_job_status(job_store, "missing", "alice", NOW)
